"""
リテラル生成のテスト

PHP シングルクォートリテラルへのエスケープ、${name} の連結展開、
メソッド名の正規化、ミリ秒 → 秒の変換を検証する。
"""

from __future__ import annotations

import re

import pytest
from hypothesis import given, settings

from cept.emit.literals import (
    milliseconds_to_seconds,
    php_string,
    php_text,
    sanitize_name,
    single_variable,
)
from cept.emit.variables import VariableScope
from conftest import recorded_texts

_ESCAPED = re.compile(r"\\(.)")


def _decode_php_string(literal: str) -> str:
    """PHP シングルクォートリテラルを元の文字列に戻す（テスト用）。"""
    assert literal.startswith("'") and literal.endswith("'")
    return _ESCAPED.sub(lambda m: m.group(1), literal[1:-1])


class TestPhpString:
    """php_string() のエスケープ方針テスト。"""

    def test_plain_text(self):
        assert php_string("hello") == "'hello'"

    def test_single_quote_is_escaped(self):
        assert php_string("it's") == "'it\\'s'"

    def test_backslash_is_escaped(self):
        assert php_string("a\\b") == "'a\\\\b'"

    def test_dollar_is_kept(self):
        """シングルクォート内では $ が展開されないためそのまま出力されること。"""
        assert php_string("$price") == "'$price'"

    @given(value=recorded_texts)
    @settings(max_examples=200)
    def test_roundtrip_recovers_original(self, value: str):
        """エスケープを戻すと元の文字列に一致すること。"""
        assert _decode_php_string(php_string(value)) == value

    @given(value=recorded_texts)
    @settings(max_examples=200)
    def test_no_unescaped_quote_inside(self, value: str):
        """リテラル内部に未エスケープのシングルクォートが残らないこと。"""
        body = _ESCAPED.sub("", php_string(value)[1:-1])
        assert "'" not in body


class TestPhpText:
    """php_text() の変数展開テスト。"""

    def setup_method(self):
        self.lookup = VariableScope().read

    def test_text_without_variables(self):
        assert php_text("hello", self.lookup) == "'hello'"

    def test_variable_is_concatenated(self):
        assert php_text("Hello ${name}!", self.lookup) == (
            "'Hello ' . $this->vars['name'] . '!'"
        )

    def test_single_variable_is_read_expression(self):
        assert php_text("${x}", self.lookup) == "$this->vars['x']"

    def test_adjacent_variables(self):
        assert php_text("${a}${b}", self.lookup) == "$this->vars['a'] . $this->vars['b']"

    def test_empty_text(self):
        assert php_text("", self.lookup) == "''"


class TestSingleVariable:

    def test_whole_reference(self):
        assert single_variable("${count}") == "count"

    def test_partial_reference(self):
        assert single_variable("n=${count}") is None

    def test_empty(self):
        assert single_variable("") is None


class TestSanitizeName:
    """sanitize_name() のメソッド名正規化テスト。"""

    def test_removes_non_identifier_characters(self):
        assert sanitize_name("my test-1") == "mytest1"

    def test_leading_digit_is_prefixed(self):
        assert sanitize_name("1st login") == "_1stlogin"

    def test_underscore_is_kept(self):
        assert sanitize_name("log_in") == "log_in"

    def test_nothing_left_raises(self):
        with pytest.raises(ValueError):
            sanitize_name("!!!")


class TestMillisecondsToSeconds:
    """milliseconds_to_seconds() の変換テスト。"""

    @pytest.mark.parametrize(
        "value, expected",
        [("2000", "2"), ("1500", "1.5"), ("250", "0.25"), (3000, "3"), (" 1000 ", "1")],
    )
    def test_conversion(self, value, expected):
        assert milliseconds_to_seconds(value) == expected

    def test_empty_uses_default(self):
        assert milliseconds_to_seconds("", default=30) == "30"

    def test_none_uses_zero(self):
        assert milliseconds_to_seconds(None) == "0"

    def test_non_numeric_raises(self):
        with pytest.raises(ValueError):
            milliseconds_to_seconds("soon")
