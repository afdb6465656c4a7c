"""
ロケータ / 選択肢リゾルバのテスト
"""

from __future__ import annotations

import asyncio

import pytest

from cept.emit.errors import LocatorSyntaxError
from cept.emit.location import (
    LocatorResolver,
    OptionSelection,
    SelectionResolver,
    WebDriverByLocator,
    xpath_literal,
)


def _locate(locator: str) -> str:
    return asyncio.run(WebDriverByLocator().resolve(locator))


def _select(option: str) -> str:
    return asyncio.run(OptionSelection().resolve(option))


class TestWebDriverByLocator:
    """Selenium IDE ロケータ → WebDriverBy 式の変換テスト。"""

    @pytest.mark.parametrize(
        "locator, expected",
        [
            ("id=login", "WebDriverBy::id('login')"),
            ("name=q", "WebDriverBy::name('q')"),
            ("css=div > a", "WebDriverBy::cssSelector('div > a')"),
            ("css=input[name=q]", "WebDriverBy::cssSelector('input[name=q]')"),
            ("xpath=//b", "WebDriverBy::xpath('//b')"),
            ("link=Help", "WebDriverBy::linkText('Help')"),
            ("linkText=Help", "WebDriverBy::linkText('Help')"),
            ("partialLinkText=He", "WebDriverBy::partialLinkText('He')"),
        ],
    )
    def test_strategies(self, locator, expected):
        assert _locate(locator) == expected

    def test_bare_xpath(self):
        assert _locate("//a[@href='x']") == "WebDriverBy::xpath('//a[@href=\\'x\\']')"

    @pytest.mark.parametrize("locator", ["", "login", "tag=div"])
    def test_invalid_locator_raises(self, locator):
        with pytest.raises(LocatorSyntaxError):
            _locate(locator)

    def test_satisfies_protocol(self):
        assert isinstance(WebDriverByLocator(), LocatorResolver)


class TestOptionSelection:
    """select 選択肢指定の変換テスト。"""

    def test_label(self):
        assert _select("label=Two") == "WebDriverBy::xpath('.//option[. = \\'Two\\']')"

    def test_bare_text_is_label(self):
        assert _select("Two") == _select("label=Two")

    def test_value(self):
        assert _select("value=2") == "WebDriverBy::xpath('.//option[@value = \\'2\\']')"

    def test_id(self):
        assert _select("id=opt") == "WebDriverBy::xpath('.//option[@id = \\'opt\\']')"

    def test_index_is_one_based_in_xpath(self):
        assert _select("index=0") == "WebDriverBy::xpath('(.//option)[1]')"

    @pytest.mark.parametrize("option", ["", "index=x", "text=Two"])
    def test_invalid_option_raises(self, option):
        with pytest.raises(LocatorSyntaxError):
            _select(option)

    def test_satisfies_protocol(self):
        assert isinstance(OptionSelection(), SelectionResolver)


class TestXpathLiteral:

    def test_plain(self):
        assert xpath_literal("abc") == "'abc'"

    def test_single_quote(self):
        assert xpath_literal("it's") == '"it\'s"'

    def test_both_quotes(self):
        assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"
