"""
キー入力の正規化 — sendKeys / type の引数式を生成

記録値 ``abc${KEY_ENTER}${name}`` は次のトークン列（KeyToken）に分解される:

  - ``abc``                  リテラル
  - ``Key['ENTER']``         キー名（str() はラッパー形式）
  - ``$this->vars['name']``  変数読み出し式

generate_send_keys_input() はトークン列（またはスカラー値）を
Codeception ``pressKey`` に渡せる引数式へ変換する。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from .literals import VARIABLE_REFERENCE, php_string
from .variables import VARIABLE_PREFIX

# ${KEY_ENTER} のキー接頭辞
_KEY_REFERENCE_PREFIX = "KEY_"

# Selenium IDE のキー名 → php-webdriver WebDriverKeys 定数名（同名のものは省略）
_KEY_ALIASES: dict[str, str] = {
    "BKSP": "BACKSPACE",
    "BACK_SPACE": "BACKSPACE",
    "ESC": "ESCAPE",
    "DEL": "DELETE",
    "INS": "INSERT",
    "CTRL": "CONTROL",
    "PGUP": "PAGE_UP",
    "PGDN": "PAGE_DOWN",
    "RETURN": "RETURN_KEY",
    "NUM_PLUS": "ADD",
    "NUM_MINUS": "SUBTRACT",
    "NUM_MULTIPLY": "MULTIPLY",
    "NUM_DIVISION": "DIVIDE",
    "NUM_PERIOD": "DECIMAL",
    "SEMICOLON": "SEMICOLON",
    "EQUALS": "EQUALS",
    **{f"N{i}": f"NUMPAD{i}" for i in range(10)},
    **{f"NUM{i}": f"NUMPAD{i}" for i in range(10)},
}

class KeyTokenKind(Enum):
    """キー入力トークンの種類。"""

    LITERAL = "literal"
    KEY = "key"
    VARIABLE = "variable"


@dataclass(frozen=True)
class KeyToken:
    """キー入力の 1 トークン。

    Attributes:
        kind: トークンの種類
        text: リテラル文字列、キー名、または変数読み出し式
    """

    kind: KeyTokenKind
    text: str

    def __str__(self) -> str:
        if self.kind is KeyTokenKind.KEY:
            return f"Key['{self.text}']"
        return self.text


KeyInput = Union[str, list[KeyToken]]


def key_constant(key_name: str) -> str:
    """Selenium IDE のキー名を WebDriverKeys 定数式に変換する。"""
    name = key_name.strip().upper()
    return f"WebDriverKeys::{_KEY_ALIASES.get(name, name)}"


def split_key_sequence(text: str, variable_lookup: Callable[[str], str]) -> list[KeyToken]:
    """記録されたキー入力テキストをトークン列に分解する。

    リテラル部分は内容にかかわらず LITERAL として扱い、出力時に必ずエスケープされる。

    Args:
        text: 記録値（``${KEY_X}`` / ``${name}`` を含みうる）
        variable_lookup: 変数名 → 読み出し式

    Returns:
        リテラル・キー名・変数読み出し式のトークン列
    """
    text = text or ""
    tokens: list[KeyToken] = []
    position = 0
    for match in VARIABLE_REFERENCE.finditer(text):
        if match.start() > position:
            tokens.append(KeyToken(KeyTokenKind.LITERAL, text[position:match.start()]))
        reference = match.group(1)
        if reference.startswith(_KEY_REFERENCE_PREFIX):
            tokens.append(KeyToken(KeyTokenKind.KEY, reference[len(_KEY_REFERENCE_PREFIX):]))
        else:
            tokens.append(KeyToken(KeyTokenKind.VARIABLE, variable_lookup(reference)))
        position = match.end()
    if position < len(text):
        tokens.append(KeyToken(KeyTokenKind.LITERAL, text[position:]))
    return tokens


def generate_send_keys_input(value: KeyInput) -> str:
    """キー入力値を引数式に変換する。

    リストの場合は各トークンを変換して ``, `` で連結する。
    スカラーの場合は変数読み出し式ならそのまま、それ以外はリテラルにする。
    """
    if isinstance(value, list):
        if not value:
            return php_string("")
        return ", ".join(_token_expression(token) for token in value)

    if value.startswith(VARIABLE_PREFIX):
        return value
    return php_string(value)


def _token_expression(token: KeyToken) -> str:
    if token.kind is KeyTokenKind.VARIABLE:
        return token.text
    if token.kind is KeyTokenKind.KEY:
        return key_constant(token.text)
    return php_string(token.text)
