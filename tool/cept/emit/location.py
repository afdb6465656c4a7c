"""
ロケータ / 選択肢リゾルバ — 記録ロケータを WebDriverBy 式に変換

コマンドジェネレータが利用する 2 つの外部協調者の契約と既定実装を提供する。

  - LocatorResolver: ``css=#login`` → ``WebDriverBy::cssSelector('#login')``
  - SelectionResolver: ``index=0`` → ``WebDriverBy::xpath('(.//option)[1]')``

どちらも非同期で解決し、構文を解釈できない場合は LocatorSyntaxError を送出する。
差し替えたい場合は同じメソッドを持つオブジェクトを EmitContext に渡せばよい。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .errors import LocatorSyntaxError
from .literals import php_string


# ---------------------------------------------------------------------------
# 契約
# ---------------------------------------------------------------------------

@runtime_checkable
class LocatorResolver(Protocol):
    """要素ロケータを検索式に変換するリゾルバ。"""

    async def resolve(self, locator: str) -> str:
        ...


@runtime_checkable
class SelectionResolver(Protocol):
    """select の選択肢指定を検索式に変換するリゾルバ。"""

    async def resolve(self, option: str) -> str:
        ...


# ---------------------------------------------------------------------------
# 既定実装
# ---------------------------------------------------------------------------

# ロケータ戦略名 → WebDriverBy のファクトリメソッド名
_LOCATOR_STRATEGIES: dict[str, str] = {
    "id": "id",
    "name": "name",
    "css": "cssSelector",
    "xpath": "xpath",
    "link": "linkText",
    "linkText": "linkText",
    "partialLinkText": "partialLinkText",
}


def _split_strategy(locator: str) -> tuple[str, str]:
    """``strategy=value`` 形式を分解する。``=`` がなければ例外を送出する。"""
    strategy, separator, value = locator.partition("=")
    if not separator:
        raise LocatorSyntaxError(f"ロケータの形式が不正です（strategy=value）: {locator!r}")
    return strategy, value


def xpath_literal(value: str) -> str:
    """文字列を XPath の文字列リテラルに変換する。

    両方の引用符を含む場合は concat() で組み立てる。
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    joined = ", \"'\", ".join(f"'{part}'" for part in parts)
    return f"concat({joined})"


class WebDriverByLocator:
    """Selenium IDE 形式のロケータを php-webdriver の WebDriverBy 式に変換する。

    対応形式: id= / name= / css= / xpath= / link= / linkText= / partialLinkText=
    および ``//`` で始まる暗黙の XPath。
    """

    async def resolve(self, locator: str) -> str:
        if not locator:
            raise LocatorSyntaxError("ロケータが空です")
        if locator.startswith("//"):
            return f"WebDriverBy::xpath({php_string(locator)})"

        strategy, value = _split_strategy(locator)
        method = _LOCATOR_STRATEGIES.get(strategy)
        if method is None:
            raise LocatorSyntaxError(
                f"未知のロケータ戦略です: {strategy!r}"
                f"（対応: {', '.join(sorted(_LOCATOR_STRATEGIES))}）"
            )
        return f"WebDriverBy::{method}({php_string(value)})"


class OptionSelection:
    """select の選択肢指定を option 要素の WebDriverBy 式に変換する。

    対応形式: label= / value= / id= / index=。接頭辞がない場合は label として扱う。
    """

    async def resolve(self, option: str) -> str:
        if not option:
            raise LocatorSyntaxError("選択肢の指定が空です")

        strategy, separator, value = option.partition("=")
        if not separator:
            strategy, value = "label", option

        if strategy == "label":
            xpath = f".//option[. = {xpath_literal(value)}]"
        elif strategy == "value":
            xpath = f".//option[@value = {xpath_literal(value)}]"
        elif strategy == "id":
            xpath = f".//option[@id = {xpath_literal(value)}]"
        elif strategy == "index":
            if not value.strip().isdigit():
                raise LocatorSyntaxError(f"index は 0 以上の整数で指定してください: {option!r}")
            xpath = f"(.//option)[{int(value) + 1}]"
        else:
            raise LocatorSyntaxError(f"未知の選択肢指定です: {strategy!r}")

        return f"WebDriverBy::xpath({php_string(xpath)})"
