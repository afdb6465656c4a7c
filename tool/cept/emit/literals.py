"""
リテラル生成 — 記録値を PHP 文字列リテラルへ変換

記録されたテキストを生成コードへ埋め込む際のエスケープ方針をここに集約する。
全ジェネレータはこのモジュールを経由して文字列を埋め込む。

方針:
  - すべての文字列は PHP のシングルクォートリテラルとして出力する
  - エスケープ対象は ``\\`` と ``'`` のみ（シングルクォート内では ``$`` も展開されない）
  - テキスト中の ``${name}`` は変数読み出し式との連結（``.``）に置き換える
"""

from __future__ import annotations

import re
from typing import Callable

# ${name} 形式の変数参照
VARIABLE_REFERENCE = re.compile(r"\$\{([^}]+)\}")

# 生成メソッド名として使えない文字
_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]+")


def php_string(value: str) -> str:
    """文字列を PHP のシングルクォートリテラルに変換する。

    Args:
        value: 埋め込む文字列

    Returns:
        ``'...'`` 形式の PHP リテラル
    """
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def php_text(value: str, variable_lookup: Callable[[str], str]) -> str:
    """変数参照を含むテキストを PHP 式に変換する。

    ``${name}`` はそれぞれ variable_lookup の結果に置き換え、
    前後のリテラル部分と ``.`` で連結する。

    Args:
        value: 記録されたテキスト
        variable_lookup: 変数名 → 読み出し式

    Returns:
        PHP 式
    """
    parts: list[str] = []
    position = 0
    for match in VARIABLE_REFERENCE.finditer(value):
        if match.start() > position:
            parts.append(php_string(value[position:match.start()]))
        parts.append(variable_lookup(match.group(1)))
        position = match.end()
    if position < len(value):
        parts.append(php_string(value[position:]))

    if not parts:
        return php_string("")
    return " . ".join(parts)


def single_variable(value: str) -> str | None:
    """テキスト全体が単一の ``${name}`` ならその変数名を返す。"""
    match = VARIABLE_REFERENCE.fullmatch(value or "")
    return match.group(1) if match else None


def sanitize_name(name: str) -> str:
    """テスト名を PHP のメソッド名として使える識別子に変換する。

    英数字とアンダースコア以外を除去し、先頭が数字の場合は ``_`` を付与する。

    Raises:
        ValueError: 識別子に使える文字が一つも残らない場合
    """
    sanitized = _NON_IDENTIFIER.sub("", name)
    if not sanitized:
        raise ValueError(f"メソッド名に変換できないテスト名です: {name!r}")
    if sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


def identifier_suffix(text: str) -> str:
    """識別子の後半に使える文字（英数字とアンダースコア）だけを残す。"""
    return _NON_IDENTIFIER.sub("", text or "")


def milliseconds_to_seconds(value: str | int | None, default: float = 0) -> str:
    """ミリ秒指定を Codeception の秒指定（数値リテラル）に変換する。

    空値は default を使用する。整数秒になる場合は小数点を付けない。

    Raises:
        ValueError: 数値として解釈できない場合
    """
    if value is None or str(value).strip() == "":
        seconds = float(default)
    else:
        try:
            seconds = float(str(value).strip()) / 1000
        except ValueError as e:
            raise ValueError(f"タイムアウト値が数値ではありません: {value!r}") from e

    if seconds.is_integer():
        return str(int(seconds))
    return f"{seconds:g}"
