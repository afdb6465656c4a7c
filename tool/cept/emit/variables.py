"""
変数スコープ — 記録変数名と生成コード上の格納式の対応

Selenium IDE の store 系コマンドで記録された変数は、生成される Cest クラスの
``$this->vars`` 配列に格納する。VariableScope は変数名から

  - 読み出し式: ``$this->vars['name']``
  - 書き込み文: ``$this->vars['name'] = <expr>;``

を生成する。エクスポート 1 回につき 1 インスタンスを新規に生成し、
複数のエクスポート間で共有しない。
"""

from __future__ import annotations

import logging

from .literals import php_string

logger = logging.getLogger(__name__)

# 変数読み出し式の接頭辞（キー列の正規化で変数参照トークンの判定に使用）
VARIABLE_PREFIX = "$this->vars["

# ウィンドウハンドル取得前のスナップショットを保持する予約スロット
WINDOW_HANDLES_SLOT = "windowHandles"


class VariableScope:
    """生成コードにおける変数の読み書き式を生成する。

    書き込まれた変数名は記録しておき、エクスポート結果の参照や
    デバッグに利用できる。式の生成自体は状態に依存しないため、
    同じ引数で呼び出せば常に同じテキストを返す。
    """

    def __init__(self) -> None:
        self._written: list[str] = []

    def read(self, name: str) -> str:
        """変数の読み出し式を返す。"""
        return f"{VARIABLE_PREFIX}{php_string(name)}]"

    def write(self, name: str | None, value: str) -> str:
        """変数への書き込み文を返す。

        変数名が空の場合は何も生成しない（空文字列を返す）。

        Args:
            name: 記録変数名
            value: 代入する PHP 式

        Returns:
            ``$this->vars['name'] = value;`` 形式の文、または空文字列
        """
        if not name:
            return ""
        if name not in self._written:
            self._written.append(name)
            logger.debug("変数 '%s' への書き込みを生成しました", name)
        return f"{self.read(name)} = {value};"

    def is_reference(self, expression: str) -> bool:
        """式が変数読み出し式かどうかを返す。"""
        return expression.startswith(VARIABLE_PREFIX)

    @property
    def written(self) -> list[str]:
        """書き込みが生成された変数名（初出順）のコピーを返す。"""
        return list(self._written)
