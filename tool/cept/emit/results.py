"""
生成結果の型定義

1 ステップの生成結果（EmissionResult）は次のいずれか:

  - None: 出力なし（対応する生成コードがないステップ）
  - str: 1 行の文
  - EmissionBlock: 相対インデントレベル付きの文の並びと、
    ブロックの前後で周囲のインデントをどれだけずらすかの調整値

調整値は if/end などの入れ子を表現するための差分であり、
ジェネレータは現在の入れ子の深さを知る必要がない。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class LeveledStatement:
    """相対インデントレベル付きの 1 文。

    Attributes:
        level: ブロック内での相対インデントレベル（0 始まり）
        text: 生成された文
    """

    level: int
    text: str


@dataclass(frozen=True)
class EmissionBlock:
    """複数行の生成結果。

    Attributes:
        statements: 出力順の文
        starting_level_adjustment: 最初の文の前に周囲のレベルへ加算する値
        ending_level_adjustment: 最後の文の後に周囲のレベルへ加算する値
    """

    statements: tuple[LeveledStatement, ...]
    starting_level_adjustment: int = 0
    ending_level_adjustment: int = 0

    @classmethod
    def of(
        cls,
        *statements: tuple[int, str],
        starting_level_adjustment: int = 0,
        ending_level_adjustment: int = 0,
    ) -> "EmissionBlock":
        """``(level, text)`` のタプル列からブロックを生成する。"""
        return cls(
            statements=tuple(LeveledStatement(level, text) for level, text in statements),
            starting_level_adjustment=starting_level_adjustment,
            ending_level_adjustment=ending_level_adjustment,
        )

    @property
    def lines(self) -> list[str]:
        """文のテキストのみを出力順に返す。"""
        return [s.text for s in self.statements]


EmissionResult = Optional[Union[str, EmissionBlock]]
"""1 ステップの生成結果。"""


@dataclass(frozen=True)
class MethodDefinition:
    """生成クラスに追加する補助メソッドの定義。

    Attributes:
        name: メソッド名
        declaration: シグネチャ行（``private function ...``）
        statements: 本体の文（レベルはメソッド本体からの相対値）
    """

    name: str
    declaration: str
    statements: tuple[LeveledStatement, ...] = field(default=())


def as_block(result: EmissionResult) -> EmissionBlock:
    """生成結果をブロック形式に正規化する。None は空ブロックになる。"""
    if result is None:
        return EmissionBlock(statements=())
    if isinstance(result, str):
        return EmissionBlock.of((0, result))
    return result
