"""
コード生成時エラーの定義

生成時のエラーは emit() の呼び出し元へ同期的に伝播する。
未対応コマンドは通常はスキップ扱いとし、strict モードの場合のみ
UnsupportedCommandError として送出する。
"""

from __future__ import annotations


class EmitError(Exception):
    """コード生成に失敗した場合の基底例外。"""


class UnsupportedAddressingError(EmitError):
    """ウィンドウ/フレームの指定形式がどのアドレッシングモードにも一致しない。

    Attributes:
        target: 記録されたターゲット文字列
    """

    def __init__(self, target: str, message: str | None = None) -> None:
        self.target = target
        super().__init__(
            message or f"未対応のウィンドウ指定です（handle= / name= / win_ser_ のみ対応）: {target!r}"
        )


class LocatorSyntaxError(EmitError):
    """ロケータ / 選択肢指定の構文を解釈できない。"""


class UnsupportedCommandError(EmitError):
    """登録済みジェネレータが存在しないコマンド（strict モード時のみ送出）。

    Attributes:
        command: コマンド名
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"未対応のコマンドです: {command}")
