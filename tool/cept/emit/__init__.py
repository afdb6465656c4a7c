"""
コマンド生成エンジン

記録ステップを PHP Codeception の文に変換するジェネレータ群と、その補助機構を提供する。

主要エクスポート:
  - EmitterRegistry: コマンド名 → ジェネレータの登録・検索・生成
  - EmitContext: ジェネレータに注入される依存
  - EmissionBlock / LeveledStatement: 複数行の生成結果
  - VariableScope: 変数の読み書き式
  - create_default_registry: 標準コマンド登録済みレジストリの生成
"""

from .commands import create_default_registry, register_standard_commands
from .errors import EmitError, LocatorSyntaxError, UnsupportedAddressingError, UnsupportedCommandError
from .registry import EmitContext, EmitterFn, EmitterInfo, EmitterRegistry
from .results import EmissionBlock, EmissionResult, LeveledStatement, MethodDefinition
from .variables import VariableScope

__all__ = [
    "EmissionBlock",
    "EmissionResult",
    "EmitContext",
    "EmitError",
    "EmitterFn",
    "EmitterInfo",
    "EmitterRegistry",
    "LeveledStatement",
    "LocatorSyntaxError",
    "MethodDefinition",
    "UnsupportedAddressingError",
    "UnsupportedCommandError",
    "VariableScope",
    "create_default_registry",
    "register_standard_commands",
]
