"""
コマンドジェネレータレジストリ — コマンド名 → ジェネレータの対応表

記録コマンド名ごとに登録されたジェネレータを呼び出し、生成結果を返す。
register() で後から登録したものが優先されるため、対応表本体を変更せずに
コマンドの追加や上書きができる。

主な構成:
  - EmitterFn Protocol: ジェネレータの共通インターフェース
  - EmitContext: ジェネレータに注入される依存（変数スコープ、ウィンドウ捕捉、リゾルバ）
  - EmitterInfo: コマンドのメタ情報（名前、説明、カテゴリ）
  - EmitterRegistry: 登録・検索・一覧・生成
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from .literals import php_text
from .location import LocatorResolver, OptionSelection, SelectionResolver, WebDriverByLocator
from .results import EmissionResult
from .scripts import ScriptSource
from .variables import VariableScope
from .window import emit_new_window_handling

if TYPE_CHECKING:
    from ..side.schema import Step

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 生成コンテキスト
# ---------------------------------------------------------------------------

@dataclass
class EmitContext:
    """ジェネレータに渡される依存のまとめ。

    Attributes:
        variables: エクスポート単位の変数スコープ
        location: 要素ロケータのリゾルバ
        selection: select 選択肢のリゾルバ
        base_url: open の相対 URL に前置するベース URL
        wait_for_text_timeout: waitForText の既定タイムアウト（秒）
        wait_timeout: 待機時間の記録がない waitForElement* のタイムアウト（秒）
    """

    variables: VariableScope = field(default_factory=VariableScope)
    location: LocatorResolver = field(default_factory=WebDriverByLocator)
    selection: SelectionResolver = field(default_factory=OptionSelection)
    base_url: str = ""
    wait_for_text_timeout: int = 30
    wait_timeout: int = 30
    _loop_count: int = field(default=0, init=False, repr=False)

    def next_loop_counter(self) -> str:
        """ID のない times 用のループカウンタ名を生成順に返す（$i, $i1, $i2, ...）。"""
        name = f"$i{self._loop_count}" if self._loop_count else "$i"
        self._loop_count += 1
        return name

    def variable_lookup(self, name: str) -> str:
        """変数の読み出し式を返す。"""
        return self.variables.read(name)

    def text(self, value: Optional[str]) -> str:
        """記録テキストを PHP 式に変換する（``${name}`` は変数読み出しと連結）。"""
        return php_text(value or "", self.variable_lookup)

    def script(self, step: Step) -> ScriptSource:
        """ステップのスクリプト本文を返す。事前解析済みでなければ target から解析する。"""
        if step.script is not None:
            return step.script
        return ScriptSource.parse(step.target or "")

    async def emit_new_window_handling(self, step: Step, emitted: EmissionResult) -> EmissionResult:
        """生成結果を新規ウィンドウ捕捉の前後処理で包む。"""
        return emit_new_window_handling(step, emitted, self.variables)


# ---------------------------------------------------------------------------
# コマンドのメタ情報
# ---------------------------------------------------------------------------

@dataclass
class EmitterInfo:
    """コマンドのメタ情報。

    Attributes:
        name: 記録コマンド名
        description: 説明文
        category: カテゴリ（navigation, action, assertion, control-flow, script, store, wait, dialog, misc, no-op）
    """

    name: str
    description: str
    category: str


# ---------------------------------------------------------------------------
# ジェネレータ Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class EmitterFn(Protocol):
    """ジェネレータの共通インターフェース。

    ステップとコンテキストのみから生成結果を作る純粋な非同期関数であること。
    """

    async def __call__(self, step: Step, context: EmitContext) -> EmissionResult:
        ...


# ---------------------------------------------------------------------------
# EmitterRegistry 本体
# ---------------------------------------------------------------------------

class EmitterRegistry:
    """コマンド名とジェネレータの対応表。

    使用例::

        registry = EmitterRegistry()
        registry.register("click", emit_click, info=EmitterInfo(...))
        if registry.can_emit(step.name):
            result = await registry.emit(step, context)
    """

    def __init__(self) -> None:
        self._emitters: dict[str, EmitterFn] = {}
        self._info: dict[str, EmitterInfo] = {}

    def register(
        self,
        name: str,
        emitter: EmitterFn,
        *,
        info: Optional[EmitterInfo] = None,
    ) -> None:
        """ジェネレータを登録する。

        同名のジェネレータが既に登録されている場合は上書きする（警告を出力）。

        Args:
            name: 記録コマンド名
            emitter: ジェネレータ
            info: メタ情報。None の場合は既存の情報かデフォルト値を使用

        Raises:
            TypeError: emitter が呼び出し可能でない場合
        """
        if not callable(emitter):
            raise TypeError(
                f"emitter は呼び出し可能である必要があります: {type(emitter).__name__}"
            )

        if name in self._emitters:
            logger.warning(
                "コマンド '%s' のジェネレータを上書きします（既存: %s → 新規: %s）",
                name,
                getattr(self._emitters[name], "__name__", type(self._emitters[name]).__name__),
                getattr(emitter, "__name__", type(emitter).__name__),
            )

        self._emitters[name] = emitter

        if info is not None:
            self._info[name] = info
        elif name not in self._info:
            self._info[name] = EmitterInfo(
                name=name,
                description=f"{name} コマンド",
                category="unknown",
            )

        logger.debug("コマンド '%s' を登録しました", name)

    def can_emit(self, name: str) -> bool:
        """コマンドに対応するジェネレータが登録されているかを返す。"""
        return name in self._emitters

    def get(self, name: str) -> EmitterFn:
        """名前でジェネレータを取得する。

        Raises:
            KeyError: 指定名のジェネレータが未登録の場合
        """
        if name not in self._emitters:
            raise KeyError(f"コマンド '{name}' は登録されていません")
        return self._emitters[name]

    async def emit(self, step: Step, context: EmitContext) -> EmissionResult:
        """ステップに対応するコードを生成する。

        未登録のコマンドは例外とせず None を返す（呼び出し元でスキップ扱い）。
        ステップに opensWindow が付いている場合は新規ウィンドウ捕捉で包む。
        ジェネレータが送出した例外はそのまま伝播する。

        Args:
            step: 記録ステップ
            context: 生成コンテキスト

        Returns:
            生成結果
        """
        emitter = self._emitters.get(step.name)
        if emitter is None:
            logger.warning("未対応のコマンドをスキップします: %s", step.name)
            return None

        result = await emitter(step, context)
        if step.opens_window:
            result = await context.emit_new_window_handling(step, result)
        return result

    def list_all(self) -> list[EmitterInfo]:
        """登録済み全コマンドのメタ情報を名前順で返す。"""
        return sorted(self._info.values(), key=lambda i: i.name)

    @property
    def names(self) -> list[str]:
        """登録済み全コマンド名をソート済みリストで返す。"""
        return sorted(self._emitters.keys())
