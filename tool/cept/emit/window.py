"""
新規ウィンドウ捕捉 — ウィンドウを開くステップのラップと待機メソッド

opensWindow が付いたステップは、生成コードの実行時に次の順序で動作する:

  1. 既知のウィンドウハンドル一覧を予約スロット windowHandles に退避
  2. 元のステップ（クリック等）を実行
  3. waitForWindow() で新しいハンドルの出現を待ち、windowHandleName 変数に格納

新しいハンドルがタイムアウトまでに現れない場合、生成コードが例外を送出する。
これは生成時ではなく実行時のエラーである。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .literals import milliseconds_to_seconds
from .results import EmissionBlock, EmissionResult, LeveledStatement, MethodDefinition, as_block
from .variables import WINDOW_HANDLES_SLOT, VariableScope

if TYPE_CHECKING:
    from ..side.schema import Step

# 生成クラスの補助メソッド呼び出し式
ALL_WINDOW_HANDLES = "$this->windowHandles($I)"

# waitForWindow の既定タイムアウト（ミリ秒）
DEFAULT_WINDOW_TIMEOUT_MS = 2000


def emit_new_window_handling(
    step: Step,
    emitted: EmissionResult,
    variables: VariableScope,
) -> EmissionBlock:
    """生成済みの結果を新規ウィンドウ捕捉の前後処理で包む。

    Args:
        step: opensWindow 付きのステップ
        emitted: 元のジェネレータの生成結果
        variables: 変数スコープ

    Returns:
        スナップショット → 元の文 → 新規ハンドル格納 のブロック
    """
    inner = as_block(emitted)
    timeout = milliseconds_to_seconds(
        step.window_timeout if step.window_timeout is not None else DEFAULT_WINDOW_TIMEOUT_MS
    )

    statements = [LeveledStatement(0, variables.write(WINDOW_HANDLES_SLOT, ALL_WINDOW_HANDLES))]
    statements.extend(inner.statements)
    if step.window_handle_name:
        statements.append(
            LeveledStatement(
                0,
                variables.write(step.window_handle_name, f"$this->waitForWindow($I, {timeout})"),
            )
        )
    else:
        statements.append(LeveledStatement(0, f"$this->waitForWindow($I, {timeout});"))

    return EmissionBlock(
        statements=tuple(statements),
        starting_level_adjustment=inner.starting_level_adjustment,
        ending_level_adjustment=inner.ending_level_adjustment,
    )


def emit_wait_for_window(tester_class: str = "AcceptanceTester") -> MethodDefinition:
    """生成クラスに追加する waitForWindow() の定義を返す。"""
    return MethodDefinition(
        name="waitForWindow",
        declaration=f"private function waitForWindow({tester_class} $I, $timeout = 2)",
        statements=(
            LeveledStatement(0, "$I->wait($timeout);"),
            LeveledStatement(0, f"$handlesThen = $this->vars['{WINDOW_HANDLES_SLOT}'];"),
            LeveledStatement(0, f"$handlesNow = {ALL_WINDOW_HANDLES};"),
            LeveledStatement(0, "if (count($handlesNow) > count($handlesThen)) {"),
            LeveledStatement(1, "return array_values(array_diff($handlesNow, $handlesThen))[0];"),
            LeveledStatement(0, "}"),
            LeveledStatement(0, "throw new \\RuntimeException('New window did not appear before timeout');"),
        ),
    )


def emit_window_handles(tester_class: str = "AcceptanceTester") -> MethodDefinition:
    """既知のウィンドウハンドル一覧を返す windowHandles() の定義を返す。"""
    return MethodDefinition(
        name="windowHandles",
        declaration=f"private function windowHandles({tester_class} $I)",
        statements=(
            LeveledStatement(
                0,
                "return $I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->getWindowHandles());",
            ),
        ),
    )


def emit_find_element(tester_class: str = "AcceptanceTester") -> MethodDefinition:
    """要素ハンドルを取得する findElement() の定義を返す。"""
    return MethodDefinition(
        name="findElement",
        declaration=f"private function findElement({tester_class} $I, WebDriverBy $by)",
        statements=(
            LeveledStatement(
                0,
                "return $I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->findElement($by));",
            ),
        ),
    )


def emit_find_elements(tester_class: str = "AcceptanceTester") -> MethodDefinition:
    """要素ハンドルの一覧を取得する findElements() の定義を返す。"""
    return MethodDefinition(
        name="findElements",
        declaration=f"private function findElements({tester_class} $I, WebDriverBy $by)",
        statements=(
            LeveledStatement(
                0,
                "return $I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->findElements($by));",
            ),
        ),
    )


def helper_methods(tester_class: str = "AcceptanceTester") -> list[MethodDefinition]:
    """生成クラスが必要とする全補助メソッドを返す。"""
    return [
        emit_find_element(tester_class),
        emit_find_elements(tester_class),
        emit_window_handles(tester_class),
        emit_wait_for_window(tester_class),
    ]
