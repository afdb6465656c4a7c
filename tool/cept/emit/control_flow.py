"""
制御構文ジェネレータ — if / elseIf / else / end / do / repeatIf / while / forEach / times

各ジェネレータは 1 行のブロックと、周囲のインデントレベルに対する調整値を返す。

  開始（if, do, while, forEach, times）: ending_level_adjustment = +1
  分岐（elseIf, else）                : starting = -1, ending = +1
  終了（end, repeatIf）               : starting_level_adjustment = -1

条件式は埋め込みスクリプトを executeJS で評価し、(bool) で真偽値に変換する。
対応の正しさ（if に対する end の存在など）は記録側の責務であり、ここでは検査しない。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .literals import identifier_suffix, single_variable
from .results import EmissionBlock, EmissionResult
from .scripts import generate_expression_script

if TYPE_CHECKING:
    from ..side.schema import Step
    from .registry import EmitContext


def _condition(step: Step, context: EmitContext) -> str:
    return f"(bool) {generate_expression_script(context.script(step), context.variable_lookup)}"


async def emit_control_flow_if(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of(
        (0, f"if ({_condition(step, context)}) {{"),
        ending_level_adjustment=1,
    )


async def emit_control_flow_else_if(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of(
        (0, f"}} elseif ({_condition(step, context)}) {{"),
        starting_level_adjustment=-1,
        ending_level_adjustment=1,
    )


async def emit_control_flow_else(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of(
        (0, "} else {"),
        starting_level_adjustment=-1,
        ending_level_adjustment=1,
    )


async def emit_control_flow_end(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of((0, "}"), starting_level_adjustment=-1)


async def emit_control_flow_do(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of((0, "do {"), ending_level_adjustment=1)


async def emit_control_flow_repeat_if(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of(
        (0, f"}} while ({_condition(step, context)});"),
        starting_level_adjustment=-1,
    )


async def emit_control_flow_while(step: Step, context: EmitContext) -> EmissionResult:
    return EmissionBlock.of(
        (0, f"while ({_condition(step, context)}) {{"),
        ending_level_adjustment=1,
    )


async def emit_control_flow_for_each(step: Step, context: EmitContext) -> EmissionResult:
    """forEach — コレクション変数の各要素を反復変数に束縛してループする。

    target がコレクション変数名、value が反復変数名。
    """
    collection = context.variable_lookup(step.target or "")
    statements = [(0, f"foreach ({collection} as $item) {{")]
    binding = context.variables.write(step.value, "$item")
    if binding:
        statements.append((1, binding))
    return EmissionBlock.of(*statements, ending_level_adjustment=1)


async def emit_control_flow_times(step: Step, context: EmitContext) -> EmissionResult:
    """times — target で指定した回数だけ繰り返す。

    target は整数リテラルまたは ``${name}`` 形式の変数参照。

    Raises:
        ValueError: 回数が整数でも変数参照でもない場合
    """
    target = (step.target or "").strip()
    variable = single_variable(target)
    if variable:
        count = f"(int) {context.variable_lookup(variable)}"
    elif target.isdigit():
        count = str(int(target))
    else:
        raise ValueError(f"times の回数は整数または変数参照で指定してください: {target!r}")

    counter = _loop_counter(step, context)
    return EmissionBlock.of(
        (0, f"for ({counter} = 0; {counter} < {count}; {counter}++) {{"),
        ending_level_adjustment=1,
    )


def _loop_counter(step: Step, context: EmitContext) -> str:
    """times のループカウンタ名。入れ子の times 同士で衝突しないこと。

    ステップ ID があれば ``$i_<ID>``、なければコンテキストで採番する。
    """
    suffix = identifier_suffix(step.id)
    if suffix:
        return f"$i_{suffix}"
    return context.next_loop_counter()
