"""
制御構文ジェネレータのテスト

各制御構文の出力形式と調整値、および任意の入れ子構造で
調整値の合計が 0 に戻る（ブロックが閉じる）ことを検証する。
"""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given, settings

from cept.core.exporter import flatten
from cept.emit import EmitContext, create_default_registry
from conftest import balanced_control_flow, emit, step

_N_POSITIVE = "$I->executeJS('return (arguments[0] > 0);', [$this->vars['n']])"


class TestConditionalBlocks:
    """if / elseIf / else / end の出力テスト。"""

    def test_if_opens_block(self):
        result = emit(step("if", "${n} > 0"))
        assert result.lines == [f"if ((bool) {_N_POSITIVE}) {{"]
        assert result.starting_level_adjustment == 0
        assert result.ending_level_adjustment == 1

    def test_else_if_switches_branch(self):
        result = emit(step("elseIf", "${n} > 0"))
        assert result.lines == [f"}} elseif ((bool) {_N_POSITIVE}) {{"]
        assert result.starting_level_adjustment == -1
        assert result.ending_level_adjustment == 1

    def test_else_switches_branch(self):
        result = emit(step("else"))
        assert result.lines == ["} else {"]
        assert result.starting_level_adjustment == -1
        assert result.ending_level_adjustment == 1

    def test_end_closes_block(self):
        result = emit(step("end"))
        assert result.lines == ["}"]
        assert result.starting_level_adjustment == -1
        assert result.ending_level_adjustment == 0

    def test_script_without_variables(self):
        result = emit(step("if", "window.ready"))
        assert result.lines == ["if ((bool) $I->executeJS('return (window.ready);')) {"]


class TestLoops:
    """do / repeatIf / while / forEach / times の出力テスト。"""

    def test_do(self):
        result = emit(step("do"))
        assert result.lines == ["do {"]
        assert result.ending_level_adjustment == 1

    def test_repeat_if(self):
        result = emit(step("repeatIf", "${n} > 0"))
        assert result.lines == [f"}} while ((bool) {_N_POSITIVE});"]
        assert result.starting_level_adjustment == -1
        assert result.ending_level_adjustment == 0

    def test_while(self):
        result = emit(step("while", "${n} > 0"))
        assert result.lines == [f"while ((bool) {_N_POSITIVE}) {{"]
        assert result.ending_level_adjustment == 1

    def test_for_each_binds_iterator(self):
        result = emit(step("forEach", "items", "item"))
        assert result.lines == [
            "foreach ($this->vars['items'] as $item) {",
            "$this->vars['item'] = $item;",
        ]
        assert [s.level for s in result.statements] == [0, 1]
        assert result.ending_level_adjustment == 1

    def test_for_each_without_iterator_name(self):
        result = emit(step("forEach", "items"))
        assert result.lines == ["foreach ($this->vars['items'] as $item) {"]

    def test_for_each_opens_exactly_once(self):
        """forEach の開始とその end で 1 つのブロックが開いて閉じること。"""
        results = [emit(step("forEach", "items", "item")), emit(step("end"))]
        statements = flatten(results)
        assert [s.level for s in statements] == [0, 1, 0]
        assert sum(
            r.starting_level_adjustment + r.ending_level_adjustment for r in results
        ) == 0

    def test_times_literal(self):
        result = emit(step("times", "3"))
        assert result.lines == ["for ($i = 0; $i < 3; $i++) {"]
        assert result.ending_level_adjustment == 1

    def test_times_variable(self):
        result = emit(step("times", "${count}"))
        assert result.lines == ["for ($i = 0; $i < (int) $this->vars['count']; $i++) {"]

    def test_times_invalid_raises(self):
        with pytest.raises(ValueError):
            emit(step("times", "a few"))

    def test_nested_times_use_distinct_counters(self):
        registry = create_default_registry()
        context = EmitContext()
        commands = [
            step("times", "3"),
            step("times", "2"),
            step("echo", "x"),
            step("end"),
            step("end"),
        ]
        statements = flatten(asyncio.run(registry.emit(c, context)) for c in commands)
        assert [s.text for s in statements[:2]] == [
            "for ($i = 0; $i < 3; $i++) {",
            "for ($i1 = 0; $i1 < 2; $i1++) {",
        ]
        assert [s.level for s in statements] == [0, 1, 2, 1, 0]

    def test_times_counter_from_step_id(self):
        outer = emit(step("times", "3", id="c-1"))
        inner = emit(step("times", "2", id="c-2"))
        assert outer.lines == ["for ($i_c1 = 0; $i_c1 < 3; $i_c1++) {"]
        assert inner.lines == ["for ($i_c2 = 0; $i_c2 < 2; $i_c2++) {"]

    def test_times_with_id_is_repeatable_in_one_context(self):
        registry = create_default_registry()
        context = EmitContext()
        command = step("times", "3", id="loop")
        first = asyncio.run(registry.emit(command, context))
        second = asyncio.run(registry.emit(command, context))
        assert first == second


class TestNesting:
    """入れ子の調整値テスト。"""

    def test_if_else_end_levels(self):
        commands = [
            step("if", "${n} > 0"),
            step("echo", "yes"),
            step("else"),
            step("echo", "no"),
            step("end"),
        ]
        statements = flatten(emit(c) for c in commands)
        assert [s.level for s in statements] == [0, 1, 0, 1, 0]
        assert statements[2].text == "} else {"

    @given(commands=balanced_control_flow())
    @settings(max_examples=60, deadline=None)
    def test_balanced_sequences_return_to_zero(self, commands):
        """対応の取れたステップ列では周囲のレベルが負にならず、最後に 0 へ戻ること。"""
        registry = create_default_registry()
        context = EmitContext()

        ambient = 0
        for command in commands:
            result = asyncio.run(registry.emit(command, context))
            if result is None or isinstance(result, str):
                continue
            ambient += result.starting_level_adjustment
            assert ambient >= 0
            ambient += result.ending_level_adjustment
        assert ambient == 0

    @given(commands=balanced_control_flow())
    @settings(max_examples=30, deadline=None)
    def test_generation_is_deterministic(self, commands):
        """同じステップ列から常に同じ出力が得られること。"""

        def _render():
            registry = create_default_registry()
            context = EmitContext(base_url="http://localhost")
            return flatten(asyncio.run(registry.emit(c, context)) for c in commands)

        assert _render() == _render()
