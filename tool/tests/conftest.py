"""
テスト共通フィクスチャ・Hypothesis ストラテジー定義

全テストモジュールで共有するフィクスチャとデータ生成器を提供する。
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from hypothesis import strategies as st

from cept.emit import EmitContext, create_default_registry
from cept.emit.results import EmissionResult
from cept.side.schema import Step


# ---------------------------------------------------------------------------
# ヘルパー
# ---------------------------------------------------------------------------

def step(name: str, target: str = "", value: str = "", **extra) -> Step:
    """テスト用の Step を生成する。"""
    return Step(name=name, target=target, value=value, **extra)


def emit(command: Step, context: EmitContext | None = None, registry=None) -> EmissionResult:
    """既定レジストリで 1 ステップを生成する。"""
    registry = registry or create_default_registry()
    return asyncio.run(registry.emit(command, context or EmitContext()))


# ---------------------------------------------------------------------------
# pytest フィクスチャ
# ---------------------------------------------------------------------------

@pytest.fixture
def context() -> EmitContext:
    """ベース URL 付きの生成コンテキスト。"""
    return EmitContext(base_url="http://localhost:8080")


@pytest.fixture
def sample_project_dict() -> dict:
    """サンプルの .side プロジェクト辞書データ。

    ログイン → 条件分岐 → 新規ウィンドウ の最小構成。
    """
    return {
        "id": "p-1",
        "version": "2.0",
        "name": "login flow",
        "url": "http://localhost:8080",
        "tests": [
            {
                "id": "t-1",
                "name": "login",
                "commands": [
                    {"id": "c-1", "command": "open", "target": "/login", "value": "", "targets": []},
                    {"id": "c-2", "command": "type", "target": "id=email", "value": "user@example.com"},
                    {"id": "c-3", "command": "click", "target": "css=button.submit", "value": ""},
                    {"id": "c-4", "command": "storeTitle", "target": "", "value": "title"},
                    {"id": "c-5", "command": "if", "target": "${title} === 'Dashboard'", "value": ""},
                    {"id": "c-6", "command": "echo", "target": "logged in", "value": ""},
                    {"id": "c-7", "command": "end", "target": "", "value": ""},
                ],
            },
            {
                "id": "t-2",
                "name": "open help",
                "commands": [
                    {
                        "id": "c-8",
                        "command": "click",
                        "target": "linkText=Help",
                        "value": "",
                        "opensWindow": True,
                        "windowHandleName": "help",
                        "windowTimeout": 3000,
                    },
                    {"id": "c-9", "command": "selectWindow", "target": "handle=${help}", "value": ""},
                    {"id": "c-10", "command": "//click", "target": "id=disabled", "value": ""},
                    {"id": "c-11", "command": "setSpeed", "target": "1000", "value": ""},
                ],
            },
        ],
        "suites": [{"id": "s-1", "name": "default", "tests": ["t-1", "t-2"]}],
    }


@pytest.fixture
def sample_project_file(tmp_path: Path, sample_project_dict: dict) -> Path:
    """サンプルプロジェクトを .side ファイルとして書き出す。"""
    import json

    path = tmp_path / "login.side"
    path.write_text(json.dumps(sample_project_dict, ensure_ascii=False), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Hypothesis ストラテジー
# ---------------------------------------------------------------------------

# 変数名として記録されうる文字列
variable_names = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters="_-"),
    min_size=1,
    max_size=20,
)

# 任意の記録テキスト（クォート・バックスラッシュ・${} を含みうる）
recorded_texts = st.text(
    alphabet=st.sampled_from(list("abcXYZ019 '\"\\${}/.-_あ")),
    max_size=40,
)

# 非制御構文コマンドのステップ
simple_steps = st.sampled_from([
    Step(name="echo", target="hello ${x}"),
    Step(name="open", target="/path"),
    Step(name="click", target="id=a"),
    Step(name="type", target="css=.b", value="${y}"),
    Step(name="store", target="text", value="x"),
    Step(name="pause", target="1000"),
    Step(name="setSpeed", target="1000"),
    Step(name="check", target="//input[@id='c']"),
])


@st.composite
def balanced_control_flow(draw, depth: int = 0) -> list[Step]:
    """開始と終了の対応が取れた制御構文付きステップ列を生成する。"""
    steps: list[Step] = []
    for _ in range(draw(st.integers(min_value=0, max_value=3))):
        kind = draw(st.sampled_from(["plain", "if", "while", "do", "times", "forEach"]))
        if kind == "plain" or depth >= 3:
            steps.append(draw(simple_steps))
            continue

        body = draw(balanced_control_flow(depth=depth + 1))
        if kind == "if":
            steps.append(Step(name="if", target="${n} > 0"))
            steps.extend(body)
            if draw(st.booleans()):
                steps.append(Step(name="elseIf", target="${n} < 0"))
                steps.extend(draw(balanced_control_flow(depth=depth + 1)))
            if draw(st.booleans()):
                steps.append(Step(name="else"))
                steps.extend(draw(balanced_control_flow(depth=depth + 1)))
            steps.append(Step(name="end"))
        elif kind == "do":
            steps.append(Step(name="do"))
            steps.extend(body)
            steps.append(Step(name="repeatIf", target="${n} < 3"))
        elif kind == "while":
            steps.append(Step(name="while", target="${n} < 3"))
            steps.extend(body)
            steps.append(Step(name="end"))
        elif kind == "times":
            steps.append(Step(name="times", target="3"))
            steps.extend(body)
            steps.append(Step(name="end"))
        else:
            steps.append(Step(name="forEach", target="items", value="item"))
            steps.extend(body)
            steps.append(Step(name="end"))
    return steps
