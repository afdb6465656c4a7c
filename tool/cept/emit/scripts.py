"""
埋め込みスクリプトの引数組み立て

executeScript / if / while などのスクリプト本文に含まれる ``${name}`` を
``arguments[i]`` に置き換え、対応する変数名を argv として保持する。
生成時には argv の各変数を VariableScope で読み出し式に解決し、
``executeJS`` の第 2 引数（配列）を組み立てる。
スクリプト本文の構文検証は行わない。
"""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from .literals import VARIABLE_REFERENCE, php_string


class ScriptSource(BaseModel):
    """引数宣言付きのスクリプト本文。"""

    model_config = ConfigDict(frozen=True)

    script: str = Field(..., description="arguments[i] 置換済みのスクリプト本文")
    argv: tuple[str, ...] = Field(default=(), description="arguments の順に対応する変数名")

    @classmethod
    def parse(cls, text: str) -> "ScriptSource":
        """記録されたスクリプトから ScriptSource を生成する。

        同じ変数が複数回参照された場合は同じ arguments インデックスを使う。
        """
        argv: list[str] = []

        def _replace(match) -> str:
            name = match.group(1)
            if name not in argv:
                argv.append(name)
            return f"arguments[{argv.index(name)}]"

        script = VARIABLE_REFERENCE.sub(_replace, text or "")
        return cls(script=script, argv=tuple(argv))


def generate_script_arguments(
    script: ScriptSource,
    variable_lookup: Callable[[str], str],
) -> str:
    """argv を読み出し式の PHP 配列に変換する。"""
    items = [variable_lookup(name) for name in script.argv]
    return f"[{', '.join(items)}]"


def generate_script_call(
    method: str,
    body: str,
    script: ScriptSource,
    variable_lookup: Callable[[str], str],
) -> str:
    """``$I->executeJS(...)`` 形式の呼び出し式を生成する。

    引数がない場合は配列を省略する。
    """
    if script.argv:
        arguments = generate_script_arguments(script, variable_lookup)
        return f"$I->{method}({php_string(body)}, {arguments})"
    return f"$I->{method}({php_string(body)})"


def generate_expression_script(
    script: ScriptSource,
    variable_lookup: Callable[[str], str],
) -> str:
    """条件式として評価するスクリプト呼び出し式を生成する。"""
    return generate_script_call(
        "executeJS", f"return ({script.script});", script, variable_lookup
    )
