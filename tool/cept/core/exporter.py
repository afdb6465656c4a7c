"""
Exporter — 記録プロジェクトから Cest クラスの内容を組み立てる

テストケースごとにステップを先頭から順に EmitterRegistry へ渡し、
生成結果（None / 文 / ブロック）を連結してインデント付きの行に展開する。

インデントは各ブロックの調整値だけで決まる:

  1. ブロックの前に starting_level_adjustment を周囲のレベルへ加算
  2. 各文を「周囲のレベル + 文の相対レベル」で出力
  3. ブロックの後に ending_level_adjustment を周囲のレベルへ加算

ステップは必ず記録順に 1 つずつ await する（並列化しない）。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..config import ExportConfig
from ..emit.errors import EmitError, UnsupportedCommandError
from ..emit.literals import sanitize_name
from ..emit.registry import EmitContext, EmitterRegistry
from ..emit.results import EmissionResult, LeveledStatement, MethodDefinition, as_block
from ..emit.variables import VariableScope
from ..emit.window import helper_methods
from ..side.schema import Project, TestCase

logger = logging.getLogger(__name__)

_WORD_SEPARATOR = re.compile(r"[^A-Za-z0-9]+")


# ---------------------------------------------------------------------------
# 例外
# ---------------------------------------------------------------------------

class ExportError(Exception):
    """ステップのコード生成に失敗した。

    Attributes:
        test_name: テスト名
        line_number: ステップの位置（1 始まり）
        command: コマンド名
    """

    def __init__(self, test_name: str, line_number: int, command: str, reason: Exception) -> None:
        self.test_name = test_name
        self.line_number = line_number
        self.command = command
        super().__init__(f"{test_name} の {line_number} 番目のステップ（{command}）: {reason}")


# ---------------------------------------------------------------------------
# エクスポート結果
# ---------------------------------------------------------------------------

@dataclass
class ExportedTest:
    """1 テストケース分の生成結果。

    Attributes:
        name: 記録時のテスト名
        method_name: 生成メソッド名
        lines: メソッド本体の行（メソッド本体からの相対インデント付き）
        skipped: 未対応のため出力しなかったコマンド名（出現順）
    """

    name: str
    method_name: str
    lines: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class ExportResult:
    """プロジェクト全体の生成結果。"""

    project_name: str
    class_name: str
    tests: list[ExportedTest] = field(default_factory=list)
    helpers: list[MethodDefinition] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> list[str]:
        """全テストでスキップされたコマンド名（重複なし、出現順）。"""
        seen: list[str] = []
        for test in self.tests:
            for name in test.skipped:
                if name not in seen:
                    seen.append(name)
        return seen


# ---------------------------------------------------------------------------
# 展開
# ---------------------------------------------------------------------------

def flatten(results: Iterable[EmissionResult]) -> list[LeveledStatement]:
    """生成結果の列を絶対インデントレベル付きの文の列に展開する。

    周囲のレベルが負になる場合（開始のない end 等）は 0 として出力する。
    空文字列の文は出力しない。
    """
    ambient = 0
    flattened: list[LeveledStatement] = []
    for result in results:
        block = as_block(result)
        ambient += block.starting_level_adjustment
        for statement in block.statements:
            if statement.text:
                flattened.append(LeveledStatement(max(ambient, 0) + statement.level, statement.text))
        ambient += block.ending_level_adjustment
    return flattened


def indent_lines(statements: Iterable[LeveledStatement], width: int = 4) -> list[str]:
    """レベル付きの文をスペースでインデントした行に変換する。"""
    return [" " * (width * s.level) + s.text for s in statements]


def class_name_for(project_name: str, suffix: str = "Cest") -> str:
    """プロジェクト名から PHP のクラス名を生成する（単語ごとに先頭を大文字化）。"""
    words = [w for w in _WORD_SEPARATOR.split(project_name) if w]
    pascal = "".join(w[:1].upper() + w[1:] for w in words)
    return sanitize_name(pascal + suffix)


# ---------------------------------------------------------------------------
# Exporter 本体
# ---------------------------------------------------------------------------

class Exporter:
    """記録プロジェクトを Cest クラスの内容に変換する。

    使用例::

        exporter = Exporter(create_default_registry(), ExportConfig())
        result = asyncio.run(exporter.export_project(project))
        CestWriter(config).write(result, Path("tests/acceptance"))
    """

    def __init__(self, registry: EmitterRegistry, config: Optional[ExportConfig] = None) -> None:
        self._registry = registry
        self._config = config or ExportConfig()

    def create_context(
        self,
        project: Optional[Project] = None,
        variables: Optional[VariableScope] = None,
    ) -> EmitContext:
        """生成コンテキストを作成する。ベース URL は設定値、なければプロジェクトの url。"""
        base_url = self._config.base_url or (project.url if project is not None else "")
        return EmitContext(
            variables=variables or VariableScope(),
            base_url=base_url,
            wait_for_text_timeout=self._config.wait_for_text_timeout,
            wait_timeout=self._config.wait_timeout,
        )

    async def export_test(
        self,
        test: TestCase,
        project: Optional[Project] = None,
        *,
        context: Optional[EmitContext] = None,
    ) -> ExportedTest:
        """1 テストケースを生成する。

        コメントアウトされたコマンドと空のコマンドは出力しない。
        未対応コマンドはスキップとして記録する（strict 設定時は ExportError）。

        Raises:
            ExportError: ステップの生成に失敗した場合
        """
        context = context or self.create_context(project)
        method_name = sanitize_name(test.name)
        results: list[EmissionResult] = []
        skipped: list[str] = []

        for line_number, step in enumerate(test.commands, start=1):
            if not step.name or step.is_disabled:
                continue

            if not self._registry.can_emit(step.name):
                if self._config.strict:
                    error = UnsupportedCommandError(step.name)
                    raise ExportError(test.name, line_number, step.name, error) from error
                logger.warning(
                    "%s: 未対応のコマンドをスキップします（%d 番目）: %s",
                    test.name, line_number, step.name,
                )
                skipped.append(step.name)
                continue

            try:
                results.append(await self._registry.emit(step, context))
            except (EmitError, ValueError) as e:
                raise ExportError(test.name, line_number, step.name, e) from e

        lines = indent_lines(flatten(results), self._config.indent)
        logger.debug("テスト '%s' を生成しました（%d 行）", test.name, len(lines))
        return ExportedTest(name=test.name, method_name=method_name, lines=lines, skipped=skipped)

    async def export_project(
        self,
        project: Project,
        test_names: Optional[Iterable[str]] = None,
    ) -> ExportResult:
        """プロジェクト全体（または指定テストのみ）を生成する。

        変数スコープはこの呼び出しごとに新規作成し、全テストで共有する。

        Raises:
            ValueError: 指定されたテストが存在しない場合、
                または生成メソッド名が他のテストや補助メソッドと重複する場合
            ExportError: ステップの生成に失敗した場合
        """
        tests = self._select_tests(project, test_names)
        variables = VariableScope()
        context = self.create_context(project, variables)

        result = ExportResult(
            project_name=project.name,
            class_name=class_name_for(project.name, self._config.class_suffix),
            helpers=helper_methods(self._config.tester_class.rsplit("\\", 1)[-1]),
        )

        method_names = {helper.name for helper in result.helpers}
        for test in tests:
            exported = await self.export_test(test, project, context=context)
            if exported.method_name in method_names:
                raise ValueError(
                    f"生成メソッド名が重複しています: {exported.method_name}（テスト: {test.name}）"
                )
            method_names.add(exported.method_name)
            result.tests.append(exported)

        result.variables = variables.written
        logger.info(
            "プロジェクト '%s' を生成しました（テスト %d 件、スキップ %d 種）",
            project.name, len(result.tests), len(result.skipped),
        )
        return result

    @staticmethod
    def _select_tests(project: Project, test_names: Optional[Iterable[str]]) -> list[TestCase]:
        if test_names is None:
            return list(project.tests)
        names = list(test_names)
        if not names:
            return list(project.tests)

        selected: list[TestCase] = []
        for name in names:
            test = project.find_test(name)
            if test is None:
                raise ValueError(f"テストが見つかりません: {name}")
            selected.append(test)
        return selected
