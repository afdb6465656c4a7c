"""
制御構文 Linter — 記録テストの静的解析

コード生成は制御構文の対応を検査しないため、生成前にここで検出する。

検出ルール:
  - 開いているブロックのない end / repeatIf / elseIf / else → error
  - do 以外を閉じる repeatIf、do を閉じる end → error
  - if 以外のブロック内の elseIf / else、else の後の elseIf / else → error
  - テスト末尾で閉じられていないブロック → error
  - 未対応のコマンド → warning
  - 生成コードから除かれるコマンド（setSpeed, debugger）→ info
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .schema import Step, TestCase


# ---------------------------------------------------------------------------
# Lint 重大度
# ---------------------------------------------------------------------------

class LintSeverity(Enum):
    """Lint 結果の重大度レベル。"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# ---------------------------------------------------------------------------
# Lint 検出結果
# ---------------------------------------------------------------------------

@dataclass
class LintIssue:
    """Lint で検出された問題。

    Attributes:
        command: 問題が検出されたコマンド名
        line_number: ステップの位置（commands 配列内のインデックス + 1）
        severity: 重大度（error / warning / info）
        rule: 適用されたルール名
        message: 問題の説明メッセージ
    """

    command: str
    line_number: int
    severity: LintSeverity
    rule: str
    message: str


# ブロックを開くコマンド
_OPENERS = frozenset({"if", "while", "do", "forEach", "times"})

# 生成コードに現れないコマンド
_DROPPED = frozenset({"setSpeed", "debugger"})


@dataclass
class _OpenBlock:
    command: str
    line_number: int
    saw_else: bool = False


# ---------------------------------------------------------------------------
# ControlFlowLinter 本体
# ---------------------------------------------------------------------------

class ControlFlowLinter:
    """記録テストの制御構文と対応コマンドを検査する Linter。

    Args:
        known_commands: 対応済みのコマンド名。None の場合は未対応コマンドを検査しない
    """

    def __init__(self, known_commands: Optional[Iterable[str]] = None) -> None:
        self._known = frozenset(known_commands) if known_commands is not None else None

    def lint(self, test: TestCase) -> list[LintIssue]:
        """全ルールを適用し、検出された問題を位置順に返す。

        コメントアウトされたコマンドと空のコマンドは対象外。
        """
        issues: list[LintIssue] = []
        stack: list[_OpenBlock] = []

        for line_number, step in enumerate(test.commands, start=1):
            if not step.name or step.is_disabled:
                continue

            issue = self._check_command(step, line_number)
            if issue is not None:
                issues.append(issue)

            if step.name in _OPENERS:
                stack.append(_OpenBlock(step.name, line_number))
            elif step.name in ("elseIf", "else"):
                issue = self._check_branch(step, line_number, stack)
                if issue is not None:
                    issues.append(issue)
            elif step.name in ("end", "repeatIf"):
                issue = self._check_closer(step, line_number, stack)
                if issue is not None:
                    issues.append(issue)

        for block in stack:
            issues.append(LintIssue(
                command=block.command,
                line_number=block.line_number,
                severity=LintSeverity.ERROR,
                rule="unclosed-block",
                message=f"{block.command} ブロックが閉じられていません",
            ))

        issues.sort(key=lambda i: i.line_number)
        return issues

    # -----------------------------------------------------------------
    # ルール
    # -----------------------------------------------------------------

    def _check_command(self, step: Step, line_number: int) -> Optional[LintIssue]:
        if step.name in _DROPPED:
            return LintIssue(
                command=step.name,
                line_number=line_number,
                severity=LintSeverity.INFO,
                rule="dropped-command",
                message=f"{step.name} は生成コードに出力されません",
            )
        if self._known is not None and step.name not in self._known:
            return LintIssue(
                command=step.name,
                line_number=line_number,
                severity=LintSeverity.WARNING,
                rule="unsupported-command",
                message=f"{step.name} は未対応のコマンドのため出力されません",
            )
        return None

    def _check_branch(
        self, step: Step, line_number: int, stack: list[_OpenBlock]
    ) -> Optional[LintIssue]:
        """elseIf / else は直近の if ブロック内で、else より前にあること。"""
        if not stack:
            return self._unmatched(step, line_number)

        top = stack[-1]
        if top.command != "if":
            return LintIssue(
                command=step.name,
                line_number=line_number,
                severity=LintSeverity.ERROR,
                rule="branch-outside-if",
                message=f"{step.name} が if 以外のブロック（{top.command}, {top.line_number} 行目）内にあります",
            )
        if top.saw_else:
            return LintIssue(
                command=step.name,
                line_number=line_number,
                severity=LintSeverity.ERROR,
                rule="branch-after-else",
                message=f"{step.name} が else の後にあります",
            )
        if step.name == "else":
            top.saw_else = True
        return None

    def _check_closer(
        self, step: Step, line_number: int, stack: list[_OpenBlock]
    ) -> Optional[LintIssue]:
        """end は do 以外を、repeatIf は do のみを閉じる。"""
        if not stack:
            return self._unmatched(step, line_number)

        top = stack.pop()
        if step.name == "repeatIf" and top.command != "do":
            return LintIssue(
                command=step.name,
                line_number=line_number,
                severity=LintSeverity.ERROR,
                rule="repeat-if-without-do",
                message=f"repeatIf が do ではなく {top.command}（{top.line_number} 行目）を閉じています",
            )
        if step.name == "end" and top.command == "do":
            return LintIssue(
                command=step.name,
                line_number=line_number,
                severity=LintSeverity.ERROR,
                rule="end-closes-do",
                message=f"do ブロック（{top.line_number} 行目）は repeatIf で閉じてください",
            )
        return None

    @staticmethod
    def _unmatched(step: Step, line_number: int) -> LintIssue:
        return LintIssue(
            command=step.name,
            line_number=line_number,
            severity=LintSeverity.ERROR,
            rule="unmatched-closer",
            message=f"{step.name} に対応する開始ブロックがありません",
        )
