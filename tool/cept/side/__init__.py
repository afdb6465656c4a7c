"""記録プロジェクトのモデル・パーサー・Linter"""

from .linter import ControlFlowLinter, LintIssue, LintSeverity
from .parser import ProjectParser, ProjectSyntaxError, ProjectValidationError
from .schema import Project, Step, Suite, TestCase

__all__ = [
    "ControlFlowLinter",
    "LintIssue",
    "LintSeverity",
    "Project",
    "ProjectParser",
    "ProjectSyntaxError",
    "ProjectValidationError",
    "Step",
    "Suite",
    "TestCase",
]
