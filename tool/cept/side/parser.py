"""
記録プロジェクトのパーサー — .side / YAML ファイルの読み込みと検証

.side（JSON）はそのまま、.yaml / .yml は ruamel.yaml で読み込み、
Pydantic の Project モデルに変換する。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .schema import Project

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


# ---------------------------------------------------------------------------
# バリデーションエラー表現
# ---------------------------------------------------------------------------

@dataclass
class ProjectValidationError:
    """プロジェクトファイルの検証で検出されたエラー。

    Attributes:
        message: エラーメッセージ
        location: エラー箇所（フィールドパス等）
        line: ファイル内の行番号（取得可能な場合）
    """

    message: str
    location: str = ""
    line: Optional[int] = None


class ProjectSyntaxError(ValueError):
    """プロジェクトファイルの構文エラー。line は 1 始まりの行番号。"""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line


# ---------------------------------------------------------------------------
# ProjectParser 本体
# ---------------------------------------------------------------------------

class ProjectParser:
    """記録プロジェクトの読み込み・検証を担当するパーサー。"""

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe")

    # ----- load -----

    def load(self, path: Path) -> Project:
        """プロジェクトファイルを読み込み、Project モデルに変換する。

        Args:
            path: .side / .yaml / .yml ファイルのパス

        Returns:
            パース済みの Project

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 構文エラーまたはスキーマ検証エラーの場合
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"プロジェクトファイルが見つかりません: {path}")

        data = self._read(path)
        if data is None:
            raise ValueError("プロジェクトファイルが空です")

        try:
            project = Project.model_validate(data)
        except PydanticValidationError as e:
            raise ValueError(f"スキーマ検証エラー: {e}") from e

        logger.debug("プロジェクト '%s' を読み込みました（テスト %d 件）", project.name, len(project.tests))
        return project

    # ----- validate -----

    def validate(self, path: Path) -> list[ProjectValidationError]:
        """プロジェクトファイルを検証し、違反箇所を報告する。

        エラーがない場合は空リストを返す。
        """
        path = Path(path)
        if not path.exists():
            return [ProjectValidationError(
                message=f"プロジェクトファイルが見つかりません: {path}",
                location="file",
            )]

        try:
            data = self._read(path)
        except ProjectSyntaxError as e:
            return [ProjectValidationError(
                message=str(e),
                location="syntax",
                line=e.line,
            )]

        if data is None:
            return [ProjectValidationError(message="プロジェクトファイルが空です", location="file")]

        errors: list[ProjectValidationError] = []
        try:
            Project.model_validate(data)
        except PydanticValidationError as e:
            for err in e.errors():
                loc_parts = [str(part) for part in err.get("loc", [])]
                errors.append(ProjectValidationError(
                    message=err.get("msg", "不明なエラー"),
                    location=" -> ".join(loc_parts) if loc_parts else "unknown",
                ))
        return errors

    # ----- 読み込み -----

    def _read(self, path: Path) -> object:
        """拡張子に応じて JSON または YAML として読み込む。

        Raises:
            ProjectSyntaxError: 構文エラーの場合
        """
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        if not text.strip():
            return None

        if path.suffix.lower() in _YAML_SUFFIXES:
            try:
                return self._yaml.load(text)
            except YAMLError as e:
                line = None
                line_info = ""
                mark = getattr(e, "problem_mark", None)
                if mark is not None:
                    line = mark.line + 1
                    line_info = f" (行 {line}, 列 {mark.column + 1})"
                raise ProjectSyntaxError(f"YAML 構文エラー{line_info}: {e}", line) from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ProjectSyntaxError(
                f"JSON 構文エラー (行 {e.lineno}, 列 {e.colno}): {e.msg}", e.lineno
            ) from e
