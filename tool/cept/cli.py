"""
CLI エントリポイント — Typer ベースのコマンドラインインターフェース

cept コマンドとして以下のサブコマンドを提供する:
  - export: 記録プロジェクトを Cest クラスに変換
  - lint: 制御構文と未対応コマンドの静的解析
  - validate: プロジェクトファイルのスキーマ検証
  - list-commands: 対応コマンド一覧
  - init: 設定ファイルのひな形生成
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Typer アプリ定義
# ---------------------------------------------------------------------------

app = typer.Typer(
    help=(
        "cept — Selenium IDE の記録を PHP Codeception の Cest クラスに変換するツール\n\n"
        "基本の流れ:\n"
        "  1. cept lint project.side     制御構文の対応を確認\n"
        "  2. cept export project.side -o tests/acceptance\n\n"
        "詳しくは各コマンドに --help を付けてください。"
    ),
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# export コマンド
# ---------------------------------------------------------------------------

@app.command()
def export(
    project_file: Path = typer.Argument(..., help="記録プロジェクト（.side / .yaml）"),
    output_dir: Path = typer.Option(
        Path("."), "--output", "-o", help="Cest クラスの出力先ディレクトリ",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="open の相対 URL に前置するベース URL",
    ),
    tests: Optional[List[str]] = typer.Option(
        None, "--test", "-t", help="出力するテスト（名前または ID、複数指定可）",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="設定ファイル（デフォルト: ./cept.yaml）",
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="未対応コマンドをエラーにする",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="詳細ログを表示する"),
) -> None:
    """記録プロジェクトを Codeception の Cest クラスに変換する。"""
    from .config import resolve_config
    from .core.exporter import Exporter
    from .core.writer import CestWriter
    from .emit import create_default_registry
    from .side.parser import ProjectParser

    _configure_logging(verbose)

    try:
        config = resolve_config(config_file, base_url=base_url, strict=strict)
        project = ProjectParser().load(project_file)

        exporter = Exporter(create_default_registry(), config)
        result = asyncio.run(exporter.export_project(project, tests))
        output_path = CestWriter(config).write(result, output_dir)

        typer.echo(f"Cest クラスを出力しました: {output_path}（テスト {len(result.tests)} 件）")
        if result.skipped:
            typer.echo(f"未対応のためスキップしたコマンド: {', '.join(result.skipped)}", err=True)
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# lint コマンド
# ---------------------------------------------------------------------------

@app.command()
def lint(
    project_file: Path = typer.Argument(..., help="静的解析する記録プロジェクト"),
) -> None:
    """記録プロジェクトの制御構文と未対応コマンドを検査する。"""
    from .emit import create_default_registry
    from .side.linter import ControlFlowLinter
    from .side.parser import ProjectParser

    try:
        project = ProjectParser().load(project_file)
        linter = ControlFlowLinter(create_default_registry().names)

        has_errors = False
        for test in project.tests:
            issues = linter.lint(test)
            if not issues:
                typer.echo(f"✓ {test.name}: lint 問題なし")
                continue
            for issue in issues:
                typer.echo(
                    f"[{issue.severity.value}] {test.name} "
                    f"{issue.line_number} 番目 ({issue.command}): {issue.message}"
                )
            # warning/error がある場合は終了コード 1
            has_errors = has_errors or any(
                i.severity.value in ("error", "warning") for i in issues
            )

        if has_errors:
            raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# validate コマンド
# ---------------------------------------------------------------------------

@app.command()
def validate(
    project_file: Path = typer.Argument(..., help="検証する記録プロジェクト"),
) -> None:
    """記録プロジェクトのスキーマ検証を行う。"""
    from .side.parser import ProjectParser

    errors = ProjectParser().validate(project_file)

    if not errors:
        typer.echo(f"✓ {project_file}: スキーマ検証 OK")
    else:
        for err in errors:
            line_info = f" (行 {err.line})" if err.line else ""
            typer.echo(f"✗ {err.location}{line_info}: {err.message}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# list-commands コマンド
# ---------------------------------------------------------------------------

@app.command("list-commands")
def list_commands() -> None:
    """対応済みの全コマンドの一覧を表示する。"""
    from .emit import create_default_registry

    all_commands = create_default_registry().list_all()

    # カテゴリごとにグループ化して表示
    categories: dict[str, list] = {}
    for info in all_commands:
        categories.setdefault(info.category, []).append(info)

    for category, commands in sorted(categories.items()):
        typer.echo(f"\n[{category}]")
        for command in commands:
            typer.echo(f"  {command.name:45s} {command.description}")

    typer.echo(f"\n合計: {len(all_commands)} コマンド")


# ---------------------------------------------------------------------------
# init コマンド
# ---------------------------------------------------------------------------

@app.command()
def init(
    project_dir: Path = typer.Argument(
        Path("."), help="設定ファイルを置くディレクトリ（デフォルト: カレント）",
    ),
) -> None:
    """設定ファイルのひな形（cept.yaml）を生成する。既存のファイルは上書きしない。"""
    from .config import CONFIG_TEMPLATE, DEFAULT_CONFIG_FILE

    try:
        project_dir.mkdir(parents=True, exist_ok=True)
        config_path = project_dir / DEFAULT_CONFIG_FILE
        if config_path.exists():
            typer.echo(f"設定ファイルは既に存在します: {config_path}")
            return

        config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
        typer.echo(f"設定ファイルを生成しました: {config_path.resolve()}")
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)
