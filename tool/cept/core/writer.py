"""
CestWriter — エクスポート結果を Codeception の Cest クラスとして出力

Jinja2 テンプレート（templates/cest.php.j2）で PHP ソースを組み立てる。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from ..config import ExportConfig
from .exporter import ExportResult, indent_lines

logger = logging.getLogger(__name__)

# テンプレートディレクトリのパス
_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# 生成コードが参照する php-webdriver のクラス
_WEBDRIVER_IMPORTS = (
    "Facebook\\WebDriver\\Remote\\RemoteWebDriver",
    "Facebook\\WebDriver\\WebDriverBy",
    "Facebook\\WebDriver\\WebDriverExpectedCondition",
    "Facebook\\WebDriver\\WebDriverKeys",
)


@dataclass
class _HelperView:
    declaration: str
    lines: list[str]


class CestWriter:
    """エクスポート結果から Cest クラスのソースを生成・出力する。"""

    def __init__(self, config: Optional[ExportConfig] = None) -> None:
        self._config = config or ExportConfig()
        self._env = Environment(
            loader=FileSystemLoader(str(_TEMPLATES_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, result: ExportResult) -> str:
        """Cest クラスの PHP ソースを返す。

        アクタークラスが名前空間付き（``Tests\\Support\\AcceptanceTester`` 等）の場合は
        use 宣言を追加し、シグネチャには短い名前を使う。
        """
        tester_class = self._config.tester_class
        imports = list(_WEBDRIVER_IMPORTS)
        tester = tester_class.rsplit("\\", 1)[-1]
        if "\\" in tester_class:
            imports.append(tester_class.lstrip("\\"))

        helpers = [
            _HelperView(
                declaration=helper.declaration,
                lines=indent_lines(helper.statements, self._config.indent),
            )
            for helper in result.helpers
        ]

        template = self._env.get_template("cest.php.j2")
        return template.render(
            namespace=self._config.namespace,
            imports=imports,
            class_name=result.class_name,
            tester=tester,
            unit=" " * self._config.indent,
            tests=result.tests,
            helpers=helpers,
        )

    def write(self, result: ExportResult, output_dir: Path) -> Path:
        """``<ClassName>.php`` を出力ディレクトリに書き出す。

        Returns:
            書き出したファイルのパス
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        output_path = output_dir / f"{result.class_name}.php"
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.render(result))

        logger.info("Cest クラスを出力しました: %s", output_path)
        return output_path
