"""
エクスポート設定 — 環境変数・設定ファイル・CLI 引数からの読み込み

CLI 引数 > 設定ファイル（cept.yaml） > 環境変数 > デフォルト値 の優先順位で適用される。

環境変数一覧:
  CEPT_BASE_URL    : open の相対 URL に前置するベース URL（デフォルト: プロジェクトの url）
  CEPT_INDENT      : 生成コードのインデント幅（デフォルト: 4）
  CEPT_NAMESPACE   : 生成クラスの名前空間（デフォルト: なし）
  CEPT_TESTER_CLASS: アクタークラス名（デフォルト: AcceptanceTester）
  CEPT_STRICT      : 未対応コマンドをエラーにするか（true/false, デフォルト: false）
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

# 設定ファイルの既定名
DEFAULT_CONFIG_FILE = "cept.yaml"

# ---------------------------------------------------------------------------
# 環境変数キー定数
# ---------------------------------------------------------------------------

_ENV_BASE_URL = "CEPT_BASE_URL"
_ENV_INDENT = "CEPT_INDENT"
_ENV_NAMESPACE = "CEPT_NAMESPACE"
_ENV_TESTER_CLASS = "CEPT_TESTER_CLASS"
_ENV_STRICT = "CEPT_STRICT"


# ---------------------------------------------------------------------------
# 設定データクラス
# ---------------------------------------------------------------------------

@dataclass
class ExportConfig:
    """エクスポートの実行時設定。

    Attributes:
        base_url: open の相対 URL に前置するベース URL（空ならプロジェクトの url）
        indent: 1 レベルあたりのインデント幅（スペース数）
        namespace: 生成クラスの名前空間（空なら namespace 宣言なし）
        tester_class: Codeception のアクタークラス名
        class_suffix: 生成クラス名の接尾辞
        wait_for_text_timeout: waitForText のタイムアウト（秒）
        wait_timeout: 待機時間の記録がない waitForElement* のタイムアウト（秒）
        strict: 未対応コマンドを UnsupportedCommandError にするか
    """

    base_url: str = ""
    indent: int = 4
    namespace: str = ""
    tester_class: str = "AcceptanceTester"
    class_suffix: str = "Cest"
    wait_for_text_timeout: int = 30
    wait_timeout: int = 30
    strict: bool = False


_INT_FIELDS = ("indent", "wait_for_text_timeout", "wait_timeout")
_BOOL_FIELDS = ("strict",)


def _parse_bool(value: Any) -> bool:
    """"true", "1", "yes"（大文字小文字不問）と True を真とみなす。"""
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("true", "1", "yes")


# ---------------------------------------------------------------------------
# 環境変数からの読み込み
# ---------------------------------------------------------------------------

def load_config_from_env(config: Optional[ExportConfig] = None) -> ExportConfig:
    """環境変数を ExportConfig に適用する。

    設定されていない環境変数はデフォルト値（または渡された config の値）を使用する。
    """
    config = config or ExportConfig()

    if _ENV_BASE_URL in os.environ:
        config.base_url = os.environ[_ENV_BASE_URL]

    if _ENV_INDENT in os.environ:
        try:
            config.indent = int(os.environ[_ENV_INDENT])
        except ValueError:
            logger.warning("CEPT_INDENT の値が不正です: %s", os.environ[_ENV_INDENT])

    if _ENV_NAMESPACE in os.environ:
        config.namespace = os.environ[_ENV_NAMESPACE]

    if _ENV_TESTER_CLASS in os.environ:
        config.tester_class = os.environ[_ENV_TESTER_CLASS]

    if _ENV_STRICT in os.environ:
        config.strict = _parse_bool(os.environ[_ENV_STRICT])

    return config


# ---------------------------------------------------------------------------
# 設定ファイルからの読み込み
# ---------------------------------------------------------------------------

def load_config_file(path: Path, config: Optional[ExportConfig] = None) -> ExportConfig:
    """YAML 設定ファイルを ExportConfig に適用する。

    未知のキーは警告を出して無視する。

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: YAML 構文エラー、またはトップレベルがマッピングでない場合
    """
    config = config or ExportConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"設定ファイルが見つかりません: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = YAML(typ="safe").load(f)
    except YAMLError as e:
        raise ValueError(f"設定ファイルの YAML 構文エラー: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ValueError(f"設定ファイルのトップレベルはマッピングである必要があります: {path}")

    known = {f.name for f in fields(ExportConfig)}
    for key, value in data.items():
        if key not in known:
            logger.warning("設定ファイルの未知のキーを無視します: %s", key)
            continue
        if value is None:
            continue
        if key in _INT_FIELDS:
            try:
                value = int(value)
            except (TypeError, ValueError):
                logger.warning("設定ファイルの %s の値が不正です: %s", key, value)
                continue
        elif key in _BOOL_FIELDS:
            value = _parse_bool(value)
        else:
            value = str(value)
        setattr(config, key, value)

    logger.debug("設定ファイルを読み込みました: %s", path)
    return config


# ---------------------------------------------------------------------------
# CLI 引数の適用
# ---------------------------------------------------------------------------

def apply_cli_overrides(config: ExportConfig, **overrides: Any) -> ExportConfig:
    """CLI 引数を ExportConfig に適用する。

    None の引数は未指定として扱い、上書きしない。
    """
    for key, value in overrides.items():
        if value is None:
            continue
        if not hasattr(config, key):
            raise ValueError(f"未知の設定項目です: {key}")
        setattr(config, key, value)
    return config


def resolve_config(config_path: Optional[Path] = None, **overrides: Any) -> ExportConfig:
    """優先順位に従って全設定元を合成する。

    config_path が未指定の場合、カレントディレクトリの cept.yaml があれば読み込む。
    """
    config = load_config_from_env()

    if config_path is not None:
        config = load_config_file(config_path, config)
    elif Path(DEFAULT_CONFIG_FILE).exists():
        config = load_config_file(Path(DEFAULT_CONFIG_FILE), config)

    config = apply_cli_overrides(config, **overrides)
    logger.info("設定を読み込みました: %s", config)
    return config


# ---------------------------------------------------------------------------
# 設定ファイルのひな形
# ---------------------------------------------------------------------------

CONFIG_TEMPLATE = """\
# cept エクスポート設定
# CLI 引数 > このファイル > 環境変数 > デフォルト値 の順に適用されます

# open の相対 URL に前置するベース URL（空ならプロジェクトの url）
base_url: ""

# 生成コードのインデント幅
indent: 4

# 生成クラスの名前空間（空なら namespace 宣言なし）
namespace: ""

# Codeception のアクタークラス名
tester_class: AcceptanceTester

# 生成クラス名の接尾辞
class_suffix: Cest

# waitForText のタイムアウト（秒）
wait_for_text_timeout: 30

# 待機時間の記録がない waitForElement* のタイムアウト（秒）
wait_timeout: 30

# 未対応コマンドをエラーにする
strict: false
"""
