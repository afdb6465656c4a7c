"""
記録プロジェクトのスキーマ定義 — Project / Suite / TestCase / Step

Selenium IDE のプロジェクトファイル（.side）の構造を Pydantic v2 モデルで表現する。
JSON のキー名（command, opensWindow 等）はエイリアスとして受け付け、
Python 側では snake_case の属性名で参照する。

Step は不変（frozen）であり、コード生成の過程で書き換えられることはない。
"""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..emit.scripts import ScriptSource

# コメントアウトされたコマンドの接頭辞
DISABLED_PREFIX = "//"


# ---------------------------------------------------------------------------
# ステップ
# ---------------------------------------------------------------------------

class Step(BaseModel):
    """記録された 1 コマンド。

    target / value の意味はコマンドごとに異なる（ロケータ、変数名、期待値、スクリプト等）。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="ステップ ID")
    name: str = Field(default="", alias="command", description="コマンド名（click, open 等）")
    target: str = Field(default="", description="ターゲット（ロケータ等）")
    value: str = Field(default="", description="値（入力値、変数名、期待値等）")
    comment: str = Field(default="", description="記録時のコメント")
    opens_window: bool = Field(
        default=False, alias="opensWindow", description="新しいウィンドウを開くステップか"
    )
    window_handle_name: str = Field(
        default="", alias="windowHandleName", description="新しいウィンドウのハンドルを格納する変数名"
    )
    window_timeout: Optional[int] = Field(
        default=None, alias="windowTimeout", description="新しいウィンドウの待機時間（ミリ秒）"
    )
    script: Optional[ScriptSource] = Field(
        default=None, description="事前解析済みのスクリプト（未指定時は target から解析）"
    )

    @property
    def is_disabled(self) -> bool:
        """コメントアウトされたコマンド（``//click`` 等）か。"""
        return self.name.startswith(DISABLED_PREFIX)


# ---------------------------------------------------------------------------
# テストケース / スイート / プロジェクト
# ---------------------------------------------------------------------------

class TestCase(BaseModel):
    """記録されたテストケース。"""

    __test__: ClassVar[bool] = False

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="テスト ID")
    name: str = Field(..., description="テスト名（生成メソッド名の元）")
    commands: list[Step] = Field(default_factory=list, description="ステップ列")


class Suite(BaseModel):
    """テストケースのまとまり。tests はテスト ID のリスト。"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="スイート ID")
    name: str = Field(..., description="スイート名")
    tests: list[str] = Field(default_factory=list, description="所属するテスト ID")


class Project(BaseModel):
    """記録プロジェクト全体。"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="プロジェクト ID")
    name: str = Field(..., description="プロジェクト名（生成クラス名の元）")
    url: str = Field(default="", description="記録時のベース URL")
    tests: list[TestCase] = Field(default_factory=list, description="テストケース一覧")
    suites: list[Suite] = Field(default_factory=list, description="スイート一覧")

    def find_test(self, key: str) -> Optional[TestCase]:
        """ID または名前でテストケースを検索する。"""
        for test in self.tests:
            if test.id == key or test.name == key:
                return test
        return None
