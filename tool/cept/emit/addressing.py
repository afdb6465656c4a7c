"""
ウィンドウ / フレームのアドレッシングモード解決

selectWindow / selectFrame のターゲット文字列を解析し、対応する切り替え文を生成する。
モードは接頭辞・パターンのみで決定し、推測はしない（先に一致したものを採用）。

  relative=top | relative=parent → 既定コンテンツへ戻る（フレーム）
  index=<n>                      → フレーム番号で切り替え（フレーム）
  handle=<id>                    → ハンドルで切り替え（ウィンドウ）
  name=<label>                   → 名前で切り替え（ウィンドウ）
  win_ser_local                  → 既知ハンドルの先頭へ切り替え（ウィンドウ）
  win_ser_<n>                    → 既知ハンドルの n 番目へ切り替え（ウィンドウ）
  その他                          → フレームは要素ロケータ、ウィンドウはエラー
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .errors import UnsupportedAddressingError
from .results import EmissionBlock, EmissionResult
from .window import ALL_WINDOW_HANDLES

if TYPE_CHECKING:
    from .registry import EmitContext

_INDEX = re.compile(r"^index=(.*)$")
_HANDLE = re.compile(r"^handle=(.*)$")
_NAME = re.compile(r"^name=(.*)$")
_SERIAL = re.compile(r"^win_ser_(.*)$")
_RELATIVE = ("relative=top", "relative=parent")

# 既定コンテンツ（トップレベル）へ戻る文
_DEFAULT_CONTENT = (
    "$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->switchTo()->defaultContent());"
)


class AddressingMode(Enum):
    """ウィンドウ / フレームの指定方式。"""

    RELATIVE = "relative"
    INDEX = "index"
    HANDLE = "handle"
    NAME = "name"
    SERIAL = "serial"
    LOCATOR = "locator"


@dataclass(frozen=True)
class Address:
    """解析済みのターゲット。

    Attributes:
        mode: アドレッシングモード
        value: モードごとの値（番号、ハンドル、名前、ロケータ）
    """

    mode: AddressingMode
    value: str


# ---------------------------------------------------------------------------
# 解析
# ---------------------------------------------------------------------------

def parse_window_target(target: str) -> Address:
    """selectWindow のターゲットを解析する。

    Raises:
        UnsupportedAddressingError: handle= / name= / win_ser_ のいずれにも一致しない場合
    """
    target = target or ""
    match = _HANDLE.match(target)
    if match:
        return Address(AddressingMode.HANDLE, match.group(1))
    match = _NAME.match(target)
    if match:
        return Address(AddressingMode.NAME, match.group(1))
    match = _SERIAL.match(target)
    if match:
        serial = match.group(1)
        if serial == "local":
            return Address(AddressingMode.SERIAL, "0")
        if serial.isdigit():
            return Address(AddressingMode.SERIAL, str(int(serial)))
        raise UnsupportedAddressingError(
            target, f"win_ser_ の後には local または整数を指定してください: {target!r}"
        )
    raise UnsupportedAddressingError(target)


def parse_frame_target(target: str) -> Address:
    """selectFrame のターゲットを解析する。

    Raises:
        UnsupportedAddressingError: index= の値が整数でない場合
    """
    target = target or ""
    if target in _RELATIVE:
        return Address(AddressingMode.RELATIVE, target.split("=", 1)[1])
    match = _INDEX.match(target)
    if match:
        try:
            index = int(float(match.group(1)))
        except (ValueError, OverflowError) as e:
            raise UnsupportedAddressingError(
                target, f"index= の値が数値ではありません: {target!r}"
            ) from e
        return Address(AddressingMode.INDEX, str(index))
    return Address(AddressingMode.LOCATOR, target)


# ---------------------------------------------------------------------------
# 生成
# ---------------------------------------------------------------------------

async def emit_select_window(target: str, context: EmitContext) -> EmissionResult:
    """selectWindow の切り替え文を生成する。"""
    address = parse_window_target(target)

    if address.mode is AddressingMode.HANDLE:
        return f"$I->switchToWindow({context.text(address.value)});"

    if address.mode is AddressingMode.NAME:
        return f"$I->switchToWindow({context.text(address.value)});"

    # SERIAL
    return f"$I->switchToWindow({ALL_WINDOW_HANDLES}[{address.value}]);"


async def emit_select_frame(target: str, context: EmitContext) -> EmissionResult:
    """selectFrame の切り替え文を生成する。"""
    address = parse_frame_target(target)

    if address.mode is AddressingMode.RELATIVE:
        return _DEFAULT_CONTENT

    if address.mode is AddressingMode.INDEX:
        return (
            "$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => "
            f"$webDriver->switchTo()->frame({address.value}));"
        )

    locator = await context.location.resolve(address.value)
    return EmissionBlock.of(
        (0, "{"),
        (1, f"$element = $this->findElement($I, {locator});"),
        (1, "$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->switchTo()->frame($element));"),
        (1, "unset($element);"),
        (0, "}"),
    )
