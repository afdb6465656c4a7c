"""
標準コマンドジェネレータ — 記録コマンドを Codeception の文に変換

Selenium IDE 形式の記録コマンドを PHP Codeception（WebDriver モジュール + Asserts）の
文に変換する。各ジェネレータは EmitterFn Protocol を満たし、EmitterRegistry に登録される。

カテゴリ:
  - ナビゲーション: open, close, setWindowSize, selectWindow, selectFrame
  - 操作: click, doubleClick, mouse*, check, uncheck, submit, sendKeys, type, editContent, select, dragAndDropToObject
  - 検証: assert*, verify*（同じジェネレータを共有）
  - 制御構文: if, elseIf, else, end, do, repeatIf, while, forEach, times
  - スクリプト: executeScript, executeAsyncScript, runScript, run
  - 格納: store, storeText, storeAttribute, storeTitle, storeValue, storeJson, storeWindowHandle, storeXpathCount
  - 待機: waitForElement*, waitForText
  - ダイアログ: webdriverAnswerOnVisiblePrompt, webdriverChoose*OnVisible*
  - その他: echo, pause
  - 出力なし: setSpeed, debugger, answerOnNextPrompt, choose*OnNext*

一時的な要素ハンドル（$element 等）を使う場合は { } ブロックで囲み、最後に unset する。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .addressing import emit_select_frame, emit_select_window
from .control_flow import (
    emit_control_flow_do,
    emit_control_flow_else,
    emit_control_flow_else_if,
    emit_control_flow_end,
    emit_control_flow_for_each,
    emit_control_flow_if,
    emit_control_flow_repeat_if,
    emit_control_flow_times,
    emit_control_flow_while,
)
from .keys import generate_send_keys_input, split_key_sequence
from .literals import milliseconds_to_seconds, php_string, sanitize_name
from .registry import EmitContext, EmitterFn, EmitterInfo, EmitterRegistry
from .results import EmissionBlock, EmissionResult
from .scripts import generate_script_call

if TYPE_CHECKING:
    from ..side.schema import Step

logger = logging.getLogger(__name__)

# http / https / file スキームの URL はベース URL を前置しない
_ABSOLUTE_URL_PREFIXES = ("file://", "http://", "https://")

# ページタイトルの取得式
TITLE = "$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->getTitle())"

# 表示中のアラート
_ALERT = "$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->switchTo()->alert())"


# ===========================================================================
# 共通ヘルパー
# ===========================================================================

async def _find(step_target: str | None, context: EmitContext) -> str:
    """``$this->findElement($I, <locator>)`` 式を返す。"""
    locator = await context.location.resolve(step_target or "")
    return f"$this->findElement($I, {locator})"


def _handle_block(handle: str, acquire: str, *body: tuple[int, str]) -> EmissionBlock:
    """一時ハンドルを取得し、処理後に解放するブロックを生成する。

    body のレベルはブロック本体からの相対値（0 = { の内側）。
    """
    return EmissionBlock.of(
        (0, "{"),
        (1, f"{handle} = {acquire};"),
        *((level + 1, text) for level, text in body),
        (1, f"unset({handle});"),
        (0, "}"),
    )


def _selenium(action: str) -> str:
    """RemoteWebDriver を直接操作する文を返す。"""
    return f"$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => {action});"


# ===========================================================================
# ナビゲーション
# ===========================================================================

async def emit_open(step: Step, context: EmitContext) -> EmissionResult:
    """open — ベース URL を前置して遷移（絶対 URL はそのまま）。"""
    target = step.target or ""
    url = target if target.startswith(_ABSOLUTE_URL_PREFIXES) else f"{context.base_url}{target}"
    return f"$I->amOnUrl({context.text(url)});"


async def emit_close(step: Step, context: EmitContext) -> EmissionResult:
    return "$I->closeTab();"


async def emit_set_window_size(step: Step, context: EmitContext) -> EmissionResult:
    """setWindowSize — ``1280x800`` 形式のサイズでウィンドウをリサイズ。"""
    width, separator, height = (step.target or "").partition("x")
    if not separator or not width.strip().isdigit() or not height.strip().isdigit():
        raise ValueError(f"ウィンドウサイズは WxH 形式で指定してください: {step.target!r}")
    return f"$I->resizeWindow({int(width)}, {int(height)});"


async def emit_select_window_command(step: Step, context: EmitContext) -> EmissionResult:
    return await emit_select_window(step.target or "", context)


async def emit_select_frame_command(step: Step, context: EmitContext) -> EmissionResult:
    return await emit_select_frame(step.target or "", context)


# ===========================================================================
# 操作
# ===========================================================================

async def emit_click(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return EmissionBlock.of(
        (0, f"$I->waitForElementClickable({locator});"),
        (0, f"$I->click({locator});"),
    )


async def emit_double_click(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return EmissionBlock.of(
        (0, f"$I->waitForElementClickable({locator});"),
        (0, f"$I->doubleClick({locator});"),
    )


async def emit_mouse_down(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$element",
        await _find(step.target, context),
        (0, _selenium("$webDriver->action()->clickAndHold($element)->perform()")),
    )


async def emit_mouse_up(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$element",
        await _find(step.target, context),
        (0, _selenium("$webDriver->action()->release($element)->perform()")),
    )


async def emit_mouse_move(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$element",
        await _find(step.target, context),
        (0, _selenium("$webDriver->action()->moveToElement($element)->perform()")),
    )


async def emit_mouse_out(step: Step, context: EmitContext) -> EmissionResult:
    """mouseOut — body の左上へポインタを移動する。"""
    return _handle_block(
        "$element",
        "$this->findElement($I, WebDriverBy::tagName('body'))",
        (0, _selenium("$webDriver->action()->moveToElement($element, 0, 0)->perform()")),
    )


async def emit_check(step: Step, context: EmitContext) -> EmissionResult:
    """check — 未チェックの場合のみクリック（判定は実行時）。"""
    locator = await context.location.resolve(step.target or "")
    return _handle_block(
        "$element",
        f"$this->findElement($I, {locator})",
        (0, f"$I->waitForElementClickable({locator});"),
        (0, "if (!$element->isSelected()) {"),
        (1, "$element->click();"),
        (0, "}"),
    )


async def emit_uncheck(step: Step, context: EmitContext) -> EmissionResult:
    """uncheck — チェック済みの場合のみクリック（判定は実行時）。"""
    locator = await context.location.resolve(step.target or "")
    return _handle_block(
        "$element",
        f"$this->findElement($I, {locator})",
        (0, f"$I->waitForElementClickable({locator});"),
        (0, "if ($element->isSelected()) {"),
        (1, "$element->click();"),
        (0, "}"),
    )


async def emit_submit(step: Step, context: EmitContext) -> EmissionResult:
    return f"{await _find(step.target, context)}->submit();"


async def emit_send_keys(step: Step, context: EmitContext) -> EmissionResult:
    """sendKeys — キー名・変数・リテラルを pressKey の可変長引数で送信。"""
    locator = await context.location.resolve(step.target or "")
    keys = generate_send_keys_input(split_key_sequence(step.value or "", context.variable_lookup))
    return f"$I->pressKey({locator}, {keys});"


async def emit_type(step: Step, context: EmitContext) -> EmissionResult:
    """type — 入力欄をクリアして値を入力。"""
    locator = await context.location.resolve(step.target or "")
    return f"$I->fillField({locator}, {context.text(step.value)});"


async def emit_edit_content(step: Step, context: EmitContext) -> EmissionResult:
    """editContent — contentEditable 要素の内容を置き換える。"""
    script = php_string(
        "if (arguments[0].contentEditable === 'true') { arguments[0].innerText = arguments[1]; }"
    )
    return _handle_block(
        "$element",
        await _find(step.target, context),
        (0, f"$I->executeJS({script}, [$element, {context.text(step.value)}]);"),
    )


async def emit_select(step: Step, context: EmitContext) -> EmissionResult:
    """select / addSelection / removeSelection — 選択肢をクリック。"""
    option = await context.selection.resolve(step.value or "")
    return _handle_block(
        "$dropdown",
        await _find(step.target, context),
        (0, f"$dropdown->findElement({option})->click();"),
    )


async def emit_drag_and_drop(step: Step, context: EmitContext) -> EmissionResult:
    dragged = await context.location.resolve(step.target or "")
    dropped = await context.location.resolve(step.value or "")
    return f"$I->dragAndDrop({dragged}, {dropped});"


# ===========================================================================
# 検証（assert / verify 共通）
# ===========================================================================

async def emit_assert(step: Step, context: EmitContext) -> EmissionResult:
    """assert — 変数の値と期待値を比較（target が変数名、value が期待値）。"""
    return (
        f"$I->assertEquals({context.text(step.value)}, "
        f"{context.variable_lookup(step.target or '')});"
    )


async def emit_assert_alert(step: Step, context: EmitContext) -> EmissionResult:
    return f"$I->assertEquals({context.text(step.target)}, {_ALERT}->getText());"


async def emit_verify_checked(step: Step, context: EmitContext) -> EmissionResult:
    return f"$I->assertTrue({await _find(step.target, context)}->isSelected());"


async def emit_verify_not_checked(step: Step, context: EmitContext) -> EmissionResult:
    return f"$I->assertFalse({await _find(step.target, context)}->isSelected());"


async def emit_verify_editable(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$element",
        await _find(step.target, context),
        (0, "$I->assertTrue($element->isEnabled() && $element->getAttribute('readonly') === null);"),
    )


async def emit_verify_not_editable(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$element",
        await _find(step.target, context),
        (0, "$I->assertFalse($element->isEnabled() && $element->getAttribute('readonly') === null);"),
    )


async def emit_verify_element_present(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return _handle_block(
        "$elements",
        f"$this->findElements($I, {locator})",
        (0, "$I->assertGreaterThan(0, count($elements));"),
    )


async def emit_verify_element_not_present(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return _handle_block(
        "$elements",
        f"$this->findElements($I, {locator})",
        (0, "$I->assertCount(0, $elements);"),
    )


async def emit_verify_text(step: Step, context: EmitContext) -> EmissionResult:
    return (
        f"$I->assertEquals({context.text(step.value)}, "
        f"{await _find(step.target, context)}->getText());"
    )


async def emit_verify_not_text(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$text",
        f"{await _find(step.target, context)}->getText()",
        (0, f"$I->assertNotEquals({context.text(step.value)}, $text);"),
    )


async def emit_verify_value(step: Step, context: EmitContext) -> EmissionResult:
    """assertValue / assertSelectedValue — value 属性を比較。"""
    return _handle_block(
        "$value",
        f"{await _find(step.target, context)}->getAttribute('value')",
        (0, f"$I->assertEquals({context.text(step.value)}, $value);"),
    )


async def emit_verify_not_selected_value(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$value",
        f"{await _find(step.target, context)}->getAttribute('value')",
        (0, f"$I->assertNotEquals({context.text(step.value)}, $value);"),
    )


async def emit_verify_selected_label(step: Step, context: EmitContext) -> EmissionResult:
    """assertSelectedLabel — 選択中の option のラベルを比較。"""
    return EmissionBlock.of(
        (0, "{"),
        (1, f"$element = {await _find(step.target, context)};"),
        (1, "$value = $element->getAttribute('value');"),
        (1, "$locator = sprintf(\"option[@value='%s']\", $value);"),
        (1, "$selectedText = $element->findElement(WebDriverBy::xpath($locator))->getText();"),
        (1, f"$I->assertEquals({context.text(step.value)}, $selectedText);"),
        (1, "unset($element, $value, $locator, $selectedText);"),
        (0, "}"),
    )


async def emit_verify_title(step: Step, context: EmitContext) -> EmissionResult:
    return f"$I->assertEquals({context.text(step.target)}, {TITLE});"


# ===========================================================================
# スクリプト
# ===========================================================================

async def emit_execute_script(step: Step, context: EmitContext) -> EmissionResult:
    """executeScript — 結果を value の変数に格納（変数名がなければ実行のみ）。"""
    script = context.script(step)
    call = generate_script_call("executeJS", script.script, script, context.variable_lookup)
    if step.value:
        return context.variables.write(step.value, call)
    return f"{call};"


async def emit_execute_async_script(step: Step, context: EmitContext) -> EmissionResult:
    """executeAsyncScript — 完了/失敗を最後の引数（コールバック）へ渡す。"""
    script = context.script(step)
    body = (
        "var callback = arguments[arguments.length - 1];"
        f"{script.script}.then(callback).catch(callback);"
    )
    call = generate_script_call("executeAsyncJS", body, script, context.variable_lookup)
    if step.value:
        return context.variables.write(step.value, call)
    return f"{call};"


async def emit_run_script(step: Step, context: EmitContext) -> EmissionResult:
    script = context.script(step)
    return f"{generate_script_call('executeJS', script.script, script, context.variable_lookup)};"


async def emit_run(step: Step, context: EmitContext) -> EmissionResult:
    """run — 別テストに対応するメソッドを呼び出す。"""
    return f"$this->{sanitize_name(step.target or '')}($I);"


# ===========================================================================
# 格納
# ===========================================================================

async def emit_store(step: Step, context: EmitContext) -> EmissionResult:
    return context.variables.write(step.value, context.text(step.target)) or None


async def emit_store_text(step: Step, context: EmitContext) -> EmissionResult:
    if not step.value:
        return None
    return context.variables.write(step.value, f"{await _find(step.target, context)}->getText()")


async def emit_store_value(step: Step, context: EmitContext) -> EmissionResult:
    if not step.value:
        return None
    return context.variables.write(
        step.value, f"{await _find(step.target, context)}->getAttribute('value')"
    )


def split_attribute_locator(locator: str) -> tuple[str, str]:
    """``<locator>@<attribute>`` を最後の ``@`` で分解する。

    Raises:
        ValueError: ``@`` を含まない場合
    """
    position = locator.rfind("@")
    if position < 0:
        raise ValueError(f"属性ロケータは <locator>@<attribute> 形式で指定してください: {locator!r}")
    return locator[:position], locator[position + 1:]


async def emit_store_attribute(step: Step, context: EmitContext) -> EmissionResult:
    if not step.value:
        return None
    element_locator, attribute_name = split_attribute_locator(step.target or "")
    return context.variables.write(
        step.value,
        f"{await _find(element_locator, context)}->getAttribute({php_string(attribute_name)})",
    )


async def emit_store_title(step: Step, context: EmitContext) -> EmissionResult:
    return context.variables.write(step.value, TITLE) or None


async def emit_store_json(step: Step, context: EmitContext) -> EmissionResult:
    return context.variables.write(step.value, f"json_decode({php_string(step.target or '')}, true)") or None


async def emit_store_window_handle(step: Step, context: EmitContext) -> EmissionResult:
    """storeWindowHandle — 変数名は target に記録される。"""
    return context.variables.write(
        step.target, "$I->executeInSelenium(fn (RemoteWebDriver $webDriver) => $webDriver->getWindowHandle())"
    ) or None


async def emit_store_xpath_count(step: Step, context: EmitContext) -> EmissionResult:
    if not step.value:
        return None
    locator = await context.location.resolve(step.target or "")
    return context.variables.write(step.value, f"count($this->findElements($I, {locator}))")


# ===========================================================================
# 待機
# ===========================================================================

async def emit_wait_for_element_present(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return f"$I->waitForElement({locator}, {milliseconds_to_seconds(step.value, context.wait_timeout)});"


async def emit_wait_for_element_not_present(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    timeout = milliseconds_to_seconds(step.value, context.wait_timeout)
    return _selenium(
        f"$webDriver->wait({timeout})->until("
        f"WebDriverExpectedCondition::not(WebDriverExpectedCondition::presenceOfElementLocated({locator})))"
    )


async def emit_wait_for_element_visible(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return f"$I->waitForElementVisible({locator}, {milliseconds_to_seconds(step.value, context.wait_timeout)});"


async def emit_wait_for_element_not_visible(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return f"$I->waitForElementNotVisible({locator}, {milliseconds_to_seconds(step.value, context.wait_timeout)});"


async def emit_wait_for_element_editable(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    return f"$I->waitForElementClickable({locator}, {milliseconds_to_seconds(step.value, context.wait_timeout)});"


async def emit_wait_for_element_not_editable(step: Step, context: EmitContext) -> EmissionResult:
    locator = await context.location.resolve(step.target or "")
    timeout = milliseconds_to_seconds(step.value, context.wait_timeout)
    return _selenium(
        f"$webDriver->wait({timeout})->until("
        f"WebDriverExpectedCondition::not(WebDriverExpectedCondition::elementToBeClickable({locator})))"
    )


async def emit_wait_for_text(step: Step, context: EmitContext) -> EmissionResult:
    """waitForText — 記録にタイムアウトがないため既定値を使用する。"""
    locator = await context.location.resolve(step.target or "")
    return (
        f"$I->waitForText({context.text(step.value)}, "
        f"{context.wait_for_text_timeout}, {locator});"
    )


# ===========================================================================
# ダイアログ
# ===========================================================================

async def emit_answer_on_visible_prompt(step: Step, context: EmitContext) -> EmissionResult:
    return _handle_block(
        "$alert",
        _ALERT,
        (0, f"$alert->sendKeys({context.text(step.target)});"),
        (0, "$alert->accept();"),
    )


async def emit_choose_cancel_on_visible_confirmation(step: Step, context: EmitContext) -> EmissionResult:
    return "$I->cancelPopup();"


async def emit_choose_ok_on_visible_confirmation(step: Step, context: EmitContext) -> EmissionResult:
    return "$I->acceptPopup();"


# ===========================================================================
# その他
# ===========================================================================

async def emit_echo(step: Step, context: EmitContext) -> EmissionResult:
    return f"$I->comment({context.text(step.target)});"


async def emit_pause(step: Step, context: EmitContext) -> EmissionResult:
    """pause — ミリ秒指定を秒に変換して待機。"""
    return f"$I->wait({milliseconds_to_seconds(step.target)});"


async def skip(step: Step, context: EmitContext) -> EmissionResult:
    """生成コードに対応物がないコマンド。"""
    return None


# ===========================================================================
# レジストリ登録
# ===========================================================================

# コマンド名, ジェネレータ, 説明, カテゴリ
_STANDARD_COMMANDS: list[tuple[str, EmitterFn, str, str]] = [
    # ナビゲーション
    ("open", emit_open, "URL へ遷移（相対 URL はベース URL を前置）", "navigation"),
    ("close", emit_close, "現在のタブを閉じる", "navigation"),
    ("setWindowSize", emit_set_window_size, "ウィンドウサイズを変更", "navigation"),
    ("selectWindow", emit_select_window_command, "ウィンドウを切り替え", "navigation"),
    ("selectFrame", emit_select_frame_command, "フレームを切り替え", "navigation"),
    # 操作
    ("click", emit_click, "クリック可能になるのを待ってクリック", "action"),
    ("clickAt", emit_click, "クリック可能になるのを待ってクリック", "action"),
    ("doubleClick", emit_double_click, "クリック可能になるのを待ってダブルクリック", "action"),
    ("doubleClickAt", emit_double_click, "クリック可能になるのを待ってダブルクリック", "action"),
    ("mouseDown", emit_mouse_down, "要素上でマウスボタンを押下", "action"),
    ("mouseDownAt", emit_mouse_down, "要素上でマウスボタンを押下", "action"),
    ("mouseUp", emit_mouse_up, "要素上でマウスボタンを解放", "action"),
    ("mouseUpAt", emit_mouse_up, "要素上でマウスボタンを解放", "action"),
    ("mouseMove", emit_mouse_move, "要素へポインタを移動", "action"),
    ("mouseMoveAt", emit_mouse_move, "要素へポインタを移動", "action"),
    ("mouseOver", emit_mouse_move, "要素へポインタを移動", "action"),
    ("mouseOut", emit_mouse_out, "ポインタを要素外へ移動", "action"),
    ("check", emit_check, "チェックボックスをチェック", "action"),
    ("uncheck", emit_uncheck, "チェックボックスのチェックを外す", "action"),
    ("submit", emit_submit, "フォームを送信", "action"),
    ("sendKeys", emit_send_keys, "キー入力を送信", "action"),
    ("type", emit_type, "入力欄に値を入力", "action"),
    ("editContent", emit_edit_content, "contentEditable 要素の内容を変更", "action"),
    ("select", emit_select, "select の選択肢を選択", "action"),
    ("addSelection", emit_select, "複数選択 select に選択肢を追加", "action"),
    ("removeSelection", emit_select, "複数選択 select の選択肢を切り替え", "action"),
    ("dragAndDropToObject", emit_drag_and_drop, "要素を別の要素へドラッグ＆ドロップ", "action"),
    # 検証
    ("assert", emit_assert, "変数の値を検証", "assertion"),
    ("assertAlert", emit_assert_alert, "アラートのテキストを検証", "assertion"),
    ("assertConfirmation", emit_assert_alert, "確認ダイアログのテキストを検証", "assertion"),
    ("assertPrompt", emit_assert_alert, "プロンプトのテキストを検証", "assertion"),
    ("assertChecked", emit_verify_checked, "チェック状態を検証", "assertion"),
    ("assertNotChecked", emit_verify_not_checked, "未チェック状態を検証", "assertion"),
    ("assertEditable", emit_verify_editable, "編集可能であることを検証", "assertion"),
    ("assertNotEditable", emit_verify_not_editable, "編集不可であることを検証", "assertion"),
    ("assertElementPresent", emit_verify_element_present, "要素が存在することを検証", "assertion"),
    ("assertElementNotPresent", emit_verify_element_not_present, "要素が存在しないことを検証", "assertion"),
    ("assertText", emit_verify_text, "要素のテキストを検証", "assertion"),
    ("assertNotText", emit_verify_not_text, "要素のテキストが一致しないことを検証", "assertion"),
    ("assertValue", emit_verify_value, "入力値を検証", "assertion"),
    ("assertSelectedValue", emit_verify_value, "選択中の値を検証", "assertion"),
    ("assertNotSelectedValue", emit_verify_not_selected_value, "選択中の値が一致しないことを検証", "assertion"),
    ("assertSelectedLabel", emit_verify_selected_label, "選択中のラベルを検証", "assertion"),
    ("assertTitle", emit_verify_title, "ページタイトルを検証", "assertion"),
    # スクリプト
    ("executeScript", emit_execute_script, "スクリプトを実行し結果を格納", "script"),
    ("executeAsyncScript", emit_execute_async_script, "非同期スクリプトを実行し結果を格納", "script"),
    ("runScript", emit_run_script, "スクリプトを実行", "script"),
    ("run", emit_run, "別のテストを実行", "script"),
    # 格納
    ("store", emit_store, "値を変数に格納", "store"),
    ("storeText", emit_store_text, "要素のテキストを変数に格納", "store"),
    ("storeValue", emit_store_value, "入力値を変数に格納", "store"),
    ("storeAttribute", emit_store_attribute, "要素の属性値を変数に格納", "store"),
    ("storeTitle", emit_store_title, "ページタイトルを変数に格納", "store"),
    ("storeJson", emit_store_json, "JSON を解析して変数に格納", "store"),
    ("storeWindowHandle", emit_store_window_handle, "現在のウィンドウハンドルを変数に格納", "store"),
    ("storeXpathCount", emit_store_xpath_count, "一致する要素数を変数に格納", "store"),
    # 待機
    ("waitForElementPresent", emit_wait_for_element_present, "要素が存在するまで待機", "wait"),
    ("waitForElementNotPresent", emit_wait_for_element_not_present, "要素が存在しなくなるまで待機", "wait"),
    ("waitForElementVisible", emit_wait_for_element_visible, "要素が表示されるまで待機", "wait"),
    ("waitForElementNotVisible", emit_wait_for_element_not_visible, "要素が非表示になるまで待機", "wait"),
    ("waitForElementEditable", emit_wait_for_element_editable, "要素が編集可能になるまで待機", "wait"),
    ("waitForElementNotEditable", emit_wait_for_element_not_editable, "要素が編集不可になるまで待機", "wait"),
    ("waitForText", emit_wait_for_text, "要素に指定テキストが現れるまで待機", "wait"),
    # ダイアログ
    ("webdriverAnswerOnVisiblePrompt", emit_answer_on_visible_prompt, "表示中のプロンプトに入力して確定", "dialog"),
    ("webdriverChooseCancelOnVisibleConfirmation", emit_choose_cancel_on_visible_confirmation,
     "表示中の確認ダイアログをキャンセル", "dialog"),
    ("webdriverChooseCancelOnVisiblePrompt", emit_choose_cancel_on_visible_confirmation,
     "表示中のプロンプトをキャンセル", "dialog"),
    ("webdriverChooseOkOnVisibleConfirmation", emit_choose_ok_on_visible_confirmation,
     "表示中の確認ダイアログで OK を選択", "dialog"),
    # 制御構文
    ("if", emit_control_flow_if, "条件分岐を開始", "control-flow"),
    ("elseIf", emit_control_flow_else_if, "別条件の分岐", "control-flow"),
    ("else", emit_control_flow_else, "それ以外の分岐", "control-flow"),
    ("end", emit_control_flow_end, "ブロックを閉じる", "control-flow"),
    ("do", emit_control_flow_do, "後判定ループを開始", "control-flow"),
    ("repeatIf", emit_control_flow_repeat_if, "後判定ループを閉じる", "control-flow"),
    ("while", emit_control_flow_while, "前判定ループを開始", "control-flow"),
    ("forEach", emit_control_flow_for_each, "コレクション変数を反復", "control-flow"),
    ("times", emit_control_flow_times, "指定回数繰り返す", "control-flow"),
    # その他
    ("echo", emit_echo, "メッセージを出力", "misc"),
    ("pause", emit_pause, "指定ミリ秒待機", "misc"),
    # 出力なし
    ("answerOnNextPrompt", skip, "記録側専用（出力なし）", "no-op"),
    ("chooseCancelOnNextConfirmation", skip, "記録側専用（出力なし）", "no-op"),
    ("chooseCancelOnNextPrompt", skip, "記録側専用（出力なし）", "no-op"),
    ("chooseOkOnNextConfirmation", skip, "記録側専用（出力なし）", "no-op"),
    ("setSpeed", skip, "実行速度の設定（出力なし）", "no-op"),
    ("debugger", skip, "ブレークポイント（出力なし）", "no-op"),
]

# verify* は assert* と同じジェネレータを使用する
_VERIFY_ALIASES: list[tuple[str, str]] = [
    ("verify", "assert"),
    ("verifyChecked", "assertChecked"),
    ("verifyNotChecked", "assertNotChecked"),
    ("verifyEditable", "assertEditable"),
    ("verifyNotEditable", "assertNotEditable"),
    ("verifyElementPresent", "assertElementPresent"),
    ("verifyElementNotPresent", "assertElementNotPresent"),
    ("verifyText", "assertText"),
    ("verifyNotText", "assertNotText"),
    ("verifyValue", "assertValue"),
    ("verifySelectedValue", "assertSelectedValue"),
    ("verifyNotSelectedValue", "assertNotSelectedValue"),
    ("verifySelectedLabel", "assertSelectedLabel"),
    ("verifyTitle", "assertTitle"),
]


def register_standard_commands(registry: EmitterRegistry) -> None:
    """全標準コマンドのジェネレータをレジストリに登録する。"""
    for name, emitter, description, category in _STANDARD_COMMANDS:
        registry.register(name, emitter, info=EmitterInfo(name, description, category))

    standard = {name: (emitter, description, category)
                for name, emitter, description, category in _STANDARD_COMMANDS}
    for verify_name, assert_name in _VERIFY_ALIASES:
        emitter, description, category = standard[assert_name]
        registry.register(
            verify_name, emitter, info=EmitterInfo(verify_name, description, category)
        )

    logger.debug(
        "標準コマンド %d 種を登録しました", len(_STANDARD_COMMANDS) + len(_VERIFY_ALIASES)
    )


def create_default_registry() -> EmitterRegistry:
    """標準コマンドが登録済みの EmitterRegistry を生成する。"""
    registry = EmitterRegistry()
    register_standard_commands(registry)
    return registry
