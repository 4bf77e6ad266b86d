# tests/test_router.py

import pytest

from repoask.browser import FileBrowser
from repoask.keys import Action, Focus, FocusInput, KeyPress, next_focus
from repoask.router import FocusRouter

CTRL = {
    FocusInput.LEFT: KeyPress("h", ctrl=True),
    FocusInput.RIGHT: KeyPress("l", ctrl=True),
    FocusInput.UP: KeyPress("k", ctrl=True),
    FocusInput.DOWN: KeyPress("j", ctrl=True),
}

EXPECTED = {
    (Focus.FILE_BROWSER, FocusInput.LEFT): Focus.FILE_BROWSER,
    (Focus.FILE_BROWSER, FocusInput.RIGHT): Focus.PROMPT_EDITOR,
    (Focus.FILE_BROWSER, FocusInput.UP): Focus.FILE_BROWSER,
    (Focus.FILE_BROWSER, FocusInput.DOWN): Focus.OPTIONS,
    (Focus.PROMPT_EDITOR, FocusInput.LEFT): Focus.FILE_BROWSER,
    (Focus.PROMPT_EDITOR, FocusInput.RIGHT): Focus.PROMPT_EDITOR,
    (Focus.PROMPT_EDITOR, FocusInput.UP): Focus.PROMPT_EDITOR,
    (Focus.PROMPT_EDITOR, FocusInput.DOWN): Focus.OPTIONS,
    (Focus.OPTIONS, FocusInput.LEFT): Focus.OPTIONS,
    (Focus.OPTIONS, FocusInput.RIGHT): Focus.OPTIONS,
    (Focus.OPTIONS, FocusInput.UP): Focus.PROMPT_EDITOR,
    (Focus.OPTIONS, FocusInput.DOWN): Focus.OPTIONS,
}


class TickCounter:
    def __init__(self):
        self.ticks = 0
        self.keys = []

    def process_key(self, key):
        self.keys.append(key)
        return None

    def process_tick(self):
        self.ticks += 1


@pytest.fixture
def router():
    return FocusRouter(FileBrowser.from_walk([("a.txt", 0, False), ("b.txt", 0, False)]))


@pytest.mark.parametrize("start,move", list(EXPECTED))
def test_transition_table_is_total(router, start, move):
    router.focus = start
    assert router.process_key(CTRL[move]) is None
    assert router.focus is EXPECTED[(start, move)]
    assert next_focus(start, move) is EXPECTED[(start, move)]


def test_focus_walkthrough(router):
    assert router.focus is Focus.PROMPT_EDITOR
    router.process_key(KeyPress("h", ctrl=True))
    assert router.focus is Focus.FILE_BROWSER
    router.process_key(KeyPress("l", ctrl=True))
    assert router.focus is Focus.PROMPT_EDITOR
    router.process_key(KeyPress("j", ctrl=True))
    assert router.focus is Focus.OPTIONS
    router.process_key(KeyPress("k", ctrl=True))
    assert router.focus is Focus.PROMPT_EDITOR


def test_arrow_aliases_move_focus(router):
    router.process_key(KeyPress("left", ctrl=True))
    assert router.focus is Focus.FILE_BROWSER
    router.process_key(KeyPress("down", ctrl=True))
    assert router.focus is Focus.OPTIONS


@pytest.mark.parametrize("focus", list(Focus))
def test_force_quit_from_any_focus(router, focus):
    router.focus = focus
    assert router.process_key(KeyPress("c", ctrl=True)) is Action.QUIT
    assert router.focus is focus


def test_unbound_ctrl_keys_are_ignored(router):
    assert router.process_key(KeyPress("x", ctrl=True)) is None
    assert router.focus is Focus.PROMPT_EDITOR
    assert router.editor.display_text() == ""


def test_plain_keys_go_to_the_focused_widget_only(router):
    router.process_key(KeyPress("j"))
    assert router.editor.display_text() == "j"
    assert router.browser.cursor == 0

    router.process_key(KeyPress("h", ctrl=True))
    router.process_key(KeyPress("j"))
    assert router.browser.cursor == 1
    assert router.editor.display_text() == "j"


def test_send_bubbles_up_from_options(router):
    router.process_key(KeyPress("j", ctrl=True))
    assert router.process_key(KeyPress("enter")) is Action.SEND


def test_tick_reaches_only_the_focused_widget():
    browser_counter, editor_counter, options_counter = TickCounter(), TickCounter(), TickCounter()
    router = FocusRouter(browser_counter, editor_counter, options_counter, focus=Focus.FILE_BROWSER)
    router.process_tick()
    router.process_tick()
    router.process_key(KeyPress("q"))
    assert browser_counter.ticks == 2
    assert browser_counter.keys == [KeyPress("q")]
    assert editor_counter.ticks == options_counter.ticks == 0
