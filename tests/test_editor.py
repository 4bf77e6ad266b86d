# tests/test_editor.py

from repoask.editor import Option, OptionsBar, PromptEditor
from repoask.keys import Action, KeyPress


def test_prompt_editor_appends_and_pops():
    editor = PromptEditor()
    for key in ("h", "i", "space", "enter", "!"):
        assert editor.process_key(KeyPress(key)) is None
    assert editor.display_text() == "hi \n!"
    editor.process_key(KeyPress("backspace"))
    assert editor.display_text() == "hi \n"


def test_backspace_on_empty_buffer_is_a_noop():
    editor = PromptEditor()
    editor.backspace()
    assert editor.display_text() == ""


def test_prompt_editor_ignores_other_named_keys_and_ctrl():
    editor = PromptEditor("x")
    editor.process_key(KeyPress("left"))
    editor.process_key(KeyPress("tab"))
    editor.process_key(KeyPress("a", ctrl=True))
    assert editor.display_text() == "x"


def test_options_navigation_never_yields_an_action():
    options = OptionsBar()
    assert options.selected is Option.SEND
    assert options.process_key(KeyPress("l")) is None
    assert options.selected is Option.QUIT
    assert options.process_key(KeyPress("l")) is None
    assert options.selected is Option.QUIT
    assert options.process_key(KeyPress("left")) is None
    assert options.selected is Option.SEND


def test_options_commit_yields_selected_action():
    options = OptionsBar()
    assert options.process_key(KeyPress("enter")) is Action.SEND
    options.process_key(KeyPress("right"))
    assert options.process_key(KeyPress("enter")) is Action.QUIT
    assert options.commit() is Action.QUIT
