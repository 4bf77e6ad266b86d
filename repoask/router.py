import logging
from typing import Dict, Optional

from .browser import FileBrowser
from .editor import OptionsBar, PromptEditor
from .keys import Action, Focus, FocusInput, InputHandler, KeyPress, control_input, next_focus

logger = logging.getLogger(__name__)


class FocusRouter:
    """Owns the three widget states and decides which one sees each key.

    Control-qualified keys are consumed here (focus moves, force quit);
    everything else goes verbatim to the focused widget.
    """

    def __init__(self, browser: FileBrowser, editor: Optional[PromptEditor] = None,
                 options: Optional[OptionsBar] = None, focus: Focus = Focus.PROMPT_EDITOR):
        self.browser = browser
        self.editor = editor or PromptEditor()
        self.options = options or OptionsBar()
        self.focus = focus

    @property
    def handlers(self) -> Dict[Focus, InputHandler]:
        return {
            Focus.FILE_BROWSER: self.browser,
            Focus.PROMPT_EDITOR: self.editor,
            Focus.OPTIONS: self.options,
        }

    @property
    def focused(self) -> InputHandler:
        return self.handlers[self.focus]

    def process_key(self, key: KeyPress) -> Optional[Action]:
        if key.ctrl:
            move = control_input(key)
            if move is FocusInput.FORCE_QUIT:
                return Action.QUIT
            if move is not None:
                new_focus = next_focus(self.focus, move)
                if new_focus is not self.focus:
                    logger.debug("focus %s -> %s", self.focus.value, new_focus.value)
                    self.focus = new_focus
            return None
        return self.focused.process_key(key)

    def process_tick(self) -> None:
        self.focused.process_tick()
