from enum import Enum
from typing import Optional

from .keys import Action, KeyPress


class PromptEditor:
    """Append-only text buffer; edits always happen at the end."""

    def __init__(self, text: str = ""):
        self._text = text

    def insert_char(self, char: str) -> None:
        self._text += char

    def insert_newline(self) -> None:
        self._text += "\n"

    def backspace(self) -> None:
        self._text = self._text[:-1]

    def display_text(self) -> str:
        return self._text

    def process_key(self, key: KeyPress) -> Optional[Action]:
        if key.ctrl: return None
        if key.is_char:
            self.insert_char(key.code)
        elif key.code == "space":
            self.insert_char(" ")
        elif key.code == "enter":
            self.insert_newline()
        elif key.code == "backspace":
            self.backspace()
        return None

    def process_tick(self) -> None:
        pass


class Option(Enum):
    SEND = "Send"
    QUIT = "Quit"


class OptionsBar:
    def __init__(self, selected: Option = Option.SEND):
        self.selected = selected

    def commit(self) -> Action:
        return Action.SEND if self.selected is Option.SEND else Action.QUIT

    def process_key(self, key: KeyPress) -> Optional[Action]:
        if key.matches("h", "left"):
            self.selected = Option.SEND
        elif key.matches("l", "right"):
            self.selected = Option.QUIT
        elif key.matches("enter"):
            return self.commit()
        return None

    def process_tick(self) -> None:
        pass
