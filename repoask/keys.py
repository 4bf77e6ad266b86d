from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, Tuple


class Action(Enum):
    SEND = "send"
    QUIT = "quit"


class Focus(Enum):
    FILE_BROWSER = "file_browser"
    PROMPT_EDITOR = "prompt_editor"
    OPTIONS = "options"


class FocusInput(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    FORCE_QUIT = "force_quit"


@dataclass(frozen=True)
class KeyPress:
    """A decoded key: a single character or a named key, optionally with ctrl held."""
    code: str
    ctrl: bool = False

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    def matches(self, *codes: str) -> bool:
        return not self.ctrl and self.code in codes


class InputHandler(Protocol):
    def process_key(self, key: KeyPress) -> Optional[Action]: ...

    def process_tick(self) -> None: ...


# --- Focus bindings ---
CONTROL_BINDINGS: Dict[str, FocusInput] = {
    "h": FocusInput.LEFT, "left": FocusInput.LEFT,
    "l": FocusInput.RIGHT, "right": FocusInput.RIGHT,
    "k": FocusInput.UP, "up": FocusInput.UP,
    "j": FocusInput.DOWN, "down": FocusInput.DOWN,
    "c": FocusInput.FORCE_QUIT,
}

# (input, current focus) -> new focus; pairs not listed leave focus alone.
FOCUS_TRANSITIONS: Dict[Tuple[FocusInput, Focus], Focus] = {
    (FocusInput.LEFT, Focus.PROMPT_EDITOR): Focus.FILE_BROWSER,
    (FocusInput.RIGHT, Focus.FILE_BROWSER): Focus.PROMPT_EDITOR,
    (FocusInput.UP, Focus.OPTIONS): Focus.PROMPT_EDITOR,
    (FocusInput.DOWN, Focus.FILE_BROWSER): Focus.OPTIONS,
    (FocusInput.DOWN, Focus.PROMPT_EDITOR): Focus.OPTIONS,
}


def control_input(key: KeyPress) -> Optional[FocusInput]:
    if not key.ctrl: return None
    return CONTROL_BINDINGS.get(key.code)


def next_focus(current: Focus, move: FocusInput) -> Focus:
    return FOCUS_TRANSITIONS.get((move, current), current)
