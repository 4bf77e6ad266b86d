import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import INCLUDE_FILES_BY_DEFAULT
from .keys import Action, KeyPress

logger = logging.getLogger(__name__)

INCLUDED_MARKER = "* "


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class TreeEntry:
    path: str
    depth: int
    kind: EntryKind
    expanded: bool = True
    included: bool = False

    @classmethod
    def from_walk(cls, path: str, depth: int, is_dir: bool, include_files: bool = INCLUDE_FILES_BY_DEFAULT) -> "TreeEntry":
        if is_dir:
            return cls(path, depth, EntryKind.DIRECTORY, expanded=True, included=False)
        return cls(path, depth, EntryKind.FILE, expanded=False, included=include_files)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return self.path.replace("\\", "/").rstrip("/").split("/")[-1] or self.path

    def line(self, label: str) -> str:
        marker = INCLUDED_MARKER if self.included else ""
        return f"{' ' * (self.depth * 2)}{marker}{label}"


def visible_entries(entries: Sequence[TreeEntry]) -> List[int]:
    """Indices of entries not hidden under a collapsed directory.

    Relies on walk order: a directory's descendants follow it directly
    and have a strictly greater depth.
    """
    visible: List[int] = []
    collapsed_depths: List[int] = []
    for idx, entry in enumerate(entries):
        while collapsed_depths and collapsed_depths[-1] >= entry.depth:
            collapsed_depths.pop()
        if collapsed_depths:
            continue
        visible.append(idx)
        if entry.is_dir and not entry.expanded:
            collapsed_depths.append(entry.depth)
    return visible


class FileBrowser:
    def __init__(self, entries: Iterable[TreeEntry]):
        self.entries: List[TreeEntry] = list(entries)
        self.cursor: Optional[int] = 0

    @classmethod
    def from_walk(cls, walked: Iterable[Tuple[str, int, bool]], include_files: bool = INCLUDE_FILES_BY_DEFAULT) -> "FileBrowser":
        return cls(TreeEntry.from_walk(path, depth, is_dir, include_files) for path, depth, is_dir in walked)

    # --- Visibility & selection ---
    def visible_entries(self) -> List[int]:
        return visible_entries(self.entries)

    def selected_index(self) -> Optional[int]:
        visible = self.visible_entries()
        if not visible: return None
        if self.cursor is None:
            self.cursor = 0
        self.cursor = min(max(self.cursor, 0), len(visible) - 1)
        return visible[self.cursor]

    def selected_entry(self) -> Optional[TreeEntry]:
        idx = self.selected_index()
        return None if idx is None else self.entries[idx]

    def move_selection(self, step: int) -> None:
        visible = self.visible_entries()
        if not visible:
            self.cursor = None
            return
        last = len(visible) - 1
        if self.cursor is None:
            self.cursor = 0 if step > 0 else last
            return
        self.cursor = min(max(self.cursor + step, 0), last)

    # --- Mutations ---
    def set_expanded(self, value: bool) -> None:
        entry = self.selected_entry()
        if entry is None or not entry.is_dir: return
        entry.expanded = value
        # entries above the directory keep their visible positions
        self.selected_index()

    def toggle_included(self) -> None:
        entry = self.selected_entry()
        # Directories cannot be included as a whole.
        if entry is None or entry.is_dir: return
        entry.included = not entry.included
        logger.debug("%s %s", "included" if entry.included else "excluded", entry.path)

    # --- Output for the request ---
    def rendered_tree(self) -> str:
        return "".join(entry.line(entry.path) + "\n" for entry in self.entries)

    def included_paths(self) -> List[str]:
        return [entry.path for entry in self.entries if not entry.is_dir and entry.included]

    # --- InputHandler ---
    def process_key(self, key: KeyPress) -> Optional[Action]:
        if key.matches("k", "up"):
            self.move_selection(-1)
        elif key.matches("j", "down"):
            self.move_selection(1)
        elif key.matches("l", "right"):
            self.set_expanded(True)
        elif key.matches("h", "left"):
            self.set_expanded(False)
        elif key.matches("enter", " ", "space"):
            self.toggle_included()
        return None

    def process_tick(self) -> None:
        pass
