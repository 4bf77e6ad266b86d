import fnmatch
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import gitignore_parser

from .config import DEFAULT_IGNORES

logger = logging.getLogger(__name__)

Matcher = Callable[[str], bool]
WalkedEntry = Tuple[str, int, bool]


def matches_default_ignores(name: str, is_dir: bool, patterns: Sequence[str] = DEFAULT_IGNORES) -> bool:
    for pattern in patterns:
        if pattern.endswith("/"):
            if is_dir and name == pattern.rstrip("/"):
                return True
        elif fnmatch.fnmatch(name, pattern):
            return True
    return False


def load_gitignore(directory: Path) -> Optional[Matcher]:
    gitignore = directory / ".gitignore"
    if not gitignore.is_file(): return None
    try:
        return gitignore_parser.parse_gitignore(str(gitignore), base_dir=str(directory))
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable %s: %s", gitignore, exc)
        return None


def walk_entries(root: os.PathLike = Path("."), extra_ignores: Sequence[str] = ()) -> List[WalkedEntry]:
    """Walk ``root`` depth-first and return ``(path, depth, is_dir)`` in pre-order.

    Directories come before files at each level, both sorted by name. Hidden
    entries, default ignore patterns and ``.gitignore`` rules are honoured;
    an ignored directory drops its whole subtree. The root itself is not
    listed, so its children sit at depth 0.
    """
    root_path = Path(root)
    abs_root = root_path.resolve()
    patterns = list(DEFAULT_IGNORES) + list(extra_ignores)
    entries: List[WalkedEntry] = []

    def ignored(abs_path: Path, is_dir: bool, matchers: Sequence[Matcher]) -> bool:
        name = abs_path.name
        if name.startswith("."): return True
        if matches_default_ignores(name, is_dir, patterns): return True
        return any(matcher(str(abs_path)) for matcher in matchers)

    def walk(rel_dir: Path, depth: int, matchers: List[Matcher]) -> None:
        abs_dir = abs_root / rel_dir
        local = load_gitignore(abs_dir)
        if local is not None:
            matchers = matchers + [local]
        try:
            with os.scandir(abs_dir) as it:
                children = [(child.name, child.is_dir(follow_symlinks=False)) for child in it]
        except OSError as exc:
            logger.warning("Skipping unreadable directory %s: %s", abs_dir, exc)
            return
        children.sort(key=lambda child: (not child[1], child[0]))
        for name, is_dir in children:
            if ignored(abs_dir / name, is_dir, matchers): continue
            rel_path = rel_dir / name
            entries.append((str(root_path / rel_path), depth, is_dir))
            if is_dir:
                walk(rel_path, depth + 1, matchers)

    walk(Path(), 0, [])
    logger.debug("walked %d entries under %s", len(entries), abs_root)
    return entries
