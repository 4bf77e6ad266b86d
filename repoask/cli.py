import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pyperclip

from .app import RepoAskApp
from .browser import FileBrowser
from .client import request_completion
from .config import INCLUDE_FILES_BY_DEFAULT, Settings, configure_logging, load_settings
from .errors import RepoAskError, TerminalSetupError
from .keys import Action
from .query import compose
from .router import FocusRouter
from .walker import walk_entries

logger = logging.getLogger(__name__)

SEND, DRY_RUN, COPY = "send", "dry-run", "copy"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="repoask",
        description="Pick files from a project tree, write a prompt, and send both to a chat completion service.",
    )
    parser.add_argument("path", nargs="?", default=".", help="project directory to browse (default: current directory)")
    parser.add_argument("--include-all", action="store_true", help="start with every file included")
    parser.add_argument("--model", help="completion model name")
    parser.add_argument("--log-level", help="debug, info, warning or error")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", action="store_true", help="print the composed query instead of sending it")
    mode.add_argument("--copy", action="store_true", help="copy the composed query to the clipboard instead of sending it")
    return parser.parse_args(argv)


def run_interface(router: FocusRouter) -> Action:
    app = RepoAskApp(router)
    try:
        action = app.run()
    except OSError as exc:
        raise TerminalSetupError(f"Could not set up the terminal: {exc}") from exc
    # Leaving the app any other way (e.g. ctrl+q) counts as quitting.
    return action or Action.QUIT


def dispatch(router: FocusRouter, settings: Settings, mode: str = SEND) -> Optional[str]:
    """Compose the query from the router's widgets and deliver it.

    Returns the text to print, or None when there is nothing to print.
    """
    browser = router.browser
    included = browser.included_paths()
    query = compose(router.editor.display_text(), browser.rendered_tree(), included)
    logger.info("composed query with %d file(s), %d characters", len(included), len(query))
    if mode == DRY_RUN:
        return query
    if mode == COPY:
        try:
            pyperclip.copy(query)
        except pyperclip.PyperclipException as exc:
            raise RepoAskError(f"Clipboard copy failed: {exc}") from exc
        print(f"Query with {len(included)} file(s) copied to clipboard.", file=sys.stderr)
        return None
    return request_completion(query, settings)


def run(args: argparse.Namespace) -> int:
    settings = load_settings(model=args.model, log_level=args.log_level)
    if settings.log_file is not None:
        configure_logging(settings.log_level, settings.log_file)
    mode = DRY_RUN if args.dry_run else COPY if args.copy else SEND
    if mode == SEND:
        settings = settings.with_token()

    walked = walk_entries(Path(args.path))
    browser = FileBrowser.from_walk(walked, include_files=args.include_all or INCLUDE_FILES_BY_DEFAULT)
    router = FocusRouter(browser)
    action = run_interface(router)

    if settings.log_file is None:
        configure_logging(settings.log_level)
    if action is not Action.SEND:
        return 0
    output = dispatch(router, settings, mode)
    if output is not None:
        print(output)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if not Path(args.path).is_dir():
        print(f"Error: '{args.path}' is not a directory.", file=sys.stderr)
        sys.exit(2)
    try:
        sys.exit(run(args))
    except RepoAskError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
