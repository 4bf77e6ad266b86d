from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widget import Widget

from .config import TICK_INTERVAL
from .editor import Option
from .keys import Action, Focus, KeyPress
from .router import FocusRouter

# --- Theme ---
GRAY = "#151515"
LIGHT_GREY = "#292929"
LIGHT_GREEN = "#87af87"
YELLOW = "#f8f288"
PURPLE = "#5f5f87"
BLUE = "#5f87af"


def translate_key(event: events.Key) -> KeyPress:
    # Terminals send ctrl+h as \x08, which Textual reports as backspace;
    # the Backspace key itself sends \x7f.
    if event.key == "backspace" and event.character == "\x08":
        return KeyPress("h", ctrl=True)
    if event.key.startswith("ctrl+"):
        return KeyPress(event.key[len("ctrl+"):], ctrl=True)
    if event.is_printable and event.character:
        return KeyPress(event.character)
    return KeyPress(event.key)


class PanelView(Widget):
    """Base for the three panels; draws router state, never takes Textual focus."""

    focus_key: Focus = Focus.PROMPT_EDITOR
    panel_title = ""

    def __init__(self, router: FocusRouter, id: Optional[str] = None):
        super().__init__(id=id)
        self.router = router

    def on_mount(self) -> None:
        self.border_title = self.panel_title

    def sync(self) -> None:
        self.set_class(self.router.focus is self.focus_key, "focused")
        self.refresh()


class FileBrowserView(PanelView):
    focus_key = Focus.FILE_BROWSER
    panel_title = "File Browser"

    def __init__(self, router: FocusRouter, id: Optional[str] = None):
        super().__init__(router, id=id)
        self._top = 0

    def _scroll_to(self, cursor: int, height: int) -> None:
        if cursor < self._top:
            self._top = cursor
        elif cursor >= self._top + height:
            self._top = cursor - height + 1

    def render(self) -> Text:
        browser = self.router.browser
        visible = browser.visible_entries()
        if not visible: return Text("No files found.", style="dim")
        selected = browser.selected_index()
        height = max(self.content_size.height, 1)
        self._scroll_to(browser.cursor or 0, height)

        text = Text(no_wrap=True, overflow="ellipsis")
        for row, idx in enumerate(visible[self._top:self._top + height]):
            entry = browser.entries[idx]
            label = entry.name + ("/" if entry.is_dir else "")
            if row: text.append("\n")
            if idx == selected:
                text.append("> " + entry.line(label), style=f"bold {YELLOW} on {LIGHT_GREY}")
            else:
                text.append("  " + entry.line(label))
        return text


class PromptEditorView(PanelView):
    focus_key = Focus.PROMPT_EDITOR
    panel_title = "Prompt Editor"

    def render(self) -> Text:
        return Text(self.router.editor.display_text(), style=LIGHT_GREEN)


class OptionsView(PanelView):
    focus_key = Focus.OPTIONS
    panel_title = "Options"

    def render(self) -> Text:
        selected = self.router.options.selected
        send_style = f"reverse {BLUE}" if selected is Option.SEND else ""
        quit_style = f"reverse {PURPLE}" if selected is Option.QUIT else ""
        return Text.assemble(("[Send]", send_style), "  ", ("[Quit]", quit_style), justify="center")


class WorkbenchScreen(Screen):
    def __init__(self, router: FocusRouter):
        super().__init__()
        self.router = router

    def compose(self) -> ComposeResult:
        with Horizontal(id="main"):
            yield FileBrowserView(self.router, id="file_browser")
            yield PromptEditorView(self.router, id="prompt_editor")
        yield OptionsView(self.router, id="options")

    def on_mount(self) -> None:
        self.sync_views()

    def sync_views(self) -> None:
        for view in self.query(PanelView):
            view.sync()

    def handle_keypress(self, key: KeyPress) -> None:
        action = self.router.process_key(key)
        self.sync_views()
        if action is not None:
            self.app.log(f"router produced {action.value}")
            self.app.exit(action)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.handle_keypress(translate_key(event))


class RepoAskApp(App[Action]):
    TITLE = "repoask"
    CSS = f"""
    #main {{ height: 1fr; }}
    PanelView {{ border: round $primary; background: {GRAY}; padding: 0 1; }}
    PanelView.focused {{ border: thick $accent; }}
    #file_browser {{ width: 30%; height: 100%; }}
    #prompt_editor {{ width: 70%; height: 100%; }}
    #options {{ height: 3; width: 100%; }}
    """
    # ctrl+c is routed rather than left to Textual's own quit handling.
    BINDINGS = [
        Binding("ctrl+c", "force_quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, router: FocusRouter):
        super().__init__()
        self.router = router

    def on_mount(self) -> None:
        self.push_screen(WorkbenchScreen(self.router))
        self.set_interval(TICK_INTERVAL, self.router.process_tick)

    def action_force_quit(self) -> None:
        action = self.router.process_key(KeyPress("c", ctrl=True))
        if action is not None:
            self.exit(action)
