"""Textual diary editor with a live formatted preview."""

import io
from datetime import date
from typing import Optional

import blessed
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Footer, Header, Static, TextArea
from textual.widgets.text_area import Selection as TextSelection

from .constants import EditorConstants
from .keyboard import describe, parse_key
from .session import EditorSession
from .settings_persistence import SettingsPersistence
from .storage import DiaryStore, normalize_entry_date


def preview_terminal() -> blessed.Terminal:
    """A styling terminal whose output is only captured, never written."""
    return blessed.Terminal(kind="xterm-256color", stream=io.StringIO(), force_styling=True)


class DiaryApp(App):
    """Edit one day's diary entry."""

    CSS = """
    #editor {
        width: 1fr;
        border: none;
    }
    #preview-pane {
        width: 1fr;
        padding: 0 1;
        border-left: solid $primary;
    }
    #guide {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+b", "shortcut('ctrl+b')", "Bold", priority=True),
        Binding("ctrl+u", "shortcut('ctrl+u')", "Underline", priority=True),
        Binding("alt+h", "shortcut('alt+h')", "Highlight", priority=True),
        Binding("ctrl+z", "shortcut('ctrl+z')", "Undo", priority=True),
        Binding("ctrl+shift+z", "shortcut('ctrl+shift+z')", "Redo", show=False, priority=True),
        Binding("ctrl+y", "shortcut('ctrl+y')", "Redo", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("f2", "toggle_preview", "Preview"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        entry_date: Optional[str] = None,
        store: Optional[DiaryStore] = None,
        settings: Optional[SettingsPersistence] = None,
    ):
        super().__init__()
        self.entry_date = normalize_entry_date(entry_date or date.today())
        self.store = store or DiaryStore()
        self.settings = (settings or SettingsPersistence()).load_settings()
        entry = self.store.load_entry(self.entry_date)
        self._saved_text = entry.content if entry else ""
        self.session = EditorSession.from_settings(self.settings, self._saved_text)
        self.session.subscribe(self._on_session_change)
        self._quit_armed = False
        self._mounted = False
        self._term = preview_terminal()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(EditorConstants.QUICK_GUIDE, id="guide")
        with Horizontal():
            yield TextArea(self.session.text, id="editor")
            with VerticalScroll(id="preview-pane"):
                yield Static(id="preview")
        yield Footer()

    @property
    def editor(self) -> TextArea:
        return self.query_one("#editor", TextArea)

    def on_mount(self) -> None:
        self._mounted = True
        self.title = f"Diary {self.entry_date}"
        self.query_one("#preview-pane").display = bool(self.settings.get("show_preview", True))
        self._refresh_preview()
        self.editor.focus()

    # --- Session <-> widget synchronization ---
    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.session.on_change(event.text_area.text)

    def _on_session_change(self, text: str) -> None:
        self._quit_armed = False
        if self._mounted:
            self._refresh_preview()

    def _refresh_preview(self) -> None:
        self.query_one("#preview", Static).update(Text.from_ansi(self.session.preview_terminal(self._term)))
        dirty = "*" if self.session.text != self._saved_text else ""
        self.sub_title = f"{self.session.character_count} characters{dirty}"

    def _pull_selection(self) -> None:
        """Copy the widget's selection into the session as offsets."""
        editor = self.editor
        self.session.on_change(editor.text)
        document = editor.document
        start = document.get_index_from_location(editor.selection.start)
        end = document.get_index_from_location(editor.selection.end)
        self.session.set_selection(min(start, end), max(start, end))

    def _push_to_widget(self) -> None:
        """Show the session's text and selection in the widget."""
        editor = self.editor
        if editor.text != self.session.text:
            editor.load_text(self.session.text)
        document = editor.document
        selection = self.session.selection
        editor.selection = TextSelection(
            document.get_location_from_index(selection.start),
            document.get_location_from_index(selection.end),
        )

    # --- Actions ---
    def action_shortcut(self, key: str) -> None:
        """Run the editor command bound to ``key``."""
        event = parse_key(key)
        self._pull_selection()
        self.session.handle_key(event)
        self._push_to_widget()
        if self.session.status_message:
            self.notify(f"{describe(event)}: {self.session.status_message}", timeout=2)

    def action_save(self) -> None:
        text = self.session.text
        entry = self.store.save_entry(self.entry_date, text)
        if entry is None:
            self.notify("Failed to save diary entry", severity="error")
            return
        self._saved_text = text
        self._refresh_preview()
        self.notify("Diary entry saved")

    def action_toggle_preview(self) -> None:
        pane = self.query_one("#preview-pane")
        pane.display = not pane.display

    async def action_quit(self) -> None:
        if self.session.text != self._saved_text and not self._quit_armed:
            self._quit_armed = True
            self.notify("Unsaved changes. Press Ctrl-Q again to quit without saving.", severity="warning")
            return
        self.exit()
