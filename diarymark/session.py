"""Editing session for a single diary entry.

An ``EditorSession`` owns the document text, the current selection and the
undo history. Callers create one per open editor and pass it to whatever
needs it; nothing here is process-wide.
"""

from typing import Any, Callable, Dict, List, Optional

import blessed

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyEvent
from .markers import FormatMarker, insert_marker, normalize_color
from .model import Selection
from .render import render_html, render_terminal
from .undo import HistoryStack

ChangeListener = Callable[[str], None]


class EditorSession:
    """Document, selection and history of one open editor."""

    def __init__(
        self,
        text: str = "",
        max_history: Optional[int] = None,
        default_highlight_color: str = EditorConstants.DEFAULT_HIGHLIGHT_COLOR,
        escape_html: bool = False,
    ):
        self._text = text
        self._selection = Selection.caret(len(text))
        self.history = HistoryStack(text, max_entries=max_history)
        self.default_highlight_color = normalize_color(default_highlight_color)
        self.escape_html = escape_html
        self.commands = CommandRegistry()
        self.status_message: Optional[str] = None
        self._listeners: List[ChangeListener] = []

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], text: str = "") -> "EditorSession":
        """Create a session configured from a settings dictionary."""
        return cls(
            text,
            max_history=settings.get("max_history"),
            default_highlight_color=settings.get(
                "default_highlight_color", EditorConstants.DEFAULT_HIGHLIGHT_COLOR
            ),
            escape_html=bool(settings.get("escape_html", False)),
        )

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> Selection:
        return self._selection

    def set_selection(self, start: int, end: Optional[int] = None) -> Selection:
        """Move the selection; offsets are clamped to the document."""
        if end is None:
            end = start
        self._selection = Selection(start, end).clamp(len(self._text))
        return self._selection

    # --- Outbound notifications ---
    def subscribe(self, listener: ChangeListener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self):
        for listener in list(self._listeners):
            listener(self._text)

    def _set_text(self, text: str):
        self._text = text
        self._selection = self._selection.clamp(len(text))
        self._emit()

    # --- Inbound operations ---
    def load(self, text: str):
        """Replace the document and start a fresh history (e.g. another day's entry)."""
        self.history.clear(text)
        self._selection = Selection.caret(len(text))
        self._text = text
        self._emit()

    def on_change(self, new_text: str) -> bool:
        """Replace the document wholesale, as typing does.

        Returns:
            True if the text differed from the last committed snapshot
        """
        if new_text == self.history.current:
            if new_text != self._text:
                self._set_text(new_text)
            return False
        self.history.commit(new_text)
        self._set_text(new_text)
        return True

    def apply_marker(self, marker: FormatMarker, selection: Optional[Selection] = None) -> Selection:
        """Insert ``marker`` at ``selection`` (default: the current selection).

        Returns:
            The selection after insertion
        """
        target = selection if selection is not None else self._selection
        text, new_selection = insert_marker(self._text, target, marker)
        self.history.commit(text)
        self._text = text
        self._selection = new_selection
        self._emit()
        return new_selection

    def undo(self) -> Optional[str]:
        snapshot = self.history.undo()
        if snapshot is not None:
            self._set_text(snapshot)
        return snapshot

    def redo(self) -> Optional[str]:
        snapshot = self.history.redo()
        if snapshot is not None:
            self._set_text(snapshot)
        return snapshot

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def handle_key(self, key_event: KeyEvent) -> bool:
        """Dispatch a key event through the command registry.

        Returns:
            True if the document was modified
        """
        # Clear status message on any keypress
        self.status_message = None
        return self.commands.execute(self, key_event)

    # --- Rendering ---
    def preview(self) -> str:
        """Preview HTML of the current document."""
        return render_html(self._text, escape=self.escape_html)

    def preview_terminal(self, terminal: Optional[blessed.Terminal] = None) -> str:
        """ANSI-styled preview of the current document."""
        return render_terminal(self._text, terminal)

    @property
    def character_count(self) -> int:
        return len(self._text)
