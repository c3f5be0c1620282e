"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .markers import FormatMarker
from .model import Selection

if TYPE_CHECKING:
    from .session import EditorSession
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            session: Editing session
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class FormatCommand(EditorCommand):
    """Base class for marker insertion commands."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        session.apply_marker(self.marker(session))
        return True

    @abstractmethod
    def marker(self, session: 'EditorSession') -> FormatMarker:
        """Marker to insert."""
        pass


class BoldCommand(FormatCommand):
    def marker(self, session):
        return FormatMarker.bold()


class UnderlineCommand(FormatCommand):
    def marker(self, session):
        return FormatMarker.underline()


class HighlightCommand(FormatCommand):
    def __init__(self, color: Optional[str] = None):
        self.color = color

    def marker(self, session):
        return FormatMarker.highlight(self.color or session.default_highlight_color)


class EditCommand(EditorCommand):
    """Base class for typing commands.

    The edit is computed on the current text and handed to the session
    as a wholesale replacement, which commits it to history.
    """

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        text, selection = self._edit(session.text, session.selection, key_event)
        modified = session.on_change(text)
        session.set_selection(selection.start, selection.end)
        return modified

    @abstractmethod
    def _edit(self, text: str, selection: Selection, key_event: 'KeyEvent') -> Tuple[str, Selection]:
        """Return the edited text and the selection that follows it."""
        pass


def _replace(text: str, selection: Selection, replacement: str) -> Tuple[str, Selection]:
    new_text = text[:selection.start] + replacement + text[selection.end:]
    return new_text, Selection.caret(selection.start + len(replacement))


class InsertTextCommand(EditCommand):
    def _edit(self, text, selection, key_event):
        char = key_event.value
        # Filter out control characters
        if not char or (ord(char[0]) < 32 and char != '\t'):
            return text, selection
        return _replace(text, selection, char)


class InsertNewlineCommand(EditCommand):
    def _edit(self, text, selection, key_event):
        return _replace(text, selection, '\n')


class BackspaceCommand(EditCommand):
    def _edit(self, text, selection, key_event):
        if selection.is_empty:
            if selection.start == 0:
                return text, selection
            selection = Selection(selection.start - 1, selection.end)
        return _replace(text, selection, '')


class DeleteCharCommand(EditCommand):
    def _edit(self, text, selection, key_event):
        if selection.is_empty:
            if selection.end == len(text):
                return text, selection
            selection = Selection(selection.start, selection.end + 1)
        return _replace(text, selection, '')


class UndoCommand(EditorCommand):
    """Undo; with Shift held the same shortcut redoes."""

    def execute(self, session, key_event):
        if key_event.is_shift:
            return RedoCommand().execute(session, key_event)
        if session.undo() is not None:
            session.status_message = "Undone"
            return True
        session.status_message = "Nothing to undo"
        return False


class RedoCommand(EditorCommand):
    def execute(self, session, key_event):
        if session.redo() is not None:
            session.status_message = "Redone"
            return True
        session.status_message = "Nothing to redo"
        return False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Formatting
        self.register((KeyType.CTRL, 'b'), BoldCommand())
        self.register((KeyType.CTRL, 'u'), UnderlineCommand())
        self.register((KeyType.ALT, 'h'), HighlightCommand())

        # Undo/redo (Ctrl-Shift-Z is handled by UndoCommand)
        self.register((KeyType.CTRL, 'z'), UndoCommand())
        self.register((KeyType.CTRL, 'y'), RedoCommand())

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.CTRL, 'd'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(session, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(session, key_event)

        return False
