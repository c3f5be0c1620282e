"""Tests for key-bound editor commands."""

import pytest
from diarymark.commands import (
    BoldCommand, CommandRegistry, HighlightCommand, RedoCommand, UndoCommand, UnderlineCommand,
)
from diarymark.keyboard import KeyType, parse_key
from diarymark.model import Selection
from diarymark.session import EditorSession


@pytest.fixture
def session():
    return EditorSession()


def press(session, *tokens):
    for token in tokens:
        session.handle_key(parse_key(token))


def test_default_bindings():
    registry = CommandRegistry()
    assert isinstance(registry.get_command(KeyType.CTRL, 'b'), BoldCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 'u'), UnderlineCommand)
    assert isinstance(registry.get_command(KeyType.ALT, 'h'), HighlightCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 'z'), UndoCommand)
    assert isinstance(registry.get_command(KeyType.CTRL, 'y'), RedoCommand)
    assert registry.get_command(KeyType.CTRL, 'q') is None


def test_ctrl_b_without_selection_inserts_placeholder(session):
    press(session, 'h', 'i', ' ')
    assert session.handle_key(parse_key('<Ctrl-b>'))
    assert session.text == "hi *bold text*"
    assert session.selection == Selection(4, 13)


def test_typing_replaces_selected_placeholder(session):
    press(session, '<Ctrl-u>', 'o', 'k')
    assert session.text == "`ok`"
    assert session.selection == Selection.caret(3)


def test_ctrl_u_wraps_selection(session):
    session.on_change("diary entry")
    session.set_selection(0, 5)
    press(session, '<Ctrl-u>')
    assert session.text == "`diary` entry"
    assert session.selection == Selection.caret(7)


def test_highlight_uses_session_default_color():
    session = EditorSession("x", default_highlight_color="green")
    session.set_selection(0, 1)
    press(session, '<Alt-h>')
    assert session.text == "|green|x|green|"


def test_highlight_command_with_color():
    session = EditorSession("x")
    session.set_selection(0, 1)
    HighlightCommand("purple").execute(session, parse_key('<Alt-h>'))
    assert session.text == "|purple|x|purple|"


def test_undo_redo_shortcuts(session):
    press(session, 'a', 'b')
    press(session, '<Ctrl-z>')
    assert session.text == "a"
    assert session.status_message == "Undone"
    press(session, '<Ctrl-y>')
    assert session.text == "ab"
    assert session.status_message == "Redone"
    press(session, '<Ctrl-z>', '<Ctrl-Shift-z>')
    assert session.text == "ab"


def test_undo_with_nothing_to_undo(session):
    assert not session.handle_key(parse_key('<Ctrl-z>'))
    assert session.status_message == "Nothing to undo"
    # Cleared by the next key
    press(session, 'a')
    assert session.status_message is None


def test_backspace_and_delete(session):
    press(session, 'a', 'b', 'c')
    press(session, '<BACKSPACE>')
    assert session.text == "ab"
    session.set_selection(0)
    press(session, '<DELETE>')
    assert session.text == "b"
    # Nothing before the caret
    assert not session.handle_key(parse_key('<BACKSPACE>'))
    session.set_selection(1)
    assert not session.handle_key(parse_key('<Ctrl-d>'))
    assert session.text == "b"


def test_backspace_deletes_selection(session):
    session.on_change("hello world")
    session.set_selection(5, 11)
    press(session, '<BACKSPACE>')
    assert session.text == "hello"


def test_enter_inserts_newline(session):
    press(session, 'a', '<ENTER>', 'b')
    assert session.text == "a\nb"
    assert session.preview() == "a<br>b"


def test_control_characters_are_not_inserted(session):
    assert not session.handle_key(parse_key('\x00'))
    assert session.text == ""


def test_unbound_keys_do_nothing(session):
    assert not session.handle_key(parse_key('<LEFT>'))
    assert session.text == ""
