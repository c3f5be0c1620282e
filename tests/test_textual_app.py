"""Tests for the Textual-based editor."""

import asyncio

import pytest
from diarymark.settings_persistence import SettingsPersistence
from diarymark.storage import DiaryStore
from diarymark.textual_app import DiaryApp, preview_terminal


@pytest.fixture
def store(tmp_path):
    return DiaryStore(tmp_path / "data")


@pytest.fixture
def settings(tmp_path):
    return SettingsPersistence(tmp_path / "config")


def test_app_creation(store, settings):
    app = DiaryApp(entry_date="2024-05-01", store=store, settings=settings)
    assert app.entry_date == "2024-05-01"
    assert app.session.text == ""


def test_app_loads_existing_entry(store, settings):
    store.save_entry("2024-05-01", "*saved*")
    app = DiaryApp(entry_date="2024-05-01", store=store, settings=settings)
    assert app.session.text == "*saved*"
    assert not app.session.can_undo()


def test_app_uses_settings(store, settings):
    settings.save_settings({"default_highlight_color": "purple", "max_history": 5})
    app = DiaryApp(entry_date="2024-05-01", store=store, settings=settings)
    assert app.session.default_highlight_color == "purple"
    assert app.session.history._max_entries == 5


def test_app_rejects_invalid_date(store, settings):
    with pytest.raises(ValueError):
        DiaryApp(entry_date="not a date", store=store, settings=settings)


def test_preview_terminal_styles():
    term = preview_terminal()
    assert term.does_styling
    assert term.bold("x") != "x"


def test_shortcuts_keep_widget_and_session_in_sync(store, settings):
    app = DiaryApp(entry_date="2024-05-01", store=store, settings=settings)

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("h", "i")
            await pilot.press("ctrl+b")
            await pilot.pause()
            assert app.editor.text == "hi*bold text*"
            assert app.editor.selected_text == "bold text"
            assert app.session.text == "hi*bold text*"

            await pilot.press("ctrl+z")
            await pilot.pause()
            assert app.editor.text == "hi"
            assert app.session.text == "hi"

            await pilot.press("ctrl+y")
            await pilot.pause()
            assert app.editor.text == "hi*bold text*"
            assert app.session.text == "hi*bold text*"

    asyncio.run(run())


def test_bold_wraps_widget_selection(store, settings):
    store.save_entry("2024-05-01", "hello world")
    app = DiaryApp(entry_date="2024-05-01", store=store, settings=settings)

    async def run():
        async with app.run_test() as pilot:
            app.editor.select_line(0)
            await pilot.press("ctrl+b")
            await pilot.pause()
            assert app.editor.text == "*hello world*"
            assert app.session.selection.is_empty
            assert app.session.selection.start == len("*hello world*")

    asyncio.run(run())


def test_status_notification_names_the_key(store, settings):
    app = DiaryApp(entry_date="2024-05-01", store=store, settings=settings)
    messages = []
    app.notify = lambda message, **kwargs: messages.append(message)

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("ctrl+z")
            await pilot.pause()

    asyncio.run(run())
    assert messages == ["Ctrl-Z: Nothing to undo"]
