"""diarymark - a diary editor with inline marker formatting."""

from .markers import FormatMarker, MarkerKind, insert_marker
from .model import Selection
from .render import render_html, render_terminal
from .session import EditorSession
from .storage import DiaryEntry, DiaryStore
from .undo import HistoryStack

__all__ = [
    'FormatMarker',
    'MarkerKind',
    'insert_marker',
    'Selection',
    'render_html',
    'render_terminal',
    'EditorSession',
    'DiaryEntry',
    'DiaryStore',
    'HistoryStack',
]
