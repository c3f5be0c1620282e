"""Format markers and their plain-text syntax.

Formatting lives in the diary text itself: bold is ``*text*``, underline is
`` `text` `` and a highlight is ``|color|text|color|``. A ``FormatMarker`` is
a transient instruction that produces that syntax around a selection.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .constants import EditorConstants
from .model import Selection

_COLOR_NAME = re.compile(r"\w+")


class MarkerKind(Enum):
    """Kinds of inline formatting."""
    BOLD = "bold"
    UNDERLINE = "underline"
    HIGHLIGHT = "highlight"


def normalize_color(color: Optional[str], default: str = EditorConstants.DEFAULT_HIGHLIGHT_COLOR) -> str:
    """Return a color name that can be written into highlight syntax.

    Names are lower-cased. Anything that is not a single word (the highlight
    delimiters only ever match ``\\w+``) is replaced with ``default``.
    """
    if color is None:
        return default
    name = color.strip().lower()
    if not _COLOR_NAME.fullmatch(name):
        return default
    return name


def palette_class(color: str) -> str:
    """CSS classes for a highlight color, falling back to yellow."""
    palette = EditorConstants.HIGHLIGHT_PALETTE
    return palette.get(color, palette[EditorConstants.DEFAULT_HIGHLIGHT_COLOR])


@dataclass(frozen=True)
class FormatMarker:
    kind: MarkerKind
    color: Optional[str] = None

    @classmethod
    def bold(cls) -> "FormatMarker":
        return cls(MarkerKind.BOLD)

    @classmethod
    def underline(cls) -> "FormatMarker":
        return cls(MarkerKind.UNDERLINE)

    @classmethod
    def highlight(cls, color: Optional[str] = None) -> "FormatMarker":
        return cls(MarkerKind.HIGHLIGHT, normalize_color(color))

    @property
    def opening(self) -> str:
        if self.kind == MarkerKind.BOLD:
            return EditorConstants.BOLD_DELIMITER
        if self.kind == MarkerKind.UNDERLINE:
            return EditorConstants.UNDERLINE_DELIMITER
        bar = EditorConstants.HIGHLIGHT_DELIMITER
        return f"{bar}{normalize_color(self.color)}{bar}"

    @property
    def closing(self) -> str:
        # Highlight tags are symmetric; the other delimiters are single characters
        return self.opening

    @property
    def placeholder(self) -> str:
        if self.kind == MarkerKind.BOLD:
            return EditorConstants.BOLD_PLACEHOLDER
        if self.kind == MarkerKind.UNDERLINE:
            return EditorConstants.UNDERLINE_PLACEHOLDER
        return EditorConstants.HIGHLIGHT_PLACEHOLDER

    def wrap(self, text: str) -> str:
        return f"{self.opening}{text}{self.closing}"


def insert_marker(text: str, selection: Selection, marker: FormatMarker) -> Tuple[str, Selection]:
    """Apply ``marker`` to ``selection`` within ``text``.

    With an empty selection the marker's placeholder phrase is inserted at
    the caret and the returned selection spans exactly that phrase, so the
    user can type over it. Otherwise the selected substring is wrapped and
    the returned selection is a caret just after the closing delimiter.

    Returns:
        Tuple of (new text, new selection)
    """
    selection = selection.clamp(len(text))
    start, end = selection.start, selection.end
    before, after = text[:start], text[end:]

    if selection.is_empty:
        inner_start = start + len(marker.opening)
        inner_end = inner_start + len(marker.placeholder)
        return before + marker.wrap(marker.placeholder) + after, Selection(inner_start, inner_end)

    wrapped = marker.wrap(text[start:end])
    return before + wrapped + after, Selection.caret(start + len(wrapped))
