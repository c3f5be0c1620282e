"""Preview rendering of marker-syntax diary text.

The transform is a fixed sequence of substitution passes:

1. ``*X*``            -> bold
2. `` `X` ``          -> underline
3. ``|c|X|c|``        -> highlight in palette color ``c``
4. line breaks        -> a single visual line break

A highlight whose opening and closing color tags differ is malformed and is
left as literal text. Unknown colors fall back to the yellow style.

The passes are shared between output formats; a ``PreviewStyle`` supplies
the markup each pass emits. ``HtmlStyle`` produces the HTML used by web
previews and ``TerminalStyle`` produces ANSI sequences through blessed.
"""

import html
import re
from typing import Optional

import blessed

from .constants import EditorConstants
from .markers import palette_class

BOLD_PATTERN = re.compile(r"\*([^*]+)\*")
UNDERLINE_PATTERN = re.compile(r"`([^`]+)`")
HIGHLIGHT_PATTERN = re.compile(r"\|(\w+)\|([^|]+)\|(\w+)\|")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


class PreviewStyle:
    """Markup emitted by each rendering pass."""

    line_break = "\n"

    def bold(self, text: str) -> str:
        return text

    def underline(self, text: str) -> str:
        return text

    def highlight(self, color: str, text: str) -> str:
        return text


class HtmlStyle(PreviewStyle):
    line_break = "<br>"

    def bold(self, text):
        return f"<strong>{text}</strong>"

    def underline(self, text):
        return f"<u>{text}</u>"

    def highlight(self, color, text):
        return f'<span class="{palette_class(color)} px-1 rounded">{text}</span>'


class TerminalStyle(PreviewStyle):
    """ANSI styling through a blessed terminal.

    A terminal without styling support (e.g. output piped to a file) yields
    the bare text for every pass.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()

    def bold(self, text):
        return self.term.bold(text)

    def underline(self, text):
        return self.term.underline(text)

    def highlight(self, color, text):
        colors = EditorConstants.HIGHLIGHT_TERMINAL_COLORS
        attr = colors.get(color, colors[EditorConstants.DEFAULT_HIGHLIGHT_COLOR])
        return getattr(self.term, attr)(text)


def render(text: str, style: PreviewStyle, escape: bool = False) -> str:
    """Run the marker passes over ``text`` using ``style``.

    Args:
        text: Raw marker-syntax text
        style: Markup for each pass
        escape: HTML-escape ``&``, ``<`` and ``>`` before rendering

    Returns:
        Rendered string
    """
    if escape:
        text = html.escape(text, quote=False)

    text = BOLD_PATTERN.sub(lambda m: style.bold(m.group(1)), text)
    text = UNDERLINE_PATTERN.sub(lambda m: style.underline(m.group(1)), text)

    def _highlight(match):
        opening, inner, closing = match.groups()
        if opening != closing:
            return match.group(0)
        return style.highlight(opening, inner)

    text = HIGHLIGHT_PATTERN.sub(_highlight, text)
    return LINE_BREAK_PATTERN.sub(style.line_break, text)


def render_html(text: str, escape: bool = False) -> str:
    """Render diary text to preview HTML."""
    return render(text, HtmlStyle(), escape=escape)


def render_terminal(text: str, terminal: Optional[blessed.Terminal] = None) -> str:
    """Render diary text with ANSI styling for a terminal."""
    return render(text, TerminalStyle(terminal))
