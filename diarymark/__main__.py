"""diarymark CLI entry point.

Allows running via `python -m diarymark` and provides the console script
defined in `pyproject.toml`.

Usage:
    diarymark [YYYY-MM-DD]                      Edit an entry (default: today)
    diarymark list                              List stored entries
    diarymark preview [--ansi] [DATE|FILE|-]    Print a rendered preview
    diarymark --version
"""

from __future__ import annotations

import logging
import sys
from datetime import date
from typing import Optional

import blessed

from .logging_config import configure_logging
from .render import render_html, render_terminal
from .settings_persistence import SettingsPersistence
from .storage import DiaryStore, normalize_entry_date
from .version import get_version_string

logger = logging.getLogger(__name__)


def _usage() -> str:
    return (__doc__ or "").split("Usage:", 1)[-1].rstrip()


def _read_preview_source(target: Optional[str]) -> Optional[str]:
    """Resolve a preview target to raw diary text.

    ``-`` reads stdin, a date reads the stored entry, anything else is a file.
    """
    if target == '-':
        return sys.stdin.read()

    try:
        entry_date = normalize_entry_date(target or date.today())
    except ValueError:
        entry_date = None

    if entry_date is not None:
        entry = DiaryStore().load_entry(entry_date)
        if entry is None:
            print(f"No diary entry for {entry_date}", file=sys.stderr)
            return None
        return entry.content

    try:
        with open(target, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        print(f"Error reading {target}: {e}", file=sys.stderr)
        return None


def run_preview(args: list[str]) -> int:
    ansi = '--ansi' in args
    rest = [a for a in args if a != '--ansi']
    if len(rest) > 1:
        print(_usage(), file=sys.stderr)
        return 1

    text = _read_preview_source(rest[0] if rest else None)
    if text is None:
        return 1

    if ansi:
        print(render_terminal(text, blessed.Terminal(stream=sys.stdout)))
    else:
        settings = SettingsPersistence().load_settings()
        print(render_html(text, escape=settings["escape_html"]))
    return 0


def run_list() -> int:
    entries = DiaryStore().list_entries()
    if not entries:
        print("No diary entries yet.")
        return 0
    for entry in entries:
        first_line = entry.content.splitlines()[0] if entry.content else ""
        print(f"{entry.entry_date}  {entry.character_count:>6} characters  {first_line[:50]}")
    return 0


def run_editor(entry_date: Optional[str]) -> int:
    # Lazy import to avoid importing UI deps for list/preview
    from .textual_app import DiaryApp

    try:
        app = DiaryApp(entry_date=entry_date)
    except ValueError:
        print(f"Invalid date: {entry_date} (expected YYYY-MM-DD)", file=sys.stderr)
        return 1
    app.run()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: subcommand or an optional date
    args = sys.argv[1:] if argv is None else list(argv)
    configure_logging()

    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ("--help", "-h"):
        print(_usage())
        return 0
    if args and args[0] == 'list':
        return run_list()
    if args and args[0] == 'preview':
        return run_preview(args[1:])
    if len(args) > 1:
        print(_usage(), file=sys.stderr)
        return 1

    logger.debug("Opening editor for %s", args[0] if args else "today")
    return run_editor(args[0] if args else None)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
