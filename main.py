#!/usr/bin/env python3
"""diarymark - a diary editor with inline marker formatting.

Usage:
    python main.py [YYYY-MM-DD]

Controls:
    Ctrl-B: Bold (*text*)
    Ctrl-U: Underline (`text`)
    Alt-H: Highlight (|yellow|text|yellow|)
    Ctrl-Z / Ctrl-Y: Undo / Redo
    Ctrl-S: Save entry
    Ctrl-Q: Quit
"""

import sys
from diarymark.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
