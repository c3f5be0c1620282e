"""Keyboard input parsing using curtsies-style key tokens.

Tokens look like ``<Ctrl-z>``, ``<Ctrl-Shift-z>`` or, as Textual names
them, ``ctrl+shift+z``. Plain characters are passed through as regular keys.
"""

from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


# Modifiers that act as the primary shortcut modifier (Ctrl, or Cmd on macOS)
PRIMARY_MODIFIERS = {'ctrl', 'control', 'cmd', 'command', 'super'}

SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert', 'tab',
}


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'z', 'left', 'backspace')
    raw: str  # The raw key string
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False


def _split_token(token: str) -> tuple[set[str], str]:
    """Split ``ctrl-shift-z`` style names into (modifiers, base)."""
    # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
    name = token.replace('+', '-')
    if name.endswith('-') and len(name) > 1:
        # '<Ctrl-->' style: the base key is the separator itself
        return {m.lower() for m in name[:-2].split('-') if m}, '-'
    parts = name.split('-')
    return {m.lower() for m in parts[:-1]}, parts[-1]


def parse_key(key) -> KeyEvent:
    """Parse a key token into a KeyEvent.

    Args:
        key: Key token or character (anything with a useful ``str()``)

    Returns:
        Parsed KeyEvent
    """
    key_str = str(key)

    token = None
    if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
        token = key_str[1:-1]
    elif len(key_str) > 1 and ('+' in key_str or key_str.lower() in SPECIAL_KEYS):
        token = key_str

    if token is not None:
        mods, base = _split_token(token)
        # An upper-case letter implies shift
        if len(base) == 1 and base.isalpha() and base.isupper():
            mods.add('shift')
        base = base.lower()
        # Normalize meta/esc -> alt
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'
        is_shift = 'shift' in mods

        if mods & PRIMARY_MODIFIERS and len(base) == 1:
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str,
                            is_ctrl=True, is_alt='alt' in mods, is_shift=is_shift)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True, is_shift=is_shift)
        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if base == 'tab' and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
        if base in ('esc', 'escape'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
        # Fallback: treat unknown token as special
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_shift=is_shift)

    # Single-byte ASCII control chars (Ctrl-<letter>)
    if len(key_str) == 1:
        o = ord(key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
            ch = chr(ord('a') + o - 1)
            # Map Ctrl-J/Ctrl-M to enter, consistent with terminals
            if ch in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

    # Bare ESC
    if key_str == '\x1b':
        return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

    return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


def describe(event: KeyEvent) -> str:
    """Human-readable name of a key event, e.g. ``Ctrl-Shift-Z``."""
    parts = []
    if event.is_ctrl:
        parts.append('Ctrl')
    if event.is_alt:
        parts.append('Alt')
    if event.is_shift:
        parts.append('Shift')
    value = event.value.upper() if len(event.value) == 1 else event.value
    parts.append(value)
    return '-'.join(parts)
