"""Local storage for date-stamped diary entries.

Each day has at most one entry holding the raw marker-syntax text exactly
as the editor produced it. No rendering or style metadata is stored; the
preview is derived again whenever an entry is read.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


@dataclass
class DiaryEntry:
    entry_date: str
    content: str
    created_at: str
    updated_at: str

    @property
    def character_count(self) -> int:
        return len(self.content)


def normalize_entry_date(value: DateLike) -> str:
    """Return ``value`` as an ISO ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If ``value`` is not a valid calendar date
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    parsed = datetime.strptime(value.strip(), EditorConstants.ENTRY_DATE_FORMAT)
    return parsed.date().isoformat()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class DiaryStore:
    """JSON-file store of diary entries keyed by entry date.

    Entries live in the user's data directory unless ``data_dir`` is given.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        if data_dir is None:
            data_dir = platformdirs.user_data_dir(EditorConstants.APP_NAME, EditorConstants.APP_AUTHOR)
        self._data_dir = Path(data_dir)
        self._entries_file = self._data_dir / EditorConstants.ENTRIES_FILENAME
        self._cache: Optional[Dict[str, Dict[str, str]]] = None
        self._load_failed = False

    @property
    def path(self) -> Path:
        return self._entries_file

    def _load_all(self) -> Dict[str, Dict[str, str]]:
        """Entries on disk. An unreadable file yields {} and is not cached."""
        if self._cache is not None:
            return self._cache
        self._load_failed = False

        if not self._entries_file.exists():
            self._cache = {}
            return self._cache

        try:
            with open(self._entries_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            logger.warning(f"Could not load diary entries from {self._entries_file}: {e}")
            self._load_failed = True
            return {}

        if not isinstance(data, dict):
            logger.warning("Diary file has invalid format (not a dict), ignoring")
            self._load_failed = True
            return {}
        self._cache = data
        return self._cache

    def _save_all(self, entries: Dict[str, Dict[str, str]]) -> bool:
        """Write all entries atomically (temp file + rename)."""
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create data directory {self._data_dir}: {e}")
            return False

        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(
                mode='w',
                encoding='utf-8',
                dir=self._data_dir,
                suffix='.tmp',
                delete=False,
            ) as temp_file:
                temp_filename = temp_file.name
                json.dump(entries, temp_file, indent=2, ensure_ascii=False)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, self._entries_file)
        except OSError as e:
            logger.warning(f"Could not save diary entries to {self._entries_file}: {e}")
            if temp_filename is not None:
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            return False

        self._cache = entries
        return True

    @staticmethod
    def _to_entry(record) -> Optional[DiaryEntry]:
        if not isinstance(record, dict):
            return None
        try:
            return DiaryEntry(
                entry_date=str(record["entry_date"]),
                content=str(record["content"]),
                created_at=str(record.get("created_at", "")),
                updated_at=str(record.get("updated_at", "")),
            )
        except KeyError:
            return None

    def load_entry(self, entry_date: DateLike) -> Optional[DiaryEntry]:
        """Return the entry for ``entry_date`` or None if there is none."""
        key = normalize_entry_date(entry_date)
        record = self._load_all().get(key)
        if record is None:
            return None
        entry = self._to_entry(record)
        if entry is None:
            logger.warning(f"Diary entry for {key} is malformed, ignoring")
        return entry

    def save_entry(self, entry_date: DateLike, content: str) -> Optional[DiaryEntry]:
        """Create or update the entry for ``entry_date``.

        Returns:
            The stored entry, or None if writing failed
        """
        key = normalize_entry_date(entry_date)
        entries = dict(self._load_all())
        if self._load_failed:
            logger.warning(f"Not saving entry for {key}: {self._entries_file} is unreadable")
            return None
        existing = self._to_entry(entries.get(key))
        now = _now()
        entry = DiaryEntry(
            entry_date=key,
            content=content,
            created_at=existing.created_at if existing and existing.created_at else now,
            updated_at=now,
        )
        entries[key] = asdict(entry)
        if not self._save_all(entries):
            return None
        logger.debug(f"Saved diary entry for {key} ({entry.character_count} characters)")
        return entry

    def delete_entry(self, entry_date: DateLike) -> bool:
        """Remove the entry for ``entry_date``. False if absent or not written."""
        key = normalize_entry_date(entry_date)
        entries = dict(self._load_all())
        if self._load_failed:
            logger.warning(f"Not deleting entry for {key}: {self._entries_file} is unreadable")
            return False
        if key not in entries:
            return False
        del entries[key]
        return self._save_all(entries)

    def list_entries(self) -> List[DiaryEntry]:
        """All well-formed entries, newest first."""
        entries = []
        for record in self._load_all().values():
            entry = self._to_entry(record)
            if entry is not None:
                entries.append(entry)
        return sorted(entries, key=lambda e: e.entry_date, reverse=True)
