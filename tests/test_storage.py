"""Unit tests for diary entry storage."""

import json
import os
import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path

from diarymark.storage import DiaryStore, normalize_entry_date


class TestDiaryStore(unittest.TestCase):
    """Test date-stamped entry persistence."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.store = DiaryStore(self.temp_dir)

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_save_and_load_entry(self):
        entry = self.store.save_entry("2024-05-01", "A *good* day")
        self.assertIsNotNone(entry)
        loaded = self.store.load_entry("2024-05-01")
        self.assertEqual(loaded.content, "A *good* day")
        self.assertEqual(loaded.entry_date, "2024-05-01")
        self.assertEqual(loaded.character_count, 12)

    def test_content_is_stored_as_raw_marker_text(self):
        content = "|yellow|hi|yellow|\n`u`"
        self.store.save_entry("2024-05-01", content)
        with open(self.store.path, encoding='utf-8') as f:
            data = json.load(f)
        self.assertEqual(data["2024-05-01"]["content"], content)
        self.assertEqual(set(data["2024-05-01"]), {"entry_date", "content", "created_at", "updated_at"})

    def test_missing_entry(self):
        self.assertIsNone(self.store.load_entry("2024-05-01"))

    def test_update_keeps_created_at(self):
        first = self.store.save_entry("2024-05-01", "one")
        second = self.store.save_entry("2024-05-01", "two")
        self.assertEqual(second.created_at, first.created_at)
        self.assertEqual(self.store.load_entry("2024-05-01").content, "two")
        self.assertEqual(len(self.store.list_entries()), 1)

    def test_persists_across_instances(self):
        self.store.save_entry(date(2024, 5, 2), "persisted")
        other = DiaryStore(self.temp_dir)
        self.assertEqual(other.load_entry("2024-05-02").content, "persisted")

    def test_list_entries_newest_first(self):
        self.store.save_entry("2024-01-15", "b")
        self.store.save_entry("2023-12-31", "a")
        self.store.save_entry("2024-02-01", "c")
        dates = [e.entry_date for e in self.store.list_entries()]
        self.assertEqual(dates, ["2024-02-01", "2024-01-15", "2023-12-31"])

    def test_delete_entry(self):
        self.store.save_entry("2024-05-01", "x")
        self.assertTrue(self.store.delete_entry("2024-05-01"))
        self.assertIsNone(self.store.load_entry("2024-05-01"))
        self.assertFalse(self.store.delete_entry("2024-05-01"))

    def test_date_normalization(self):
        self.assertEqual(normalize_entry_date("2024-5-1"), "2024-05-01")
        self.assertEqual(normalize_entry_date(date(2024, 5, 1)), "2024-05-01")
        with self.assertRaises(ValueError):
            normalize_entry_date("yesterday")
        with self.assertRaises(ValueError):
            self.store.save_entry("2024-02-30", "x")

    def test_corrupted_file_is_ignored(self):
        Path(self.temp_dir, "entries.json").write_text("{not json", encoding='utf-8')
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertEqual(self.store.list_entries(), [])

    def test_non_dict_file_is_ignored(self):
        Path(self.temp_dir, "entries.json").write_text("[1, 2]", encoding='utf-8')
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertIsNone(self.store.load_entry("2024-05-01"))

    def test_unreadable_file_survives_save(self):
        truncated = '{"2024-01-01": {"entry_date": "2024-01-01", "content": "years of notes"'
        path = Path(self.temp_dir, "entries.json")
        path.write_text(truncated, encoding='utf-8')
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertIsNone(self.store.save_entry("2024-05-01", "new"))
        self.assertEqual(path.read_text(encoding='utf-8'), truncated)

    def test_unreadable_file_survives_delete(self):
        path = Path(self.temp_dir, "entries.json")
        path.write_text("[1, 2]", encoding='utf-8')
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertFalse(self.store.delete_entry("2024-05-01"))
        self.assertEqual(path.read_text(encoding='utf-8'), "[1, 2]")

    def test_repaired_file_is_reread(self):
        path = Path(self.temp_dir, "entries.json")
        path.write_text("{not json", encoding='utf-8')
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertEqual(self.store.list_entries(), [])
        path.write_text(json.dumps({"2024-01-01": {"entry_date": "2024-01-01", "content": "old"}}),
                        encoding='utf-8')
        self.assertIsNotNone(self.store.save_entry("2024-05-01", "new"))
        self.assertEqual([e.content for e in self.store.list_entries()], ["new", "old"])

    def test_malformed_record_is_skipped(self):
        Path(self.temp_dir, "entries.json").write_text(
            json.dumps({"2024-05-01": {"entry_date": "2024-05-01"}, "2024-05-02": "oops"}),
            encoding='utf-8',
        )
        self.assertEqual(self.store.list_entries(), [])
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertIsNone(self.store.load_entry("2024-05-01"))

    def test_save_failure_returns_none(self):
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, 'w') as f:
            f.write("file, not a directory")
        store = DiaryStore(blocker)
        with self.assertLogs('diarymark.storage', level='WARNING'):
            self.assertIsNone(store.save_entry("2024-05-01", "x"))

    def test_no_temp_files_left_behind(self):
        self.store.save_entry("2024-05-01", "x")
        self.assertEqual(os.listdir(self.temp_dir), ["entries.json"])


if __name__ == '__main__':
    unittest.main()
