"""Tests for ``CVS/Entries`` parsing and the per-invocation reader cache."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cvn.entries import EntriesReader, TrackedDirectory, TrackedFile, parse_entry_line

from cvs_checkout import PAST, dir_record, file_record, write_entries


class ParseEntryLineTests(unittest.TestCase):
    def test_file_record_carries_revision_and_server_time(self) -> None:
        entry = parse_entry_line("/main.c/1.4/Sun Sep  9 01:46:40 2001/-kb/Trel\n", Path("src"))

        self.assertIsInstance(entry, TrackedFile)
        assert isinstance(entry, TrackedFile)
        self.assertEqual(entry.name, "main.c")
        self.assertEqual(entry.revision, "1.4")
        self.assertEqual(entry.server_mtime, PAST)
        self.assertEqual(entry.options, "-kb")
        self.assertEqual(entry.tag, "Trel")
        self.assertEqual(entry.path, Path("src/main.c"))
        self.assertFalse(entry.is_added)

    def test_directory_marker_has_no_time(self) -> None:
        entry = parse_entry_line("D/lib////", Path("."))

        self.assertEqual(entry, TrackedDirectory(name="lib", directory=Path(".")))
        assert entry is not None
        self.assertEqual(entry.path, Path("lib"))

    def test_added_and_removed_revisions(self) -> None:
        added = parse_entry_line("/new.c/0/dummy timestamp//", Path("."))
        removed = parse_entry_line("/old.c/-1.3/Sun Sep  9 01:46:40 2001//", Path("."))

        assert isinstance(added, TrackedFile) and isinstance(removed, TrackedFile)
        self.assertTrue(added.is_added)
        self.assertIsNone(added.server_mtime)
        self.assertTrue(removed.is_removed)

    def test_non_records_are_rejected(self) -> None:
        for line in ("D", "", "garbage", "X/name/1.1///", "//1.1///"):
            with self.subTest(line=line):
                self.assertIsNone(parse_entry_line(line, Path(".")))


class EntriesReaderTests(unittest.TestCase):
    def test_missing_entries_file_means_nothing_tracked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            reader = EntriesReader(Path(tmp))
            self.assertEqual(dict(reader.entries_for(Path("."))), {})
            self.assertIsNone(reader.lookup(Path("a.txt")))

    def test_lookup_reads_the_files_own_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            write_entries(root, file_record("top.txt"), dir_record("sub"))
            write_entries(root / "sub", file_record("inner.txt", "1.7"))
            reader = EntriesReader(root)

            inner = reader.lookup(Path("sub/inner.txt"))
            self.assertIsInstance(inner, TrackedFile)
            assert isinstance(inner, TrackedFile)
            self.assertEqual(inner.revision, "1.7")
            self.assertEqual(inner.directory, Path("sub"))
            self.assertEqual(inner.path, Path("sub/inner.txt"))
            self.assertIsInstance(reader.lookup(Path("sub")), TrackedDirectory)
            self.assertIsNone(reader.lookup(Path("sub/top.txt")))

    def test_second_read_returns_cached_snapshot(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            entries_path = write_entries(root, file_record("a.txt"))
            reader = EntriesReader(root)

            first = reader.entries_for(Path("."))
            entries_path.write_text(file_record("b.txt") + "\n", encoding="utf-8")
            second = reader.entries_for(Path("."))

            self.assertIs(first, second)
            self.assertEqual(list(second), ["a.txt"])

    def test_entries_log_adds_and_removes_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            write_entries(root, file_record("keep.txt"), file_record("drop.txt"))
            (root / "CVS" / "Entries.Log").write_text(
                f"A {file_record('added.txt', '0', 'dummy timestamp')}\n"
                f"R {file_record('drop.txt')}\n",
                encoding="utf-8",
            )
            names = set(EntriesReader(root).entries_for(Path(".")))

            self.assertEqual(names, {"keep.txt", "added.txt"})


if __name__ == "__main__":
    unittest.main()
