from __future__ import annotations

import unittest

from app.scraping.targets import TargetUrlList
from app.scraping.types import LogSeverity


class TestTargetUrlList(unittest.TestCase):
    def setUp(self) -> None:
        self.messages: list[tuple[str, LogSeverity]] = []
        self.targets = TargetUrlList(
            ["https://ctftime.org/event/list/upcoming", "https://ctftime.org/event/list/upcoming"],
            on_log=lambda message, severity: self.messages.append((message, severity)),
        )

    def test_seeds_are_deduplicated_silently(self) -> None:
        self.assertEqual(self.targets.urls(), ("https://ctftime.org/event/list/upcoming",))
        self.assertEqual(self.messages, [])

    def test_add_appends_in_order(self) -> None:
        self.assertTrue(self.targets.add("  https://ctf.example.org/  "))

        self.assertEqual(len(self.targets), 2)
        self.assertEqual(self.targets.urls()[-1], "https://ctf.example.org/")
        self.assertEqual(
            self.messages,
            [("Added URL: https://ctf.example.org/", LogSeverity.SUCCESS)],
        )

    def test_blank_and_duplicate_are_ignored(self) -> None:
        self.assertFalse(self.targets.add("   "))
        self.assertFalse(self.targets.add("https://ctftime.org/event/list/upcoming"))

        self.assertEqual(len(self.targets), 1)
        self.assertEqual(self.messages, [])

    def test_remove_by_value(self) -> None:
        self.assertTrue(self.targets.remove("https://ctftime.org/event/list/upcoming"))
        self.assertFalse(self.targets.remove("https://ctftime.org/event/list/upcoming"))

        self.assertEqual(len(self.targets), 0)
        self.assertEqual(
            self.messages,
            [("Removed URL: https://ctftime.org/event/list/upcoming", LogSeverity.INFO)],
        )

    def test_remove_by_index(self) -> None:
        self.targets.add("https://ctf.example.org/")

        removed = self.targets.remove_at(0)

        self.assertEqual(removed, "https://ctftime.org/event/list/upcoming")
        self.assertIn("https://ctf.example.org/", self.targets)
        with self.assertRaises(IndexError):
            self.targets.remove_at(5)

    def test_snapshot_is_not_affected_by_later_edits(self) -> None:
        snapshot = self.targets.urls()

        self.targets.add("https://ctf.example.org/")

        self.assertEqual(len(snapshot), 1)


if __name__ == "__main__":
    unittest.main()
