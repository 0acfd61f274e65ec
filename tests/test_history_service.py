import os
import sys
import unittest
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import WorkoutEntryRepository
from history_service import HistoryService
from helpers import make_entry


class HistoryServiceTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db = "test_history.db"
        if os.path.exists(self.db):
            os.remove(self.db)
        self.store = WorkoutEntryRepository(self.db)
        self.history = HistoryService(self.store)

    def tearDown(self) -> None:
        if os.path.exists(self.db):
            os.remove(self.db)

    def test_latest_entry_on_or_before_date(self) -> None:
        self.store.upsert(make_entry("e1", "2025-01-01"))
        self.store.upsert(make_entry("e2", "2025-01-10"))
        self.store.upsert(make_entry("future", "2025-01-20"))
        self.store.upsert(make_entry("bench", "2025-01-12", exercise_id="bench_press"))
        found = self.history.find_previous("squat", "2025-01-15")
        self.assertEqual(found.id, "e2")

    def test_same_date_counts_as_previous(self) -> None:
        self.store.upsert(make_entry("e1", "2025-01-15"))
        self.assertEqual(self.history.find_previous("squat", "2025-01-15").id, "e1")

    def test_none_when_nothing_qualifies(self) -> None:
        self.assertIsNone(self.history.find_previous("squat", "2025-01-15"))
        self.store.upsert(make_entry("later", "2025-02-01"))
        self.store.upsert(make_entry("bench", "2025-01-01", exercise_id="bench_press"))
        self.assertIsNone(self.history.find_previous("squat", "2025-01-15"))

    def test_exclude_id_skips_entry_being_edited(self) -> None:
        self.store.upsert(make_entry("old", "2025-01-01"))
        self.store.upsert(make_entry("editing", "2025-01-10"))
        found = self.history.find_previous("squat", "2025-01-10", exclude_id="editing")
        self.assertEqual(found.id, "old")
        self.assertIsNone(
            self.history.find_previous("squat", "2025-01-05", exclude_id="old")
        )

    def test_same_day_tie_break_prefers_latest_created_at(self) -> None:
        self.store.upsert(
            make_entry("newer", "2025-01-10", created_at="2025-01-10T18:00:00.000Z")
        )
        self.store.upsert(
            make_entry("older", "2025-01-10", created_at="2025-01-10T08:00:00.000Z")
        )
        self.assertEqual(self.history.find_previous("squat", "2025-01-31").id, "newer")

    def test_same_day_same_created_at_prefers_later_stored(self) -> None:
        self.store.upsert(make_entry("first", "2025-01-10"))
        self.store.upsert(make_entry("second", "2025-01-10"))
        self.assertEqual(self.history.find_previous("squat", "2025-01-31").id, "second")

    def test_does_not_mutate_store(self) -> None:
        self.store.upsert(make_entry("b", "2025-01-10"))
        self.store.upsert(make_entry("a", "2025-01-01"))
        before = self.store.all()
        self.history.find_previous("squat", "2025-01-31")
        self.assertEqual(self.store.all(), before)


if __name__ == "__main__":
    unittest.main()
