import os
import sys
import datetime
import unittest
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import WorkoutEntryRepository
from navigation import InvalidTransition, LogNavigator, View
from helpers import make_entry


class NavigationTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db = "test_navigation.db"
        if os.path.exists(self.db):
            os.remove(self.db)
        self.store = WorkoutEntryRepository(self.db)
        self.nav = LogNavigator(self.store, today=datetime.date(2025, 1, 20))

    def tearDown(self) -> None:
        if os.path.exists(self.db):
            os.remove(self.db)

    def _enter_sets(self, day: int, exercise_id: str = "squat") -> None:
        self.nav.select_day(day)
        self.nav.start_new_entry()
        self.nav.choose_exercise("leg", exercise_id)

    def test_starts_on_current_month(self) -> None:
        self.assertEqual(self.nav.view, View.CALENDAR)
        self.assertEqual((self.nav.year, self.nav.month0), (2025, 0))
        self.assertEqual(len(self.nav.month_grid()), 6)

    def test_month_navigation(self) -> None:
        self.nav.prev_month()
        self.assertEqual((self.nav.year, self.nav.month0), (2024, 11))
        self.nav.next_month()
        self.nav.next_month()
        self.assertEqual((self.nav.year, self.nav.month0), (2025, 1))

    def test_empty_cell_is_ignored(self) -> None:
        self.nav.select_day(None)
        self.assertEqual(self.nav.view, View.CALENDAR)

    def test_leaving_editor_commits(self) -> None:
        self._enter_sets(15)
        self.assertEqual(self.nav.view, View.EDIT_SETS)
        self.nav.update_slot(0, "weight", "80")
        self.nav.update_slot(0, "reps", "10")
        saved = self.nav.back_to_day()
        self.assertEqual(self.nav.view, View.DAY)
        self.assertEqual(saved.date, "2025-01-15")
        self.assertEqual([e.id for e in self.nav.entries_for_selected_date()], [saved.id])
        self.assertIsNone(self.nav.editing_id)
        self.assertTrue(all(s.weight == "" for s in self.nav.slots))

    def test_leaving_empty_editor_saves_nothing(self) -> None:
        self._enter_sets(15)
        self.assertIsNone(self.nav.back_to_day())
        self.assertEqual(len(self.store), 0)

    def test_back_from_exercise_choice_does_not_commit(self) -> None:
        self.nav.select_day(3)
        self.nav.start_new_entry()
        self.assertIsNone(self.nav.back_to_day())
        self.assertEqual(self.nav.view, View.DAY)

    def test_reopen_entry_prefills_and_replaces(self) -> None:
        self._enter_sets(10)
        self.nav.update_slot(0, "weight", "80")
        self.nav.update_slot(0, "reps", "10")
        self.nav.update_slot(2, "weight", "85")
        self.nav.update_slot(2, "reps", "8")
        saved = self.nav.back_to_day()

        self.nav.open_entry(saved.id)
        self.assertEqual(self.nav.editing_id, saved.id)
        self.assertEqual(self.nav.slots[0].weight, "80")
        self.assertEqual(self.nav.slots[1].weight, "")
        self.assertEqual(self.nav.slots[2].reps, "8")
        self.nav.update_slot(1, "weight", "82.5")
        self.nav.update_slot(1, "reps", "9")
        updated = self.nav.back_to_day()
        self.assertEqual(updated.id, saved.id)
        self.assertEqual(updated.created_at, saved.created_at)
        self.assertEqual([s.set_number for s in updated.sets], [1, 2, 3])
        self.assertEqual(len(self.store), 1)

    def test_previous_record_excludes_entry_being_edited(self) -> None:
        self.store.upsert(make_entry("old", "2025-01-05"))
        self.store.upsert(make_entry("today", "2025-01-15"))
        self.nav.select_day(15)
        self.nav.open_entry("today")
        self.assertEqual(self.nav.previous_record().id, "old")

    def test_previous_record_for_new_entry(self) -> None:
        self.store.upsert(make_entry("old", "2025-01-05"))
        self._enter_sets(15)
        self.assertEqual(self.nav.previous_record().id, "old")
        self.nav.back_to_day()
        self.nav.start_new_entry()
        self.nav.choose_exercise("chest", "bench_press")
        self.assertIsNone(self.nav.previous_record())

    def test_active_days(self) -> None:
        self.store.upsert(make_entry("a", "2025-01-05"))
        self.store.upsert(make_entry("b", "2025-01-15"))
        self.store.upsert(make_entry("c", "2025-02-15"))
        self.assertEqual(self.nav.active_days(), {5, 15})

    def test_invalid_transitions(self) -> None:
        with self.assertRaises(InvalidTransition):
            self.nav.start_new_entry()
        with self.assertRaises(InvalidTransition):
            self.nav.back_to_day()
        self.nav.select_day(1)
        with self.assertRaises(InvalidTransition):
            self.nav.next_month()
        with self.assertRaises(InvalidTransition):
            self.nav.update_slot(0, "weight", "1")

    def test_choose_unknown_exercise(self) -> None:
        self.nav.select_day(1)
        self.nav.start_new_entry()
        with self.assertRaises(ValueError):
            self.nav.choose_exercise("chest", "squat")

    def test_back_to_calendar(self) -> None:
        self.nav.select_day(1)
        self.nav.back_to_calendar()
        self.assertEqual(self.nav.view, View.CALENDAR)


if __name__ == "__main__":
    unittest.main()
