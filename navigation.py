import datetime
from enum import Enum
from typing import List, Optional, Set

from db import WorkoutEntryRepository
from entry_service import EntryService, SLOT_COUNT
from history_service import HistoryService
from models import CommitContext, SetInput, WorkoutEntry
from tools import CalendarTools
import catalog


class View(str, Enum):
    CALENDAR = "calendar"
    DAY = "day"
    SELECT_EXERCISE = "select_exercise"
    EDIT_SETS = "edit_sets"


class InvalidTransition(ValueError):
    """Raised when an action is not allowed from the current view."""


class LogNavigator:
    """Screen state for the calendar -> day -> exercise -> sets flow.

    Leaving the set editor through :meth:`back_to_day` is what saves the
    entered sets; there is no separate save or discard action.
    """

    def __init__(
        self,
        entry_repo: WorkoutEntryRepository,
        entry_service: EntryService | None = None,
        history: HistoryService | None = None,
        today: datetime.date | None = None,
    ) -> None:
        self.entries = entry_repo
        self.entry_service = entry_service or EntryService(entry_repo)
        self.history = history or HistoryService(entry_repo)
        start = today or datetime.date.today()
        self.view = View.CALENDAR
        self.year = start.year
        self.month0 = start.month - 1
        self.selected_date: Optional[str] = None
        self.body_part_id: Optional[str] = None
        self.exercise_id: Optional[str] = None
        self.editing_id: Optional[str] = None
        self.slots: List[SetInput] = EntryService.empty_slots()

    def _require(self, *views: View) -> None:
        if self.view not in views:
            allowed = ", ".join(v.value for v in views)
            raise InvalidTransition(
                f"cannot do this from {self.view.value} (needs {allowed})"
            )

    # calendar

    def prev_month(self) -> None:
        self._require(View.CALENDAR)
        self.year, self.month0 = CalendarTools.shift_month(self.year, self.month0, -1)

    def next_month(self) -> None:
        self._require(View.CALENDAR)
        self.year, self.month0 = CalendarTools.shift_month(self.year, self.month0, 1)

    def month_grid(self) -> List[List[Optional[int]]]:
        return CalendarTools.build_month_grid(self.year, self.month0)

    def active_days(self) -> Set[int]:
        """Day numbers of the displayed month that have at least one entry."""
        dates = self.entries.dates_with_entries(self.year, self.month0)
        return {int(d[-2:]) for d in dates}

    def select_day(self, day: Optional[int]) -> None:
        self._require(View.CALENDAR)
        if not day:
            return
        self.selected_date = CalendarTools.format_date(self.year, self.month0, day)
        self.view = View.DAY

    # day

    def entries_for_selected_date(self) -> List[WorkoutEntry]:
        if self.selected_date is None:
            return []
        return self.entries.entries_on(self.selected_date)

    def back_to_calendar(self) -> None:
        self._require(View.DAY, View.SELECT_EXERCISE)
        self.view = View.CALENDAR

    def start_new_entry(self) -> None:
        self._require(View.DAY)
        self.editing_id = None
        self.view = View.SELECT_EXERCISE

    def choose_exercise(self, body_part_id: str, exercise_id: str) -> None:
        self._require(View.SELECT_EXERCISE)
        found = catalog.exercise(exercise_id)
        if found is None or found.body_part_id != body_part_id:
            raise ValueError(f"unknown exercise {exercise_id!r} for {body_part_id!r}")
        self.body_part_id = body_part_id
        self.exercise_id = exercise_id
        self.editing_id = None
        self.slots = EntryService.empty_slots()
        self.view = View.EDIT_SETS

    def open_entry(self, entry_id: str) -> None:
        self._require(View.DAY)
        entry = self.entries.fetch(entry_id)
        if entry is None:
            raise ValueError("entry not found")
        self.selected_date = entry.date
        self.body_part_id = entry.body_part_id
        self.exercise_id = entry.exercise_id
        self.editing_id = entry.id
        self.slots = EntryService.slots_for(entry)
        self.view = View.EDIT_SETS

    # edit sets

    def update_slot(self, index: int, field: str, value: str) -> None:
        self._require(View.EDIT_SETS)
        if not 0 <= index < SLOT_COUNT:
            raise IndexError("slot index out of range")
        if field not in ("weight", "reps", "memo"):
            raise ValueError(f"unknown slot field {field!r}")
        self.slots[index] = self.slots[index].model_copy(update={field: value})

    def previous_record(self) -> Optional[WorkoutEntry]:
        if self.exercise_id is None or self.selected_date is None:
            return None
        return self.history.find_previous(
            self.exercise_id, self.selected_date, self.editing_id
        )

    def back_to_day(self) -> Optional[WorkoutEntry]:
        """Return to the day view, saving the slots when leaving the editor."""
        self._require(View.EDIT_SETS, View.SELECT_EXERCISE)
        saved = None
        if (
            self.view == View.EDIT_SETS
            and self.selected_date
            and self.body_part_id
            and self.exercise_id
        ):
            saved = self.entry_service.commit(
                self.slots,
                CommitContext(
                    date=self.selected_date,
                    body_part_id=self.body_part_id,
                    exercise_id=self.exercise_id,
                    editing_id=self.editing_id,
                ),
            )
        self.slots = EntryService.empty_slots()
        self.editing_id = None
        self.view = View.DAY
        return saved
