from typing import Optional

from db import WorkoutEntryRepository
from models import WorkoutEntry


class HistoryService:
    """Look up earlier performances of an exercise."""

    def __init__(self, entry_repo: WorkoutEntryRepository) -> None:
        self.entries = entry_repo

    def find_previous(
        self,
        exercise_id: str,
        date: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[WorkoutEntry]:
        """Return the latest entry for ``exercise_id`` on or before ``date``.

        ``exclude_id`` keeps an entry that is being edited from showing up as
        its own previous record. Entries sharing the latest date are ordered
        by ``created_at`` and then by their position in the store, so the most
        recently created one wins.
        """
        candidates = [
            (idx, e)
            for idx, e in enumerate(self.entries.all())
            # ISO dates compare chronologically as strings
            if e.exercise_id == exercise_id
            and e.date <= date
            and (exclude_id is None or e.id != exclude_id)
        ]
        if not candidates:
            return None
        _idx, latest = max(
            candidates, key=lambda pair: (pair[1].date, pair[1].created_at, pair[0])
        )
        return latest
