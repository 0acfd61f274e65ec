import os
import sys
import sqlite3
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import KeyValueRepository
from models import SetRecord, WorkoutEntry


class CountingKeyValueRepository(KeyValueRepository):
    """Key-value store that counts writes and can be told to fail them."""

    def __init__(self, db_path: str) -> None:
        super().__init__(db_path)
        self.writes = 0
        self.fail = False

    def set(self, key: str, value: str) -> None:
        if self.fail:
            raise sqlite3.OperationalError("disk I/O error")
        self.writes += 1
        super().set(key, value)


def make_entry(
    entry_id: str,
    date: str,
    exercise_id: str = "squat",
    body_part_id: str = "leg",
    created_at: str = "2025-01-01T00:00:00.000Z",
    weight: float = 80,
    reps: float = 10,
) -> WorkoutEntry:
    return WorkoutEntry(
        id=entry_id,
        date=date,
        body_part_id=body_part_id,
        exercise_id=exercise_id,
        sets=[SetRecord(set_number=1, weight=weight, reps=reps)],
        created_at=created_at,
    )
