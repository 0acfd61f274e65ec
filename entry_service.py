import datetime
import math
from typing import Callable, List, Optional, Sequence

from loguru import logger

from db import WorkoutEntryRepository
from models import CommitContext, SetInput, SetRecord, WorkoutEntry

SLOT_COUNT = 5


class EntryService:
    """Turn the fixed set of edit-form slots into stored workout entries."""

    def __init__(
        self,
        entry_repo: WorkoutEntryRepository,
        clock: Callable[[], datetime.datetime] | None = None,
    ) -> None:
        self.entries = entry_repo
        self._clock = clock or (
            lambda: datetime.datetime.now(datetime.timezone.utc)
        )

    @staticmethod
    def empty_slots() -> List[SetInput]:
        return [SetInput() for _ in range(SLOT_COUNT)]

    @staticmethod
    def slots_for(entry: WorkoutEntry) -> List[SetInput]:
        """Return form slots pre-filled from ``entry``; missing sets stay blank."""
        by_number = {s.set_number: s for s in entry.sets}
        slots = []
        for number in range(1, SLOT_COUNT + 1):
            record = by_number.get(number)
            if record is None:
                slots.append(SetInput())
            else:
                slots.append(
                    SetInput(
                        weight=EntryService._format_number(record.weight),
                        reps=EntryService._format_number(record.reps),
                        memo=record.memo,
                    )
                )
        return slots

    @staticmethod
    def _format_number(value: float) -> str:
        return str(int(value)) if float(value).is_integer() else str(value)

    @staticmethod
    def parse_number(text: str) -> float:
        """Parse slot text; anything that is not a finite number counts as 0."""
        try:
            value = float(text.strip())
        except ValueError:
            return 0.0
        return value if math.isfinite(value) else 0.0

    @staticmethod
    def reconcile(slots: Sequence[SetInput]) -> List[SetRecord]:
        """Keep the slots that hold a positive weight and rep count.

        Set numbers follow the slot position, so dropping a slot leaves a gap
        (slots 1 and 3 give set numbers 1 and 3).
        """
        if len(slots) != SLOT_COUNT:
            raise ValueError(f"expected {SLOT_COUNT} slots, got {len(slots)}")
        if not any(s.weight.strip() and s.reps.strip() for s in slots):
            return []
        records = []
        for number, slot in enumerate(slots, start=1):
            weight = EntryService.parse_number(slot.weight)
            reps = EntryService.parse_number(slot.reps)
            if weight > 0 and reps > 0:
                records.append(
                    SetRecord(
                        set_number=number,
                        weight=weight,
                        reps=reps,
                        memo=slot.memo.strip(),
                    )
                )
        return records

    def _timestamp(self, now: datetime.datetime) -> str:
        return (
            now.astimezone(datetime.timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

    def _new_id(
        self,
        context: CommitContext,
        now: datetime.datetime,
        taken: Callable[[str], bool],
    ) -> str:
        millis = int(now.timestamp() * 1000)
        entry_id = f"{context.date}_{context.exercise_id}_{millis}"
        while taken(entry_id):
            millis += 1
            entry_id = f"{context.date}_{context.exercise_id}_{millis}"
        return entry_id

    def commit(
        self, slots: Sequence[SetInput], context: CommitContext
    ) -> Optional[WorkoutEntry]:
        """Store the valid sets from ``slots`` and return the saved entry.

        Returns ``None`` without touching the store when no slot holds a valid
        set. With ``context.editing_id`` the existing entry is replaced and
        keeps its original ``created_at``. Id allocation and the write happen
        under the store lock, so concurrent commits never share an id.
        """
        sets = self.reconcile(slots)
        if not sets:
            logger.debug(
                f"Nothing to save for {context.exercise_id} on {context.date}"
            )
            return None

        now = self._clock()
        replaced = []

        def build(
            existing: Optional[WorkoutEntry], taken: Callable[[str], bool]
        ) -> WorkoutEntry:
            if context.editing_id is not None:
                entry_id = context.editing_id
            else:
                entry_id = self._new_id(context, now, taken)
            replaced.append(existing is not None)
            return WorkoutEntry(
                id=entry_id,
                date=context.date,
                body_part_id=context.body_part_id,
                exercise_id=context.exercise_id,
                sets=sets,
                created_at=existing.created_at if existing else self._timestamp(now),
            )

        entry = self.entries.upsert_built(context.editing_id, build)
        logger.info(
            f"Saved {len(sets)} set(s) of {context.exercise_id} on {context.date} "
            f"({'updated' if replaced[0] else 'created'} {entry.id})"
        )
        return entry
