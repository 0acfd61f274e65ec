import datetime
import math
import re
from typing import Annotated, List, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def check_date(value: str) -> str:
    """Return ``value`` if it is a real calendar date written as ``YYYY-MM-DD``.

    Stored dates are compared as strings, so only ASCII digits in exactly this
    shape are accepted.
    """
    if not DATE_RE.fullmatch(value):
        raise ValueError("date must use the YYYY-MM-DD form")
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{value} is not a calendar date") from None
    return value


IsoDate = Annotated[str, AfterValidator(check_date)]


class _CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class BodyPart(_CamelModel):
    id: str
    name: str


class Exercise(_CamelModel):
    id: str
    body_part_id: str
    name: str


class SetRecord(_CamelModel):
    """One completed set stored inside a workout entry."""

    set_number: int = Field(ge=1, le=5)
    weight: float = Field(gt=0)
    reps: float = Field(gt=0)
    memo: str = ""

    @field_validator("weight", "reps")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("value must be finite")
        return value


class WorkoutEntry(_CamelModel):
    """All sets performed for one exercise on one calendar date."""

    id: str = Field(min_length=1)
    date: IsoDate
    body_part_id: str
    exercise_id: str
    sets: List[SetRecord]
    created_at: str

    @field_validator("sets")
    @classmethod
    def _ordered(cls, value: List[SetRecord]) -> List[SetRecord]:
        return sorted(value, key=lambda s: s.set_number)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class SetInput(BaseModel):
    """Raw text typed into one of the edit form slots."""

    weight: str = ""
    reps: str = ""
    memo: str = ""


class CommitContext(BaseModel):
    date: IsoDate
    body_part_id: str
    exercise_id: str
    editing_id: Optional[str] = None


ENTRY_LIST = TypeAdapter(List[WorkoutEntry])
