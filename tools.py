import calendar
import datetime
from typing import List, Optional, Tuple


class CalendarTools:
    """Date helpers for the month calendar view."""

    ROWS: int = 6
    COLUMNS: int = 7

    @staticmethod
    def _check_month(month0: int) -> None:
        if not 0 <= month0 <= 11:
            raise ValueError("month0 must be between 0 and 11")

    @staticmethod
    def today() -> str:
        """Return the current local date as ``YYYY-MM-DD``."""
        return datetime.date.today().isoformat()

    @staticmethod
    def is_today(date_str: str) -> bool:
        return date_str == CalendarTools.today()

    @staticmethod
    def format_date(year: int, month0: int, day: int) -> str:
        """Return ``YYYY-MM-DD`` for a zero-based month."""
        CalendarTools._check_month(month0)
        return f"{year:04d}-{month0 + 1:02d}-{day:02d}"

    @staticmethod
    def format_display_date(date_str: str) -> str:
        """Convert ``YYYY-MM-DD`` to ``YYYY/M/D``."""
        if not date_str:
            return ""
        y, m, d = date_str.split("-")
        return f"{y}/{int(m)}/{int(d)}"

    @staticmethod
    def days_in_month(year: int, month0: int) -> int:
        CalendarTools._check_month(month0)
        return calendar.monthrange(year, month0 + 1)[1]

    @staticmethod
    def shift_month(year: int, month0: int, delta: int) -> Tuple[int, int]:
        """Move ``delta`` months from (year, month0), wrapping the year."""
        CalendarTools._check_month(month0)
        total = year * 12 + month0 + delta
        return total // 12, total % 12

    @classmethod
    def build_month_grid(cls, year: int, month0: int) -> List[List[Optional[int]]]:
        """Return a 6x7 grid of day numbers with ``None`` for empty cells.

        Column 0 is Sunday. The grid always has six rows so that the layout
        does not change height between months.
        """
        cls._check_month(month0)
        # date.weekday() is Monday=0; shift so Sunday lands in column 0
        first_column = (datetime.date(year, month0 + 1, 1).weekday() + 1) % 7
        last_day = cls.days_in_month(year, month0)

        weeks: List[List[Optional[int]]] = []
        day = 1
        for row in range(cls.ROWS):
            week: List[Optional[int]] = []
            for col in range(cls.COLUMNS):
                if (row == 0 and col < first_column) or day > last_day:
                    week.append(None)
                else:
                    week.append(day)
                    day += 1
            weeks.append(week)
        return weeks
