from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import List, Literal, Optional

Direction = Literal["forward", "backward"]

WINDOW_SIZE = 6


@dataclass(frozen=True)
class WindowCursor:
    """First (month, year) of the visible window. ``month`` is 0-based (0 = January)."""

    month: int
    year: int

    def __post_init__(self) -> None:
        if not 0 <= self.month <= 11:
            raise ValueError(f"month must be in [0, 11], got {self.month}")

    @classmethod
    def today(cls, today: Optional[date] = None) -> "WindowCursor":
        today = today or date.today()
        return cls(month=today.month - 1, year=today.year)


def advance(cursor: WindowCursor, direction: Direction) -> WindowCursor:
    """Return the cursor one month forward or backward.

    Month and year are both derived from the same prior cursor, so a year
    rollover can never observe a half-applied update.
    """
    if direction == "forward":
        if cursor.month == 11:
            return WindowCursor(month=0, year=cursor.year + 1)
        return WindowCursor(month=cursor.month + 1, year=cursor.year)
    if direction == "backward":
        if cursor.month == 0:
            return WindowCursor(month=11, year=cursor.year - 1)
        return WindowCursor(month=cursor.month - 1, year=cursor.year)
    raise ValueError(f"Unknown direction: {direction!r}")


def window_slice(cursor: WindowCursor, size: int = WINDOW_SIZE) -> List[WindowCursor]:
    return [
        WindowCursor(month=(cursor.month + i) % 12, year=cursor.year + (cursor.month + i) // 12)
        for i in range(size)
    ]


def month_label(slot: WindowCursor, style: Literal["long", "short"] = "long") -> str:
    # calendar looks names up through strftime on every access, so the active locale applies.
    names = calendar.month_name if style == "long" else calendar.month_abbr
    return names[slot.month + 1]
