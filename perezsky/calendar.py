from __future__ import annotations

import math
from dataclasses import dataclass

# 365-day calendar; leap years are not represented.
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
CUMULATED_DAYS_BEFORE_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


@dataclass(frozen=True)
class SkyDate:
    """Calendar instant without a year: month, day and decimal hour."""
    month: int
    day: int
    hour: float = 0.0

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12:
            raise ValueError(f"Month must be within 1..12, got {self.month}")
        max_day = DAYS_IN_MONTH[int(self.month) - 1]
        if not 1 <= int(self.day) <= max_day:
            raise ValueError(f"Day must be within 1..{max_day} for month {self.month}, got {self.day}")
        hour = float(self.hour)
        if not math.isfinite(hour) or not 0.0 <= hour < 24.0:
            raise ValueError(f"Hour must be within [0, 24), got {self.hour}")

    def day_of_year(self) -> float:
        """Zero-based fractional day of the year (Jan 1st 00:00 is 0.0)."""
        return CUMULATED_DAYS_BEFORE_MONTH[int(self.month) - 1] + int(self.day) + float(self.hour) / 24.0 - 1.0

    @staticmethod
    def from_day_of_year(n: float) -> "SkyDate":
        """Inverse of :meth:`day_of_year`."""
        if not 0.0 <= n < 365.0:
            raise ValueError(f"Impossible day of the year '{n}'")
        month = 12
        for i, start in enumerate(CUMULATED_DAYS_BEFORE_MONTH):
            if start > n:
                month = i
                break
        day_hour = n - CUMULATED_DAYS_BEFORE_MONTH[month - 1]
        day = math.floor(day_hour)
        # Rounding can push the hour to 24.0 for values just below midnight.
        hour = min(24.0 * (day_hour - day), math.nextafter(24.0, 0.0))
        return SkyDate(month=month, day=int(day) + 1, hour=hour)
