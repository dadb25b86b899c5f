from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .dates import as_utc, day_after


class Period(str, enum.Enum):
    current = "current"
    previous = "previous"
    excluded = "excluded"


@dataclass(frozen=True)
class RangeWindow:
    """
    Current window plus an optional comparison window.

    - `end` is inclusive of its whole UTC calendar day; None means no upper bound.
    - `compare_end` is exclusive and only reported back to the caller. Anything
      in [compare_start, start) counts as previous, so a fetch bounded below by
      `compare_start` is split without leftovers.
    """

    start: datetime
    end: Optional[datetime] = None
    compare_start: Optional[datetime] = None
    compare_end: Optional[datetime] = None

    @property
    def has_comparison(self) -> bool:
        return self.compare_start is not None

    @property
    def fetch_from(self) -> datetime:
        return as_utc(self.compare_start if self.compare_start is not None else self.start)

    @property
    def fetch_before(self) -> Optional[datetime]:
        return day_after(self.end) if self.end is not None else None

    def classify(self, ts: datetime) -> Period:
        ts = as_utc(ts)
        start = as_utc(self.start)
        upper = self.fetch_before
        if ts >= start:
            if upper is None or ts < upper:
                return Period.current
            return Period.excluded
        if self.compare_start is not None and ts >= as_utc(self.compare_start):
            return Period.previous
        return Period.excluded
