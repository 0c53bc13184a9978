"""Domain entities for the visible-record projection."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator


@dataclass(frozen=True)
class ProjectionFilters:
    """User-selected filters of a grid page.

    A missing ``date_to`` means a single-day view of ``date_from``.
    """

    date_from: date
    date_to: date | None = None
    floor: str | None = None
    timing: str | None = None
    resident_id: str | None = None

    @property
    def last_date(self) -> date:
        return self.date_to or self.date_from

    def dates(self) -> Iterator[date]:
        day = self.date_from
        while day <= self.last_date:
            yield day
            day += timedelta(days=1)

    def covers(self, day: date | None) -> bool:
        return day is not None and self.date_from <= day <= self.last_date
