"""Domain entities for care records kept in the optimistic record store."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

# Reserved id namespace for records that have not been persisted yet.
# Server ids are UUIDs, so they can never start with this prefix.
PLACEHOLDER_PREFIX = "temp-"


class Timing(str, Enum):
    """Measurement slots of a care day, as stored by the backend."""

    MORNING = "午前"
    AFTERNOON = "午後"
    AD_HOC = "臨時"
    PREVIOUS_DAY = "前日"

    @property
    def order(self) -> int:
        return _TIMING_ORDER[self]


_TIMING_ORDER = {
    Timing.MORNING: 0,
    Timing.AFTERNOON: 1,
    Timing.AD_HOC: 2,
    Timing.PREVIOUS_DAY: 3,
}


def timing_order(value: Any) -> int:
    """Sort rank of a timing value; unknown values sort after every known slot."""
    try:
        return Timing(value).order
    except ValueError:
        return len(_TIMING_ORDER)


@dataclass(frozen=True)
class Record:
    """One care record as seen by the UI.

    Records are immutable values: every patch produces a new instance, so a
    collection snapshot taken before a mutation is never affected by it.

    ``dimension_key`` is the secondary axis of the record slot, e.g.
    ``(date(2024, 1, 1), "午前")`` for vital signs or ``(date, 14, "patrol")``
    for rounds. Together with ``owner_key`` it identifies the slot.
    """

    id: str
    owner_key: str
    dimension_key: tuple[Any, ...] = ()
    fields: Mapping[str, Any] = field(default_factory=dict)

    @property
    def pending(self) -> bool:
        return self.id.startswith(PLACEHOLDER_PREFIX)

    @property
    def slot(self) -> tuple[str, tuple[Any, ...]]:
        return (self.owner_key, self.dimension_key)

    @property
    def record_date(self) -> date | None:
        if self.dimension_key and isinstance(self.dimension_key[0], date):
            return self.dimension_key[0]
        return None

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Flat view used by the presentation layer."""
        return {"id": self.id, "pending": self.pending, **self.fields}
