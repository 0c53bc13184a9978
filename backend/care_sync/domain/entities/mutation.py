"""Domain entities describing optimistic mutations and their outcomes."""

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .record import Record


class MutationStatus(str, Enum):
    """Terminal states of an optimistic mutation."""

    RECONCILED = "reconciled"
    ROLLED_BACK = "rolled_back"
    REJECTED = "rejected"
    DISCARDED = "discarded"
    SESSION_EXPIRED = "session_expired"


@dataclass(frozen=True)
class PendingMutation:
    """An in-flight edit of one record.

    ``changes`` usually holds a single field. ``snapshot`` is the collection as
    it was before the local patch; ``applied`` is the collection the patch
    produced. Rollback compares the live collection against ``applied`` to
    decide between a full restore and a per-field revert.
    """

    mutation_id: int
    scope: Hashable
    target_id: str
    changes: dict[str, Any]
    previous: dict[str, Any]
    snapshot: tuple[Record, ...]
    applied: tuple[Record, ...] = ()

    @property
    def field(self) -> str:
        return next(iter(self.changes))

    @property
    def value(self) -> Any:
        return self.changes[self.field]


@dataclass
class MutationOutcome:
    """What a mutation ended as — the only thing the UI layer ever sees."""

    status: MutationStatus
    record: Record | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status == MutationStatus.RECONCILED

    @property
    def message(self) -> str | None:
        if self.error is None:
            return None
        return getattr(self.error, "message", None) or str(self.error)
