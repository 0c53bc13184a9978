"""Placeholder ids for records that exist only on the client so far."""

import itertools
import time
from collections.abc import Callable
from datetime import date
from typing import Any
from urllib.parse import quote, unquote

from care_sync.domain.entities import PLACEHOLDER_PREFIX

_PART_SEPARATOR = "|"
_STAMP_SEPARATOR = "#"


def _encode(part: Any) -> str:
    if part is None:
        return ""
    if isinstance(part, date):
        part = part.isoformat()
    return quote(str(part), safe="")


class PlaceholderGenerator:
    """Builds and parses placeholder ids.

    Layout: ``temp-<owner>|<dimension part>|...[#<stamp>]``, every part
    percent-encoded so owner ids containing dashes or separators survive a
    round trip. Without a stamp the id is a pure function of the slot, so a
    projection pass can synthesize the same placeholder any number of times.
    """

    def __init__(
        self,
        prefix: str = PLACEHOLDER_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        self._prefix = prefix
        self._clock = clock
        self._counter = itertools.count()

    def generate(self, owner_key: str, dimension_key: tuple[Any, ...]) -> str:
        """Deterministic id of the ``(owner_key, dimension_key)`` slot."""
        parts = [_encode(owner_key), *(_encode(part) for part in dimension_key)]
        return self._prefix + _PART_SEPARATOR.join(parts)

    def generate_unique(self, owner_key: str, dimension_key: tuple[Any, ...]) -> str:
        """Slot id plus a creation stamp — for rows the user adds explicitly."""
        stamp = f"{int(self._clock() * 1000)}.{next(self._counter)}"
        return f"{self.generate(owner_key, dimension_key)}{_STAMP_SEPARATOR}{stamp}"

    def is_placeholder(self, record_id: str | None) -> bool:
        return bool(record_id) and record_id.startswith(self._prefix)

    def parse(self, record_id: str) -> tuple[str, tuple[str, ...], str | None]:
        """Recover ``(owner_key, dimension parts, stamp)`` from a placeholder id.

        Dimension parts come back as text; the resource config coerces them.
        """
        if not self.is_placeholder(record_id):
            raise ValueError(f"'{record_id}' is not a placeholder id")
        body = record_id[len(self._prefix):]
        body, separator, stamp = body.partition(_STAMP_SEPARATOR)
        owner, *parts = [unquote(part) for part in body.split(_PART_SEPARATOR)]
        return owner, tuple(parts), stamp if separator else None
