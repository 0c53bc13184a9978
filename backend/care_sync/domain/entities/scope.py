"""Query scope — identifies one fetched record collection."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RecordScope:
    """Resource type plus the date range it was fetched for.

    Scopes are hashable and used as store keys. Staff master data is not
    date-bound; its scope leaves both dates unset.
    """

    resource: str
    date_from: date | None = None
    date_to: date | None = None

    def query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.date_from is not None:
            params["dateFrom"] = self.date_from.isoformat()
        if self.date_to is not None:
            params["dateTo"] = self.date_to.isoformat()
        return params

    def covers(self, day: date | None) -> bool:
        if self.date_from is None:
            return True
        if day is None:
            return False
        return self.date_from <= day <= (self.date_to or self.date_from)
