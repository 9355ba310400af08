"""Lookup of day logs by user and calendar date."""

import logging
from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from nutrition_ledger.domain.logs import DayLog

_logger = logging.getLogger(__name__)

DayKey = tuple[str, date]


@dataclass
class DayLogIndex:
    """Maps ``(user_id, date)`` to the single indexed day log.

    The index never owns logs; ``day_logs`` is the flat list that gets
    persisted, and the index points into it.
    """

    day_logs: list[DayLog] = field(default_factory=list)
    _index: dict[DayKey, DayLog] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.rebuild()

    def rebuild(self, day_logs: list[DayLog] | None = None) -> None:
        """Re-index every log; the first log seen for a key wins."""
        if day_logs is not None:
            self.day_logs = day_logs
        self._index = {}
        for day_log in self.day_logs:
            if day_log.date is None:
                continue
            key = (day_log.user_id, day_log.date)
            if key in self._index:
                _logger.warning(
                    "Duplicate day log ignored: user=%s date=%s id=%s",
                    day_log.user_id,
                    day_log.date,
                    day_log.id,
                )
                continue
            self._index[key] = day_log

    def get(self, user_id: str, day: date) -> DayLog | None:
        """Return the indexed log for the key, if present."""
        return self._index.get((user_id, day))

    def get_or_create(self, user_id: str, day: date) -> DayLog:
        """Return the indexed log, creating and indexing an empty one if needed."""
        existing = self.get(user_id, day)
        if existing is not None:
            return existing
        created = DayLog(id=str(uuid4()), user_id=user_id, date=day)
        self.day_logs.append(created)
        self._index[(user_id, day)] = created
        return created

    def for_user(self, user_id: str) -> list[DayLog]:
        """Indexed logs of one user, oldest first."""
        return sorted(
            (log for (owner, _), log in self._index.items() if owner == user_id),
            key=lambda log: log.date,
        )

    def __len__(self) -> int:
        return len(self._index)
