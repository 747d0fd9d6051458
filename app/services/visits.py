"""Per-path visit counters, kept in memory for the life of the process."""
from __future__ import annotations

import threading


class VisitCounter:
    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def record_visit(self, path: str) -> None:
        with self._lock:
            self._counts[path] = self._counts.get(path, 0) + 1

    def total_visits(self) -> int:
        with self._lock:
            return sum(self._counts.values())

    def visits_for(self, path: str) -> int:
        with self._lock:
            return self._counts.get(path, 0)

    def most_recently_touched_path(self) -> str | None:
        """Return the path that was first seen most recently.

        Dict order is insertion order, so a path visited again does not move
        to the end.  Good enough for the dashboard's activity feed only.
        """
        with self._lock:
            if not self._counts:
                return None
            return next(reversed(self._counts))
