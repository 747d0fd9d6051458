"""
Tracks which clients are currently "online".

Every request touches the client's identifier, which puts it in the active
set and schedules a removal one presence window later.  Removals are kept
in a min-heap keyed by (due instant, sequence, client id).

EXPIRY MODES
────────────
fixed    Each touch owns an independent removal.  A removal deletes the id
         unconditionally, so a client seen at t=0 and again at t=60s leaves
         the set at t=300s, not t=360s.
sliding  A removal that falls due is skipped if the client was touched again
         after it was scheduled; the id leaves the set one full window after
         its most recent touch.

Due removals are applied on every read and by ``run_sweeper`` in the
background, so the count is exact whatever the sweep cadence.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import threading
from datetime import datetime, timedelta

from app.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)

FIXED = "fixed"
SLIDING = "sliding"


class PresenceTracker:
    def __init__(
        self,
        window_seconds: float = 300,
        mode: str = FIXED,
        clock: Clock = utc_now,
    ) -> None:
        if mode not in (FIXED, SLIDING):
            raise ValueError(f"Unknown presence mode: {mode!r}")
        self._window = timedelta(seconds=window_seconds)
        self._mode = mode
        self._clock = clock
        self._active: set[str] = set()
        self._last_seen: dict[str, datetime] = {}
        self._removals: list[tuple[datetime, int, str]] = []
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def touch(self, client_id: str) -> None:
        now = self._clock()
        with self._lock:
            self._active.add(client_id)
            self._last_seen[client_id] = now
            heapq.heappush(self._removals, (now + self._window, next(self._seq), client_id))

    def expire(self) -> int:
        """Apply every removal that has fallen due; return how many ids left."""
        with self._lock:
            return self._expire_locked(self._clock())

    def active_count(self) -> int:
        with self._lock:
            self._expire_locked(self._clock())
            return len(self._active)

    def is_active(self, client_id: str) -> bool:
        with self._lock:
            self._expire_locked(self._clock())
            return client_id in self._active

    def pending_removals(self) -> int:
        """Number of scheduled removals not yet applied, for introspection."""
        with self._lock:
            return len(self._removals)

    def _expire_locked(self, now: datetime) -> int:
        removed = 0
        while self._removals and self._removals[0][0] <= now:
            due, _, client_id = heapq.heappop(self._removals)
            if client_id not in self._active:
                continue
            if self._mode == SLIDING and self._last_seen[client_id] + self._window > due:
                continue
            self._active.discard(client_id)
            self._last_seen.pop(client_id, None)
            removed += 1
        return removed

    async def run_sweeper(self, interval_seconds: float) -> None:
        """Expire stale clients every *interval_seconds* until cancelled."""
        logger.info(
            "Presence sweeper started (window=%ss, mode=%s, interval=%ss)",
            self._window.total_seconds(), self._mode, interval_seconds,
        )
        try:
            while True:
                await asyncio.sleep(interval_seconds)
                try:
                    removed = self.expire()
                except Exception:
                    logger.exception("Presence sweep failed")
                    continue
                if removed:
                    logger.debug("Presence sweep removed %d client(s)", removed)
        except asyncio.CancelledError:
            logger.info("Presence sweeper stopped")
            raise
