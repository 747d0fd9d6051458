"""Process-lifetime analytics state.

Built once by the app factory and stored on ``app.state.analytics``; route
handlers and the tracking middleware receive it from there.  Nothing is
persisted, a restart starts from zero.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field

from app.config import Settings
from app.services.clock import Clock, utc_now
from app.services.dashboard import DashboardAggregator
from app.services.messages import MessageStore
from app.services.presence import PresenceTracker
from app.services.visits import VisitCounter

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsState:
    visits: VisitCounter
    presence: PresenceTracker
    messages: MessageStore
    dashboard: DashboardAggregator
    sweep_interval_seconds: float = 30
    _sweeper: asyncio.Task | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utc_now) -> "AnalyticsState":
        visits = VisitCounter()
        presence = PresenceTracker(
            window_seconds=settings.presence_window_seconds,
            mode=settings.presence_mode,
            clock=clock,
        )
        messages = MessageStore(max_messages=settings.max_messages, clock=clock)
        dashboard = DashboardAggregator(
            visits,
            presence,
            messages,
            weekly_window_days=settings.weekly_window_days,
            recent_messages_limit=settings.recent_messages_limit,
            recent_activity_messages=settings.recent_activity_messages,
            home_path=settings.home_path,
            clock=clock,
        )
        return cls(
            visits=visits,
            presence=presence,
            messages=messages,
            dashboard=dashboard,
            sweep_interval_seconds=settings.presence_sweep_interval_seconds,
        )

    def start(self) -> None:
        if self._sweeper is None:
            self._sweeper = asyncio.create_task(
                self.presence.run_sweeper(self.sweep_interval_seconds)
            )

    async def stop(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None
        logger.info(
            "Analytics state closed: %d visit(s), %d message(s)",
            self.visits.total_visits(), self.messages.count(),
        )
