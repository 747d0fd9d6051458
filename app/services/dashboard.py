"""
Point-in-time dashboard summary over the visit, presence and message stores.

A few figures are deliberate approximations:
  * ``visits_today`` is the all-time counter of the home path; nothing is
    ever reset at midnight.
  * ``visits_change`` is always 0, no history is kept to compare against.
  * the "viewed page" activity entry names the last path first seen, not the
    last path visited.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from app.schemas.response import ActivityEntry, Message
from app.services.clock import Clock, utc_now
from app.services.messages import MessageStore
from app.services.presence import PresenceTracker
from app.services.visits import VisitCounter

MESSAGE_ACTION = "submitted a message"
VISITOR_ACTOR = "visitor"


@dataclass
class DashboardSnapshot:
    total_visits: int
    online_users: int
    messages_total: int
    messages_weekly: int
    conversion_rate: str
    visits_today: int
    visits_change: int = 0
    recent_messages: list[Message] = field(default_factory=list)
    recent_activity: list[ActivityEntry] = field(default_factory=list)


def conversion_rate(messages: int, visits: int) -> str:
    """Messages per hundred visits with one decimal, or "0" with no visits."""
    if visits <= 0:
        return "0"
    return f"{messages / visits * 100:.1f}"


class DashboardAggregator:
    def __init__(
        self,
        visits: VisitCounter,
        presence: PresenceTracker,
        messages: MessageStore,
        *,
        weekly_window_days: int = 7,
        recent_messages_limit: int = 10,
        recent_activity_messages: int = 2,
        home_path: str = "/",
        clock: Clock = utc_now,
    ) -> None:
        self._visits = visits
        self._presence = presence
        self._messages = messages
        self._weekly_window = timedelta(days=weekly_window_days)
        self._recent_limit = recent_messages_limit
        self._activity_messages = recent_activity_messages
        self._home_path = home_path
        self._clock = clock

    def snapshot(self) -> DashboardSnapshot:
        now = self._clock()
        total_visits = self._visits.total_visits()
        messages_total = self._messages.count()
        recent = self._messages.recent(max(self._recent_limit, self._activity_messages))

        return DashboardSnapshot(
            total_visits=total_visits,
            online_users=self._presence.active_count(),
            messages_total=messages_total,
            messages_weekly=self._messages.count_since(now - self._weekly_window),
            conversion_rate=conversion_rate(messages_total, total_visits),
            visits_today=self._visits.visits_for(self._home_path),
            visits_change=0,
            recent_messages=recent[:self._recent_limit],
            recent_activity=self._activity(recent[:self._activity_messages], now),
        )

    def _activity(self, latest: list[Message], now: datetime) -> list[ActivityEntry]:
        entries = [
            ActivityEntry(user=m.email, action=MESSAGE_ACTION, timestamp=m.created_at)
            for m in latest
        ]
        page = self._visits.most_recently_touched_path() or ""
        entries.append(
            ActivityEntry(user=VISITOR_ACTOR, action=f"viewed page {page}", timestamp=now)
        )
        return entries
