"""
In-memory log of contact-form submissions, newest first.

The log is capped at ``max_messages`` entries (oldest dropped first) so a
long-running process cannot grow without bound; ``count()`` keeps reporting
every message ever submitted.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime
from itertools import islice

from app.schemas.response import Message, MessageStatus
from app.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class MessageStore:
    def __init__(self, max_messages: int = 1000, clock: Clock = utc_now) -> None:
        self._messages: deque[Message] = deque(maxlen=max_messages or None)
        self._clock = clock
        self._total = 0
        self._last_id = 0
        self._lock = threading.Lock()

    def submit(
        self,
        name: str | None,
        email: str | None,
        subject: str | None,
        body: str | None,
    ) -> Message:
        now = self._clock()
        with self._lock:
            # Millisecond timestamp, nudged forward so ids stay unique
            msg_id = max(int(now.timestamp() * 1000), self._last_id + 1)
            self._last_id = msg_id
            message = Message(
                id=msg_id,
                name=name,
                email=email,
                subject=subject,
                body=body,
                created_at=now,
                status=MessageStatus.PENDING,
            )
            self._messages.appendleft(message)
            self._total += 1

        logger.info("New message received: id=%d from=%s subject=%r", msg_id, email, subject)
        return message

    def count(self) -> int:
        with self._lock:
            return self._total

    def count_since(self, instant: datetime) -> int:
        with self._lock:
            return sum(1 for m in self._messages if m.created_at > instant)

    def recent(self, n: int) -> list[Message]:
        if n <= 0:
            return []
        with self._lock:
            return [m.model_copy() for m in islice(self._messages, n)]
