from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageStatus(str, Enum):
    PENDING = "pending"


# ── Contact form ──────────────────────────────────────────────────────────────
class ContactRequest(BaseModel):
    """Contact form payload.  Nothing is required and nothing is validated."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None


class ContactResponse(BaseModel):
    success: bool = True
    message: str = "Message received successfully."


class Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str | None = None
    email: str | None = None
    subject: str | None = None
    body: str | None = Field(default=None, alias="message")
    created_at: datetime = Field(alias="date")
    status: MessageStatus = MessageStatus.PENDING


# ── Dashboard ─────────────────────────────────────────────────────────────────
class MessagesSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    weekly: int
    items: list[Message] = Field(alias="list")


class VisitsSummary(BaseModel):
    today: int
    change: int = 0


class ActivityEntry(BaseModel):
    user: str | None
    action: str
    timestamp: datetime


class DashboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: MessagesSummary
    online_users: int = Field(alias="onlineUsers")
    visits: VisitsSummary
    conversion_rate: str = Field(alias="conversionRate")
    recent_activity: list[ActivityEntry] = Field(alias="recentActivity")
