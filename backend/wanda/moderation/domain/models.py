"""Records produced by community fact-checking and abuse reporting."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportReason(str, Enum):
    SPAM = "SPAM"
    FAKE_NEWS = "FAKE_NEWS"
    HARASSMENT = "HARASSMENT"
    INAPPROPRIATE_CONTENT = "INAPPROPRIATE_CONTENT"
    WRONG_CATEGORY = "WRONG_CATEGORY"


class ReportStatus(str, Enum):
    PENDING = "PENDING"
    VALIDATED = "VALIDATED"
    REJECTED = "REJECTED"


class ValidationType(str, Enum):
    CONFIRM = "CONFIRM"
    REFUTE = "REFUTE"


class Report(BaseModel):
    """Abuse report filed by a user against a post."""

    id: UUID = Field(default_factory=uuid4)
    reporter_id: UUID
    post_id: UUID
    reason: ReportReason
    details: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)


class Validation(BaseModel):
    """A single confirm/refute vote on a post's accuracy."""

    id: UUID = Field(default_factory=uuid4)
    post_id: UUID
    validator_id: UUID
    type: ValidationType
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)
