"""Domain models for feed posts."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from wanda.domain.identity.models import HIGH_RELIABILITY_THRESHOLD, Department, Establishment


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostStatus(str, Enum):
    PENDING = "PENDING"
    PUBLISHED = "PUBLISHED"
    SUSPECT = "SUSPECT"
    ARCHIVED = "ARCHIVED"


class PostCategory(str, Enum):
    OFFICIAL = "OFFICIAL"
    ALERT = "ALERT"
    INFO = "INFO"
    EVENT = "EVENT"
    LOST_AND_FOUND = "LOST_AND_FOUND"


class PostSource(str, Enum):
    COMMUNITY = "COMMUNITY"
    EXTERNAL_OFFICIAL = "EXTERNAL_OFFICIAL"


class VisibilityScope(BaseModel):
    """Audience of a post; neither field set means the whole university."""

    establishment: Optional[Establishment] = None
    department: Optional[Department] = None

    model_config = ConfigDict(frozen=True)

    def is_public(self) -> bool:
        return self.establishment is None and self.department is None

    @classmethod
    def public(cls) -> "VisibilityScope":
        return cls()

    @classmethod
    def for_department(cls, department: Department) -> "VisibilityScope":
        return cls(department=department)

    @classmethod
    def for_establishment(cls, establishment: Establishment) -> "VisibilityScope":
        return cls(establishment=establishment)


class Post(BaseModel):
    """A feed post, authored by a user or ingested from an official source."""

    id: UUID = Field(default_factory=uuid4)
    author_id: UUID
    title: str
    content: str
    category: PostCategory
    status: PostStatus = PostStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    up_votes: int = 0
    down_votes: int = 0
    source: PostSource = PostSource.COMMUNITY
    external_id: Optional[str] = None
    origin_name: Optional[str] = None
    visibility: VisibilityScope = Field(default_factory=VisibilityScope)

    model_config = ConfigDict(frozen=True)

    @property
    def total_score(self) -> int:
        return self.up_votes - self.down_votes

    def can_be_auto_published(self, user_trust_score: int, *, threshold: int = HIGH_RELIABILITY_THRESHOLD) -> bool:
        return user_trust_score >= threshold or self.source is PostSource.EXTERNAL_OFFICIAL


class ExternalInboundPost(BaseModel):
    """Item returned by an external provider before it becomes a post."""

    external_id: str
    title: Optional[str] = None
    content: str
    date: datetime
    raw_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)
