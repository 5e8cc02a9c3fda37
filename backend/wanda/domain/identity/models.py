"""Domain models for users and their reputation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

TRUST_SCORE_MIN = 0
TRUST_SCORE_MAX = 100
HIGH_RELIABILITY_THRESHOLD = 80


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    DELEGATE = "DELEGATE"
    ADMIN = "ADMIN"


class Establishment(str, Enum):
    """Schools of the university a post or department can be attached to."""

    IUT = "IUT"
    FS = "FS"
    FALSH = "FALSH"
    FSEG = "FSEG"
    FSJP = "FSJP"
    ENSAI = "ENSAI"
    EGCIM = "EGCIM"
    FMSB = "FMSB"


class Department(BaseModel):
    """Academic department, always owned by one establishment."""

    code: str
    name: str
    establishment: Establishment

    model_config = ConfigDict(frozen=True)


class TrustImpact(Enum):
    """Reputation deltas applied by moderation and validation outcomes."""

    FAKE_NEWS_PUBLISHED = -10
    HARASSMENT_DETECTED = -50
    STRICT_VIOLATION = -100
    POSITIVE_CONTRIBUTION = 5
    REPORT_VALIDATED = 2

    @property
    def points(self) -> int:
        return self.value


def clamp_score(value: int, minimum: int = TRUST_SCORE_MIN, maximum: int = TRUST_SCORE_MAX) -> int:
    return max(minimum, min(maximum, value))


@dataclass(frozen=True)
class TrustScore:
    """Bounded reputation value in ``[0, 100]``.

    Construction rejects out-of-range values; callers applying a delta
    clamp before building the new score.
    """

    value: int

    DEFAULT: ClassVar["TrustScore"]
    MIN: ClassVar["TrustScore"]
    MAX: ClassVar["TrustScore"]

    def __post_init__(self) -> None:
        if not TRUST_SCORE_MIN <= self.value <= TRUST_SCORE_MAX:
            raise ValueError(f"trust score must be between {TRUST_SCORE_MIN} and {TRUST_SCORE_MAX}")

    def is_high_reliability(self, threshold: int = HIGH_RELIABILITY_THRESHOLD) -> bool:
        return self.value >= threshold


TrustScore.DEFAULT = TrustScore(50)
TrustScore.MIN = TrustScore(TRUST_SCORE_MIN)
TrustScore.MAX = TrustScore(TRUST_SCORE_MAX)


class User(BaseModel):
    """Registered member of the campus feed."""

    id: UUID = Field(default_factory=uuid4)
    matricule: str
    full_name: str
    department: Department
    level: str
    role: UserRole = UserRole.STUDENT
    trust_score: TrustScore = TrustScore.DEFAULT

    model_config = ConfigDict(frozen=True)

    def update_reputation(self, points: int) -> "User":
        """Return a copy whose score moved by ``points``, clamped to the valid range."""

        updated = TrustScore(clamp_score(self.trust_score.value + points))
        return self.model_copy(update={"trust_score": updated})
