"""Registration, profile lookup, promotion and trust adjustments."""

from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from wanda.domain.exceptions import (
    UnauthorizedAdminAction,
    UserAlreadyExists,
    UserNotFound,
    UserPersistenceFailed,
    recover_domain_error,
)
from wanda.domain.identity.models import Department, TrustImpact, TrustScore, User, UserRole
from wanda.domain.identity.repository import UserRepository
from wanda.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class UserService:
    """Owns every write to a user's role and trust score."""

    def __init__(self, repository: UserRepository, *, default_trust: TrustScore = TrustScore.DEFAULT) -> None:
        self._repo = repository
        self._default_trust = default_trust

    async def register_user(self, matricule: str, full_name: str, department: Department, level: str) -> User:
        async with recover_domain_error(UserPersistenceFailed):
            if await self._repo.find_by_matricule(matricule) is not None:
                raise UserAlreadyExists(matricule)
            user = User(
                matricule=matricule,
                full_name=full_name,
                department=department,
                level=level,
                role=UserRole.STUDENT,
                trust_score=self._default_trust,
            )
            saved = await self._repo.save(user)
        logger.info("user registered", extra={"user_id": str(saved.id), "department_code": department.code})
        return saved

    async def promote_to_delegate(self, admin_id: UUID, target_id: UUID) -> User:
        """Grant the delegate role; only admins may promote.

        The promoted user starts from the maximum trust score.
        """

        async with recover_domain_error(UserPersistenceFailed):
            admin = await self.get_user_profile(admin_id)
            if admin.role is not UserRole.ADMIN:
                raise UnauthorizedAdminAction(admin_id)
            student = await self.get_user_profile(target_id)
            promoted = student.model_copy(update={"role": UserRole.DELEGATE, "trust_score": TrustScore.MAX})
            saved = await self._repo.save(promoted)
        logger.info("user promoted", extra={"user_id": str(target_id), "admin_id": str(admin_id)})
        return saved

    async def adjust_user_trust(self, user_id: UUID, impact: TrustImpact) -> User:
        async with recover_domain_error(UserPersistenceFailed):
            user = await self.get_user_profile(user_id)
            updated = user.update_reputation(impact.points)
            saved = await self._repo.save(updated)
        obs_metrics.TRUST_ADJUSTMENTS_TOTAL.labels(impact=impact.name.lower()).inc()
        logger.info(
            "trust adjusted",
            extra={
                "user_id": str(user_id),
                "impact": impact.name,
                "before": user.trust_score.value,
                "after": saved.trust_score.value,
            },
        )
        return saved

    async def get_user_profile(self, user_id: UUID) -> User:
        async with recover_domain_error(UserPersistenceFailed):
            user = await self._repo.find_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    async def list_department_members(self, department: Department) -> Sequence[User]:
        async with recover_domain_error(UserPersistenceFailed):
            return list(await self._repo.find_all_by_department(department))
