"""Community fact-checking: validations and the consensus state machine."""

from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from wanda.domain.exceptions import (
    DoubleValidation,
    PostNotFound,
    SelfValidation,
    ValidationActionFailed,
    ValidationPersistenceFailed,
    recover_domain_error,
)
from wanda.domain.feed.models import PostStatus
from wanda.domain.feed.repository import PostRepository
from wanda.domain.identity.models import TrustImpact
from wanda.domain.identity.service import UserService
from wanda.moderation.domain.models import Validation, ValidationType
from wanda.moderation.domain.thresholds import ModerationThresholds
from wanda.moderation.domain.validations_repository import ValidationRepository
from wanda.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

_IMPACT_BY_TYPE = {
    ValidationType.CONFIRM: TrustImpact.POSITIVE_CONTRIBUTION,
    ValidationType.REFUTE: TrustImpact.FAKE_NEWS_PUBLISHED,
}


def consensus_status(
    current: PostStatus,
    *,
    confirms: int,
    refutes: int,
    thresholds: ModerationThresholds,
) -> PostStatus:
    """Return the status a post should hold given its validation counts.

    Refutations win over confirmations when both thresholds are reached.
    Only pending posts are published by confirmations.
    """

    if current is PostStatus.ARCHIVED:
        return current
    if refutes >= thresholds.suspicion_threshold:
        return PostStatus.SUSPECT
    if confirms >= thresholds.publication_threshold and current is PostStatus.PENDING:
        return PostStatus.PUBLISHED
    return current


class ValidationService:
    def __init__(
        self,
        validations: ValidationRepository,
        posts: PostRepository,
        users: UserService,
        *,
        thresholds: ModerationThresholds | None = None,
    ) -> None:
        self._validations = validations
        self._posts = posts
        self._users = users
        self._thresholds = thresholds or ModerationThresholds.default()

    async def validate_post(self, validator_id: UUID, post_id: UUID, validation_type: ValidationType) -> Validation:
        async with recover_domain_error(ValidationActionFailed):
            post = await self._posts.find_by_id(post_id)
            if post is None:
                raise PostNotFound(post_id)
            if post.author_id == validator_id:
                raise SelfValidation(validator_id, post_id)
            if await self._validations.has_user_validated_post(validator_id, post_id):
                raise DoubleValidation(validator_id, post_id)

            saved = await self._validations.save(
                Validation(post_id=post_id, validator_id=validator_id, type=validation_type)
            )
            obs_metrics.VALIDATIONS_TOTAL.labels(type=validation_type.value.lower()).inc()

            # A failed trust update aborts here; the saved validation stays.
            await self._users.adjust_user_trust(post.author_id, _IMPACT_BY_TYPE[validation_type])

            await self._update_post_status_if_needed(post_id)
        return saved

    async def list_validations(self, post_id: UUID) -> Sequence[Validation]:
        async with recover_domain_error(ValidationPersistenceFailed):
            return list(await self._validations.find_by_post_id(post_id))

    async def _update_post_status_if_needed(self, post_id: UUID) -> None:
        post = await self._posts.find_by_id(post_id)
        if post is None or post.status is PostStatus.ARCHIVED:
            return
        confirms = await self._validations.count_by_type(post_id, ValidationType.CONFIRM)
        refutes = await self._validations.count_by_type(post_id, ValidationType.REFUTE)
        new_status = consensus_status(post.status, confirms=confirms, refutes=refutes, thresholds=self._thresholds)
        if new_status is post.status:
            return
        await self._posts.update_status(post_id, new_status)
        obs_metrics.record_transition(f"consensus_{new_status.value.lower()}")
        logger.info(
            "post status updated by consensus",
            extra={
                "post_id": str(post_id),
                "from_status": post.status.value,
                "to_status": new_status.value,
                "confirms": confirms,
                "refutes": refutes,
            },
        )
