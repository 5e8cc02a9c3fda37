"""Post creation and status changes."""

from __future__ import annotations

import logging
from uuid import UUID

from wanda.domain.exceptions import (
    AuthorNotFound,
    PostContentInvalid,
    PostNotFound,
    PostPersistenceFailed,
    UserNotFound,
    recover_domain_error,
)
from wanda.domain.feed.models import Post, PostCategory, PostSource, PostStatus, VisibilityScope
from wanda.domain.feed.repository import PostRepository
from wanda.domain.identity.models import HIGH_RELIABILITY_THRESHOLD, User, UserRole
from wanda.domain.identity.service import UserService
from wanda.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

TITLE_MAX_LEN = 200

_TRUSTED_ROLES = frozenset({UserRole.ADMIN, UserRole.DELEGATE})


def initial_status_for(author: User, *, high_reliability: int = HIGH_RELIABILITY_THRESHOLD) -> PostStatus:
    """Trusted roles and highly reliable authors skip the review queue."""

    if author.role in _TRUSTED_ROLES:
        return PostStatus.PUBLISHED
    if author.trust_score.is_high_reliability(high_reliability):
        return PostStatus.PUBLISHED
    return PostStatus.PENDING


def visibility_for(author: User) -> VisibilityScope:
    # Admins post university-wide; everybody else stays within their department.
    if author.role is UserRole.ADMIN:
        return VisibilityScope.public()
    return VisibilityScope.for_department(author.department)


def _validate_content(title: str, content: str) -> None:
    if not title or not title.strip():
        raise PostContentInvalid("title_required")
    if len(title.strip()) > TITLE_MAX_LEN:
        raise PostContentInvalid("title_too_long")
    if not content or not content.strip():
        raise PostContentInvalid("content_required")


class PostService:
    def __init__(
        self,
        repository: PostRepository,
        users: UserService,
        *,
        high_reliability: int = HIGH_RELIABILITY_THRESHOLD,
    ) -> None:
        self._repo = repository
        self._users = users
        self._high_reliability = high_reliability

    async def create_post(self, author_id: UUID, title: str, content: str, category: PostCategory) -> Post:
        async with recover_domain_error(PostPersistenceFailed):
            _validate_content(title, content)
            try:
                author = await self._users.get_user_profile(author_id)
            except UserNotFound as exc:
                raise AuthorNotFound(author_id, exc) from exc

            post = Post(
                author_id=author_id,
                title=title.strip(),
                content=content,
                category=category,
                status=initial_status_for(author, high_reliability=self._high_reliability),
                source=PostSource.COMMUNITY,
                visibility=visibility_for(author),
            )
            saved = await self._repo.save(post)
        logger.info(
            "post created",
            extra={"post_id": str(saved.id), "author_id": str(author_id), "status": saved.status.value},
        )
        return saved

    async def change_post_status(self, post_id: UUID, new_status: PostStatus) -> None:
        async with recover_domain_error(PostPersistenceFailed):
            post = await self._repo.find_by_id(post_id)
            if post is None:
                raise PostNotFound(post_id)
            await self._repo.update_status(post_id, new_status)
        obs_metrics.record_transition(f"{post.status.value.lower()}_to_{new_status.value.lower()}")
        logger.info("post status changed", extra={"post_id": str(post_id), "status": new_status.value})
