"""Storage contract for posts and an in-memory reference implementation."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from wanda.domain.feed.models import Post, PostStatus


class PostRepository(Protocol):
    """Storage layer contract for posts."""

    async def find_by_id(self, post_id: UUID) -> Post | None:
        ...

    async def save(self, post: Post) -> Post:
        """Insert or replace the post, returning the stored value."""

    async def update_status(self, post_id: UUID, status: PostStatus) -> None:
        ...

    async def delete(self, post_id: UUID) -> None:
        ...

    async def exists_by_external_id(self, external_id: str) -> bool:
        ...


class InMemoryPostRepository(PostRepository):
    """Reference repository used in tests and developer environments."""

    def __init__(self) -> None:
        self.posts: dict[UUID, Post] = {}

    async def find_by_id(self, post_id: UUID) -> Post | None:
        return self.posts.get(post_id)

    async def save(self, post: Post) -> Post:
        self.posts[post.id] = post
        return post

    async def update_status(self, post_id: UUID, status: PostStatus) -> None:
        post = self.posts.get(post_id)
        if post is None:
            raise KeyError(str(post_id))
        self.posts[post_id] = post.model_copy(update={"status": status})

    async def delete(self, post_id: UUID) -> None:
        self.posts.pop(post_id, None)

    async def exists_by_external_id(self, external_id: str) -> bool:
        return any(post.external_id == external_id for post in self.posts.values())
