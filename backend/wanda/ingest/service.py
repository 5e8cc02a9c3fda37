"""Pull posts from external providers without creating duplicates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence
from uuid import UUID

from wanda.domain.exceptions import GeneralSyncError, ProviderError, SyncPersistenceFailed, recover_domain_error
from wanda.domain.feed.models import ExternalInboundPost, Post, PostCategory, PostSource, PostStatus, VisibilityScope
from wanda.domain.feed.repository import PostRepository
from wanda.ingest.providers import ExternalInformationProvider
from wanda.obs import metrics as obs_metrics
from wanda.settings import SYSTEM_OFFICIAL_ID

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SourceSyncResult:
    source: str
    fetched: int = 0
    created: int = 0
    skipped: int = 0


@dataclass(slots=True)
class SyncSummary:
    sources: list[SourceSyncResult] = field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(item.created for item in self.sources)

    @property
    def skipped(self) -> int:
        return sum(item.skipped for item in self.sources)


def to_official_post(item: ExternalInboundPost, provider: ExternalInformationProvider, author_id: UUID) -> Post:
    return Post(
        author_id=author_id,
        title=item.title or f"Communiqué {provider.source_name}",
        content=item.content,
        category=PostCategory.OFFICIAL,
        status=PostStatus.PUBLISHED,
        source=PostSource.EXTERNAL_OFFICIAL,
        external_id=item.external_id,
        origin_name=provider.source_name,
        created_at=item.date,
        visibility=VisibilityScope.for_establishment(provider.target_establishment),
    )


class InboundSyncService:
    """Imports provider items as published official posts.

    The external id is the deduplication key: an item already stored is
    skipped. Providers are processed one after the other and the first
    failure stops the run.
    """

    def __init__(
        self,
        providers: Sequence[ExternalInformationProvider],
        posts: PostRepository,
        *,
        system_author_id: UUID = SYSTEM_OFFICIAL_ID,
    ) -> None:
        self._providers = list(providers)
        self._posts = posts
        self._system_author_id = system_author_id

    async def sync_all_sources(self) -> SyncSummary:
        summary = SyncSummary()
        async with recover_domain_error(GeneralSyncError):
            for provider in self._providers:
                summary.sources.append(await self._sync_provider(provider))
        logger.info("inbound sync finished", extra={"created_count": summary.created, "skipped_count": summary.skipped})
        return summary

    async def _sync_provider(self, provider: ExternalInformationProvider) -> SourceSyncResult:
        source = provider.source_name
        result = SourceSyncResult(source=source)

        async with recover_domain_error(lambda _msg, cause: ProviderError(source, cause)):
            items = await provider.fetch_latest_posts()
        result.fetched = len(items)

        for item in items:
            async with recover_domain_error(SyncPersistenceFailed):
                if await self._posts.exists_by_external_id(item.external_id):
                    result.skipped += 1
                    obs_metrics.SYNC_POSTS_TOTAL.labels(source=source, outcome="skipped").inc()
                    continue
                await self._posts.save(to_official_post(item, provider, self._system_author_id))
            result.created += 1
            obs_metrics.SYNC_POSTS_TOTAL.labels(source=source, outcome="created").inc()

        logger.info(
            "provider synced",
            extra={"source": source, "fetched_count": result.fetched, "created_count": result.created, "skipped_count": result.skipped},
        )
        return result
