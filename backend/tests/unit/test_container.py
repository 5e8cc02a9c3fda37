from __future__ import annotations

import pytest

from wanda import container
from wanda.domain.feed.models import PostCategory, PostStatus
from wanda.domain.feed.repository import InMemoryPostRepository
from wanda.domain.identity.models import Department, Establishment
from wanda.ingest.providers import StaticProvider
from wanda.moderation.domain.models import ReportReason
from wanda.moderation.domain.reports_repository import InMemoryReportRepository
from wanda.moderation.domain.thresholds import ModerationThresholds

DEPARTMENT = Department(code="GIN", name="Génie Informatique", establishment=Establishment.IUT)


@pytest.fixture(autouse=True)
def fresh_container():
    container.reset()
    yield
    container.reset()


@pytest.mark.asyncio
async def test_services_share_stores() -> None:
    users = container.get_user_service()
    author = await users.register_user("21A0001", "Author", DEPARTMENT, "L2")
    post = await container.get_post_service().create_post(author.id, "Titre", "Contenu", PostCategory.INFO)

    for index in range(2):
        reporter = await users.register_user(f"21B000{index}", "Reporter", DEPARTMENT, "L1")
        await container.get_moderation_service().report_post(reporter.id, post.id, ReportReason.SPAM)

    assert len(await container.get_moderation_service().list_pending_reports(Establishment.IUT)) == 2


@pytest.mark.asyncio
async def test_configure_thresholds_rewires_services() -> None:
    posts = InMemoryPostRepository()
    container.configure(
        post_repository=posts,
        report_repository=InMemoryReportRepository(posts),
        thresholds=ModerationThresholds(auto_quarantine_threshold=1),
    )
    users = container.get_user_service()
    author = await users.register_user("21A0001", "Author", DEPARTMENT, "L2")
    reporter = await users.register_user("21A0002", "Reporter", DEPARTMENT, "L2")
    post = await container.get_post_service().create_post(author.id, "Titre", "Contenu", PostCategory.INFO)

    await container.get_moderation_service().report_post(reporter.id, post.id, ReportReason.SPAM)

    assert container.get_thresholds().auto_quarantine_threshold == 1
    assert posts.posts[post.id].status is PostStatus.ARCHIVED


@pytest.mark.asyncio
async def test_configured_providers_feed_sync() -> None:
    container.configure(providers=[StaticProvider("Portail", Establishment.FS)])

    summary = await container.get_sync_service().sync_all_sources()

    assert [item.source for item in summary.sources] == ["Portail"]
    assert summary.created == 0
