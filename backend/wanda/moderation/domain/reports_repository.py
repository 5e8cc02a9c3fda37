"""Storage contract for abuse reports."""

from __future__ import annotations

from typing import Protocol, Sequence
from uuid import UUID

from wanda.domain.feed.models import Post
from wanda.domain.feed.repository import InMemoryPostRepository
from wanda.domain.identity.models import Establishment
from wanda.moderation.domain.models import Report, ReportStatus


class ReportRepository(Protocol):
    """Storage layer contract for reports."""

    async def save(self, report: Report) -> Report:
        ...

    async def find_by_id(self, report_id: UUID) -> Report | None:
        ...

    async def find_pending_by_establishment(self, establishment: Establishment) -> Sequence[Report]:
        """Pending reports whose post is scoped to the establishment or one of its departments."""

    async def update_status(self, report_id: UUID, status: ReportStatus) -> None:
        ...

    async def count_reports_for_post(self, post_id: UUID) -> int:
        ...

    async def exists_by_reporter_and_post(self, reporter_id: UUID, post_id: UUID) -> bool:
        ...


def _post_in_establishment(post: Post, establishment: Establishment) -> bool:
    scope = post.visibility
    if scope.establishment is establishment:
        return True
    return scope.department is not None and scope.department.establishment is establishment


class InMemoryReportRepository(ReportRepository):
    """Reference repository used in tests and developer environments.

    Establishment lookups need the posts the reports point at, so the
    repository reads them from the in-memory post store it is given.
    """

    def __init__(self, posts: InMemoryPostRepository | None = None) -> None:
        self.reports: dict[UUID, Report] = {}
        self._posts = posts

    async def save(self, report: Report) -> Report:
        self.reports[report.id] = report
        return report

    async def find_by_id(self, report_id: UUID) -> Report | None:
        return self.reports.get(report_id)

    async def find_pending_by_establishment(self, establishment: Establishment) -> Sequence[Report]:
        if self._posts is None:
            return []
        pending: list[Report] = []
        for report in self.reports.values():
            if report.status is not ReportStatus.PENDING:
                continue
            post = self._posts.posts.get(report.post_id)
            if post is not None and _post_in_establishment(post, establishment):
                pending.append(report)
        return sorted(pending, key=lambda item: item.created_at)

    async def update_status(self, report_id: UUID, status: ReportStatus) -> None:
        report = self.reports.get(report_id)
        if report is None:
            raise KeyError(str(report_id))
        self.reports[report_id] = report.model_copy(update={"status": status})

    async def count_reports_for_post(self, post_id: UUID) -> int:
        return sum(1 for report in self.reports.values() if report.post_id == post_id)

    async def exists_by_reporter_and_post(self, reporter_id: UUID, post_id: UUID) -> bool:
        return any(
            report.reporter_id == reporter_id and report.post_id == post_id for report in self.reports.values()
        )
