"""Report intake, automatic quarantine and moderator decisions."""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from uuid import UUID

from wanda.domain.exceptions import (
    DuplicateReport,
    PostNotFound,
    ReportActionFailed,
    ReportNotFound,
    ReportPersistenceFailed,
    recover_domain_error,
)
from wanda.domain.feed.models import PostStatus
from wanda.domain.feed.repository import PostRepository
from wanda.domain.identity.models import Establishment, TrustImpact
from wanda.domain.identity.service import UserService
from wanda.moderation.domain.models import Report, ReportReason, ReportStatus
from wanda.moderation.domain.reports_repository import ReportRepository
from wanda.moderation.domain.thresholds import ModerationThresholds
from wanda.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def impact_for_reason(reason: ReportReason) -> TrustImpact:
    if reason is ReportReason.FAKE_NEWS:
        return TrustImpact.FAKE_NEWS_PUBLISHED
    return TrustImpact.REPORT_VALIDATED


class ModerationService:
    def __init__(
        self,
        reports: ReportRepository,
        posts: PostRepository,
        users: UserService,
        *,
        thresholds: ModerationThresholds | None = None,
    ) -> None:
        self._reports = reports
        self._posts = posts
        self._users = users
        self._thresholds = thresholds or ModerationThresholds.default()

    async def report_post(
        self,
        reporter_id: UUID,
        post_id: UUID,
        reason: ReportReason,
        details: Optional[str] = None,
    ) -> Report:
        """File a report; the post is archived once enough reports pile up."""

        async with recover_domain_error(ReportPersistenceFailed):
            if await self._reports.exists_by_reporter_and_post(reporter_id, post_id):
                raise DuplicateReport(reporter_id, post_id)

            saved = await self._reports.save(
                Report(reporter_id=reporter_id, post_id=post_id, reason=reason, details=details)
            )
            obs_metrics.REPORTS_TOTAL.labels(reason=reason.value.lower()).inc()

            count = await self._reports.count_reports_for_post(post_id)
            if self._thresholds.should_quarantine(count):
                await self._posts.update_status(post_id, PostStatus.ARCHIVED)
                obs_metrics.record_transition("auto_quarantine")
                logger.info("post quarantined", extra={"post_id": str(post_id), "report_count": count})
        return saved

    async def confirm_report(self, admin_id: UUID, report_id: UUID) -> None:
        """Uphold a report: sanction the post author and remove the post."""

        async with recover_domain_error(ReportActionFailed):
            report = await self._reports.find_by_id(report_id)
            if report is None:
                raise ReportNotFound(report_id)
            post = await self._posts.find_by_id(report.post_id)
            if post is None:
                raise PostNotFound(report.post_id)

            await self._users.adjust_user_trust(post.author_id, impact_for_reason(report.reason))

            await self._posts.delete(post.id)
            await self._reports.update_status(report_id, ReportStatus.VALIDATED)
        obs_metrics.REPORT_DECISIONS_TOTAL.labels(decision="confirmed").inc()
        logger.info(
            "report confirmed",
            extra={"report_id": str(report_id), "post_id": str(post.id), "admin_id": str(admin_id)},
        )

    async def reject_report(self, report_id: UUID) -> None:
        """Dismiss a report and put its post back on the feed."""

        async with recover_domain_error(ReportActionFailed):
            report = await self._reports.find_by_id(report_id)
            if report is None:
                raise ReportNotFound(report_id)
            await self._posts.update_status(report.post_id, PostStatus.PUBLISHED)
            await self._reports.update_status(report_id, ReportStatus.REJECTED)
        obs_metrics.REPORT_DECISIONS_TOTAL.labels(decision="rejected").inc()
        logger.info("report rejected", extra={"report_id": str(report_id), "post_id": str(report.post_id)})

    async def list_pending_reports(self, establishment: Establishment) -> Sequence[Report]:
        async with recover_domain_error(ReportPersistenceFailed):
            return list(await self._reports.find_pending_by_establishment(establishment))
