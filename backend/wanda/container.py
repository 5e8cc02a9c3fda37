"""Lightweight service container shared by the engine's entry points."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from wanda.domain.feed.repository import InMemoryPostRepository, PostRepository
from wanda.domain.feed.service import PostService
from wanda.domain.identity.models import TrustScore
from wanda.domain.identity.repository import InMemoryUserRepository, UserRepository
from wanda.domain.identity.service import UserService
from wanda.ingest.providers import ExternalInformationProvider
from wanda.ingest.service import InboundSyncService
from wanda.moderation.domain.moderation_service import ModerationService
from wanda.moderation.domain.reports_repository import InMemoryReportRepository, ReportRepository
from wanda.moderation.domain.thresholds import ModerationThresholds, load_thresholds
from wanda.moderation.domain.validation_service import ValidationService
from wanda.moderation.domain.validations_repository import InMemoryValidationRepository, ValidationRepository
from wanda.settings import settings

logger = logging.getLogger(__name__)

_user_repository: UserRepository
_post_repository: PostRepository
_report_repository: ReportRepository
_validation_repository: ValidationRepository
_providers: tuple[ExternalInformationProvider, ...] = ()
_thresholds: ModerationThresholds = ModerationThresholds.default()

_user_service: UserService
_post_service: PostService
_validation_service: ValidationService
_moderation_service: ModerationService
_sync_service: InboundSyncService


def _build() -> None:
    global _user_service, _post_service, _validation_service, _moderation_service, _sync_service
    _user_service = UserService(_user_repository, default_trust=TrustScore(settings.default_trust_score))
    _post_service = PostService(_post_repository, _user_service, high_reliability=settings.high_reliability_score)
    _validation_service = ValidationService(
        _validation_repository, _post_repository, _user_service, thresholds=_thresholds
    )
    _moderation_service = ModerationService(
        _report_repository, _post_repository, _user_service, thresholds=_thresholds
    )
    _sync_service = InboundSyncService(_providers, _post_repository, system_author_id=settings.system_author_id)


def reset() -> None:
    """Rewire every service over fresh in-memory stores."""

    global _user_repository, _post_repository, _report_repository, _validation_repository, _providers, _thresholds
    posts = InMemoryPostRepository()
    _user_repository = InMemoryUserRepository()
    _post_repository = posts
    _report_repository = InMemoryReportRepository(posts)
    _validation_repository = InMemoryValidationRepository()
    _providers = ()
    _thresholds = ModerationThresholds.default()
    _build()


def configure(
    *,
    user_repository: Optional[UserRepository] = None,
    post_repository: Optional[PostRepository] = None,
    report_repository: Optional[ReportRepository] = None,
    validation_repository: Optional[ValidationRepository] = None,
    providers: Optional[Sequence[ExternalInformationProvider]] = None,
    thresholds: Optional[ModerationThresholds] = None,
) -> None:
    global _user_repository, _post_repository, _report_repository, _validation_repository, _providers, _thresholds
    if user_repository is not None:
        _user_repository = user_repository
    if post_repository is not None:
        _post_repository = post_repository
    if report_repository is not None:
        _report_repository = report_repository
    if validation_repository is not None:
        _validation_repository = validation_repository
    if providers is not None:
        _providers = tuple(providers)
    if thresholds is not None:
        _thresholds = thresholds
    _build()


def configure_thresholds_from_file(path: str) -> None:
    configure(thresholds=load_thresholds(path))


def get_thresholds() -> ModerationThresholds:
    return _thresholds


def get_user_service() -> UserService:
    return _user_service


def get_post_service() -> PostService:
    return _post_service


def get_validation_service() -> ValidationService:
    return _validation_service


def get_moderation_service() -> ModerationService:
    return _moderation_service


def get_sync_service() -> InboundSyncService:
    return _sync_service


reset()
if settings.moderation_config_path:
    logger.info("loading moderation thresholds", extra={"path": settings.moderation_config_path})
    configure_thresholds_from_file(settings.moderation_config_path)
