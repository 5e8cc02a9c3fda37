"""Domain error hierarchy shared by every Wanda service.

Each aggregate owns a branch of the tree. Services raise exactly one of
these kinds; anything else that escapes a storage or provider call is
rewrapped through :func:`recover_domain_error` so callers only ever have
to match on :class:`DomainError` subclasses.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from wanda.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base class for every domain failure."""

    code: str = "domain_error"

    def __init__(self, detail: str | None = None, cause: BaseException | None = None) -> None:
        self.detail = detail or self.code
        self.cause = cause
        super().__init__(self.detail)
        if cause is not None:
            self.__cause__ = cause


# --- Users -------------------------------------------------------------


class UserDomainError(DomainError):
    code = "user_error"


class UserAlreadyExists(UserDomainError):
    code = "user_already_exists"

    def __init__(self, matricule: str) -> None:
        self.matricule = matricule
        super().__init__(f"An account with matricule {matricule} already exists.")


class UserNotFound(UserDomainError):
    code = "user_not_found"

    def __init__(self, user_id: object) -> None:
        self.user_id = str(user_id)
        super().__init__(f"User with ID {user_id} was not found.")


class UnauthorizedAdminAction(UserDomainError):
    code = "unauthorized_admin_action"

    def __init__(self, admin_id: object) -> None:
        self.user_id = str(admin_id)
        super().__init__(f"Action denied: User {admin_id} does not have administrative privileges.")


class TrustAdjustmentFailed(UserDomainError):
    code = "trust_adjustment_failed"

    def __init__(self, user_id: object, reason: str) -> None:
        self.user_id = str(user_id)
        super().__init__(f"Could not adjust trust score for user {user_id}: {reason}")


class UserUpdateFailed(UserDomainError):
    code = "user_update_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Failed to update user data: {message}", cause)


class UserPersistenceFailed(UserDomainError):
    code = "user_persistence_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Database persistence error: {message}", cause)


# --- Posts -------------------------------------------------------------


class PostDomainError(DomainError):
    code = "post_error"


class AuthorNotFound(PostDomainError):
    code = "author_not_found"

    def __init__(self, author_id: object, cause: BaseException | None = None) -> None:
        self.user_id = str(author_id)
        super().__init__(f"Author {author_id} not found", cause)


class PostNotFound(PostDomainError):
    code = "post_not_found"

    def __init__(self, post_id: object) -> None:
        self.post_id = str(post_id)
        super().__init__(f"Post with ID {post_id} was not found.")


class UnauthorizedPostAction(PostDomainError):
    code = "unauthorized_post_action"

    def __init__(self, user_id: object) -> None:
        self.user_id = str(user_id)
        super().__init__(f"User {user_id} is not authorized to perform this action on the post.")


class PostContentInvalid(PostDomainError):
    code = "post_content_invalid"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Post content is invalid: {reason}")


class PostPersistenceFailed(PostDomainError):
    code = "post_persistence_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Post database error: {message}", cause)


class ExternalIntegrationError(PostDomainError):
    """Raised by providers when an external source cannot be read or parsed."""

    code = "external_integration_error"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)


# --- Reports -----------------------------------------------------------


class ReportDomainError(DomainError):
    code = "report_error"


class ReportNotFound(ReportDomainError):
    code = "report_not_found"

    def __init__(self, report_id: object) -> None:
        self.report_id = str(report_id)
        super().__init__(f"Report {report_id} was not found.")


class DuplicateReport(ReportDomainError):
    code = "duplicate_report"

    def __init__(self, user_id: object, post_id: object) -> None:
        self.user_id = str(user_id)
        self.post_id = str(post_id)
        super().__init__(f"User {user_id} already reported post {post_id}.")


class ReportActionFailed(ReportDomainError):
    code = "report_action_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)


class ReportPersistenceFailed(ReportDomainError):
    code = "report_persistence_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Report storage error: {message}", cause)


# --- Validations -------------------------------------------------------


class ValidationDomainError(DomainError):
    code = "validation_error"


class DoubleValidation(ValidationDomainError):
    code = "double_validation"

    def __init__(self, user_id: object, post_id: object) -> None:
        self.user_id = str(user_id)
        self.post_id = str(post_id)
        super().__init__(f"User {user_id} has already validated post {post_id}.")


class SelfValidation(ValidationDomainError):
    code = "self_validation"

    def __init__(self, user_id: object | None = None, post_id: object | None = None) -> None:
        self.user_id = str(user_id) if user_id is not None else None
        self.post_id = str(post_id) if post_id is not None else None
        super().__init__("An author cannot validate their own post.")


class ValidationActionFailed(ValidationDomainError):
    code = "validation_action_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause)


class ValidationPersistenceFailed(ValidationDomainError):
    code = "validation_persistence_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Validation storage error: {message}", cause)


# --- Inbound sync ------------------------------------------------------


class SyncDomainError(DomainError):
    code = "sync_error"


class ProviderError(SyncDomainError):
    code = "provider_error"

    def __init__(self, source: str, cause: BaseException | None = None) -> None:
        self.source = source
        super().__init__(f"Failed to fetch data from provider: {source}", cause)


class SyncPersistenceFailed(SyncDomainError):
    code = "sync_persistence_failed"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Failed to save external post: {message}", cause)


class GeneralSyncError(SyncDomainError):
    code = "general_sync_error"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.reason = message
        super().__init__("Global synchronization process failed", cause)


# --- Recovery ----------------------------------------------------------

ErrorFactory = Callable[[str, BaseException], DomainError]


@asynccontextmanager
async def recover_domain_error(factory: ErrorFactory) -> AsyncIterator[None]:
    """Rewrap unexpected failures raised inside the block.

    Cancellation is never intercepted and domain errors pass through
    unchanged. Any other exception becomes ``factory(message, exc)``
    chained to the original failure.
    """

    try:
        yield
    except asyncio.CancelledError:
        raise
    except DomainError:
        raise
    except Exception as exc:
        wrapped = factory(str(exc) or "Unknown error", exc)
        obs_metrics.record_wrapped_error(wrapped.code)
        logger.warning(
            "wrapped unexpected failure",
            extra={"kind": wrapped.code, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        raise wrapped from exc
