import sys
from pathlib import Path

import pytest

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from wanda.domain.feed.repository import InMemoryPostRepository
from wanda.domain.feed.service import PostService
from wanda.domain.identity.models import Department, Establishment, TrustScore, User, UserRole
from wanda.domain.identity.repository import InMemoryUserRepository
from wanda.domain.identity.service import UserService
from wanda.moderation.domain.moderation_service import ModerationService
from wanda.moderation.domain.reports_repository import InMemoryReportRepository
from wanda.moderation.domain.validation_service import ValidationService
from wanda.moderation.domain.validations_repository import InMemoryValidationRepository


@pytest.fixture
def department() -> Department:
    return Department(code="GIN", name="Génie Informatique", establishment=Establishment.IUT)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def post_repo() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def report_repo(post_repo: InMemoryPostRepository) -> InMemoryReportRepository:
    return InMemoryReportRepository(post_repo)


@pytest.fixture
def validation_repo() -> InMemoryValidationRepository:
    return InMemoryValidationRepository()


@pytest.fixture
def user_service(user_repo: InMemoryUserRepository) -> UserService:
    return UserService(user_repo)


@pytest.fixture
def post_service(post_repo: InMemoryPostRepository, user_service: UserService) -> PostService:
    return PostService(post_repo, user_service)


@pytest.fixture
def validation_service(
    validation_repo: InMemoryValidationRepository,
    post_repo: InMemoryPostRepository,
    user_service: UserService,
) -> ValidationService:
    return ValidationService(validation_repo, post_repo, user_service)


@pytest.fixture
def moderation_service(
    report_repo: InMemoryReportRepository,
    post_repo: InMemoryPostRepository,
    user_service: UserService,
) -> ModerationService:
    return ModerationService(report_repo, post_repo, user_service)


@pytest.fixture
def make_user(user_repo: InMemoryUserRepository, department: Department):
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.STUDENT, trust: int = 50) -> User:
        counter["n"] += 1
        user = User(
            matricule=f"21A{counter['n']:04d}",
            full_name=f"Student {counter['n']}",
            department=department,
            level="L2",
            role=role,
            trust_score=TrustScore(trust),
        )
        user_repo.users[user.id] = user
        return user

    return _make
