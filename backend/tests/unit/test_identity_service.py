from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from wanda.domain.exceptions import (
    UnauthorizedAdminAction,
    UserAlreadyExists,
    UserNotFound,
    UserPersistenceFailed,
)
from wanda.domain.identity.models import Department, Establishment, TrustImpact, TrustScore, User, UserRole
from wanda.domain.identity.repository import InMemoryUserRepository
from wanda.domain.identity.service import UserService


class CountingUserRepository(InMemoryUserRepository):
    def __init__(self) -> None:
        super().__init__()
        self.saves = 0

    async def save(self, user: User) -> User:
        self.saves += 1
        return await super().save(user)


class BrokenUserRepository(InMemoryUserRepository):
    async def find_by_id(self, user_id: UUID) -> User | None:
        raise ConnectionError("db unreachable")


@pytest.mark.asyncio
async def test_register_user_creates_student_with_default_trust(department: Department) -> None:
    service = UserService(InMemoryUserRepository())

    user = await service.register_user("21A0001", "Aïcha Bello", department, "L1")

    assert user.role is UserRole.STUDENT
    assert user.trust_score == TrustScore.DEFAULT
    assert user.trust_score.value == 50
    assert (await service.get_user_profile(user.id)) == user


@pytest.mark.asyncio
async def test_register_user_with_known_matricule_fails_without_write(department: Department) -> None:
    repo = CountingUserRepository()
    service = UserService(repo)
    await service.register_user("21A0001", "Aïcha Bello", department, "L1")

    with pytest.raises(UserAlreadyExists) as excinfo:
        await service.register_user("21A0001", "Someone Else", department, "L3")

    assert excinfo.value.matricule == "21A0001"
    assert repo.saves == 1


@pytest.mark.asyncio
async def test_get_user_profile_missing_user(user_service: UserService) -> None:
    missing = uuid4()

    with pytest.raises(UserNotFound) as excinfo:
        await user_service.get_user_profile(missing)

    assert excinfo.value.user_id == str(missing)


@pytest.mark.asyncio
async def test_storage_failure_is_wrapped_with_cause() -> None:
    service = UserService(BrokenUserRepository())

    with pytest.raises(UserPersistenceFailed) as excinfo:
        await service.get_user_profile(uuid4())

    assert isinstance(excinfo.value.cause, ConnectionError)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert "db unreachable" in str(excinfo.value)


@pytest.mark.asyncio
async def test_promote_by_non_admin_is_rejected(user_service: UserService, make_user) -> None:
    actor = make_user(role=UserRole.DELEGATE)
    target = make_user()

    with pytest.raises(UnauthorizedAdminAction):
        await user_service.promote_to_delegate(actor.id, target.id)

    assert (await user_service.get_user_profile(target.id)).role is UserRole.STUDENT


@pytest.mark.asyncio
async def test_promote_by_admin_grants_delegate_and_max_trust(user_service: UserService, make_user) -> None:
    admin = make_user(role=UserRole.ADMIN)
    target = make_user(trust=20)

    promoted = await user_service.promote_to_delegate(admin.id, target.id)

    assert promoted.role is UserRole.DELEGATE
    assert promoted.trust_score == TrustScore.MAX
    assert (await user_service.get_user_profile(target.id)) == promoted


@pytest.mark.asyncio
async def test_promote_missing_target_reports_not_found(user_service: UserService, make_user) -> None:
    admin = make_user(role=UserRole.ADMIN)

    with pytest.raises(UserNotFound):
        await user_service.promote_to_delegate(admin.id, uuid4())


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "start, impact, expected",
    [
        (10, TrustImpact.FAKE_NEWS_PUBLISHED, 0),
        (0, TrustImpact.FAKE_NEWS_PUBLISHED, 0),
        (60, TrustImpact.HARASSMENT_DETECTED, 10),
        (99, TrustImpact.STRICT_VIOLATION, 0),
        (98, TrustImpact.POSITIVE_CONTRIBUTION, 100),
        (100, TrustImpact.REPORT_VALIDATED, 100),
        (50, TrustImpact.REPORT_VALIDATED, 52),
    ],
)
async def test_adjust_user_trust_clamps(user_service: UserService, make_user, start, impact, expected) -> None:
    user = make_user(trust=start)

    updated = await user_service.adjust_user_trust(user.id, impact)

    assert updated.trust_score.value == expected
    assert (await user_service.get_user_profile(user.id)).trust_score.value == expected


@pytest.mark.asyncio
async def test_adjust_user_trust_missing_user(user_service: UserService) -> None:
    with pytest.raises(UserNotFound):
        await user_service.adjust_user_trust(uuid4(), TrustImpact.POSITIVE_CONTRIBUTION)


@pytest.mark.asyncio
async def test_list_department_members_filters_by_department(user_service: UserService, make_user, user_repo) -> None:
    first = make_user()
    second = make_user()
    other = User(
        matricule="19B0001",
        full_name="Outsider",
        department=Department(code="BIO", name="Biologie", establishment=Establishment.FS),
        level="M1",
    )
    user_repo.users[other.id] = other

    members = await user_service.list_department_members(first.department)

    assert {member.id for member in members} == {first.id, second.id}


def test_trust_score_rejects_out_of_range_values() -> None:
    with pytest.raises(ValueError):
        TrustScore(101)
    with pytest.raises(ValueError):
        TrustScore(-1)


def test_trust_score_high_reliability_boundary() -> None:
    assert TrustScore(80).is_high_reliability()
    assert not TrustScore(79).is_high_reliability()
