"""Storage contract for users and an in-memory reference implementation."""

from __future__ import annotations

from typing import Protocol, Sequence
from uuid import UUID

from wanda.domain.identity.models import Department, User


class UserRepository(Protocol):
    """Storage layer contract for users."""

    async def find_by_id(self, user_id: UUID) -> User | None:
        ...

    async def find_by_matricule(self, matricule: str) -> User | None:
        ...

    async def save(self, user: User) -> User:
        """Insert or replace the user, returning the stored value."""

    async def delete(self, user_id: UUID) -> None:
        ...

    async def find_all_by_department(self, department: Department) -> Sequence[User]:
        ...


class InMemoryUserRepository(UserRepository):
    """Reference repository used in tests and developer environments."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}

    async def find_by_id(self, user_id: UUID) -> User | None:
        return self.users.get(user_id)

    async def find_by_matricule(self, matricule: str) -> User | None:
        for user in self.users.values():
            if user.matricule == matricule:
                return user
        return None

    async def save(self, user: User) -> User:
        self.users[user.id] = user
        return user

    async def delete(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)

    async def find_all_by_department(self, department: Department) -> Sequence[User]:
        return [user for user in self.users.values() if user.department == department]
