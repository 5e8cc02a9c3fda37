"""Storage contract for community validations."""

from __future__ import annotations

from typing import Protocol, Sequence
from uuid import UUID

from wanda.moderation.domain.models import Validation, ValidationType


class ValidationRepository(Protocol):
    """Storage layer contract for validations."""

    async def save(self, validation: Validation) -> Validation:
        ...

    async def has_user_validated_post(self, user_id: UUID, post_id: UUID) -> bool:
        ...

    async def find_by_post_id(self, post_id: UUID) -> Sequence[Validation]:
        ...

    async def count_by_type(self, post_id: UUID, validation_type: ValidationType) -> int:
        ...


class InMemoryValidationRepository(ValidationRepository):
    """Reference repository used in tests and developer environments."""

    def __init__(self) -> None:
        self.validations: list[Validation] = []

    async def save(self, validation: Validation) -> Validation:
        self.validations.append(validation)
        return validation

    async def has_user_validated_post(self, user_id: UUID, post_id: UUID) -> bool:
        return any(item.validator_id == user_id and item.post_id == post_id for item in self.validations)

    async def find_by_post_id(self, post_id: UUID) -> Sequence[Validation]:
        return [item for item in self.validations if item.post_id == post_id]

    async def count_by_type(self, post_id: UUID, validation_type: ValidationType) -> int:
        return sum(1 for item in self.validations if item.post_id == post_id and item.type is validation_type)
