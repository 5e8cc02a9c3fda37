"""Contract for external information sources."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from wanda.domain.exceptions import ExternalIntegrationError
from wanda.domain.feed.models import ExternalInboundPost
from wanda.domain.identity.models import Establishment


class ExternalInformationProvider(Protocol):
    """A source of official posts (faculty page, RSS feed, registrar portal)."""

    @property
    def source_name(self) -> str:
        """Human readable name, also stored as the post's origin."""

    @property
    def target_establishment(self) -> Establishment:
        """Establishment the imported posts are scoped to."""

    async def fetch_latest_posts(self) -> Sequence[ExternalInboundPost]:
        """Return the latest items.

        Network or parsing failures are raised as
        :class:`~wanda.domain.exceptions.ExternalIntegrationError`.
        """


class StaticProvider(ExternalInformationProvider):
    """Provider serving a fixed list of items, used for seeding and tests."""

    def __init__(
        self,
        source_name: str,
        target_establishment: Establishment,
        items: Iterable[ExternalInboundPost] = (),
        *,
        error: str | None = None,
    ) -> None:
        self._source_name = source_name
        self._target_establishment = target_establishment
        self.items: list[ExternalInboundPost] = list(items)
        self.error = error

    @property
    def source_name(self) -> str:
        return self._source_name

    @property
    def target_establishment(self) -> Establishment:
        return self._target_establishment

    async def fetch_latest_posts(self) -> Sequence[ExternalInboundPost]:
        if self.error is not None:
            raise ExternalIntegrationError(f"{self._source_name}: {self.error}")
        return list(self.items)
