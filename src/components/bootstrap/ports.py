"""Bootstrap component port definitions.

Protocol interfaces for external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.core.ports.identity import PersistenceMode, ProviderSession


class BootstrapProviderPort(Protocol):
    """The slice of the identity provider the bootstrap uses."""

    async def set_persistence(self, mode: PersistenceMode) -> None:
        """Select session persistence."""
        ...

    async def sign_in_anonymously(self) -> ProviderSession:
        """Create an anonymous session."""
        ...

    async def sign_in_with_custom_token(self, token: str) -> ProviderSession:
        """Exchange a bootstrap token for a session."""
        ...


class ReadinessWriterPort(Protocol):
    """Write side of the readiness gate. Only the bootstrap holds it."""

    def mark_ready(self) -> None:
        """Flip the gate to READY (idempotent)."""
        ...
