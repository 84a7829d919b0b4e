"""Bootstrap component data models.

Frozen dataclasses for the bootstrap input and its outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.ports.identity import PersistenceMode, ProviderSession


class BootstrapKind(Enum):
    SIGNED_IN_VIA_TOKEN = "signed_in_via_token"
    SIGNED_IN_ANONYMOUSLY = "signed_in_anonymously"
    FAILED_FATAL = "failed_fatal"


@dataclass(frozen=True)
class BootstrapInput:
    """Input parameters for the bootstrap operation."""

    token: str | None
    persistence: PersistenceMode


@dataclass(frozen=True)
class BootstrapOutcome:
    """Result of the bootstrap operation."""

    kind: BootstrapKind
    session: ProviderSession | None = None
    error: str | None = None
    already_signed_in: bool = False

    @property
    def success(self) -> bool:
        return self.kind is not BootstrapKind.FAILED_FATAL

    @classmethod
    def via_token(
        cls, session: ProviderSession | None, already_signed_in: bool = False
    ) -> BootstrapOutcome:
        """Create a custom-token success result."""
        return cls(
            kind=BootstrapKind.SIGNED_IN_VIA_TOKEN,
            session=session,
            already_signed_in=already_signed_in,
        )

    @classmethod
    def anonymous(
        cls, session: ProviderSession | None, already_signed_in: bool = False
    ) -> BootstrapOutcome:
        """Create an anonymous success result."""
        return cls(
            kind=BootstrapKind.SIGNED_IN_ANONYMOUSLY,
            session=session,
            already_signed_in=already_signed_in,
        )

    @classmethod
    def failed(cls, message: str) -> BootstrapOutcome:
        """Create a failure result carrying a user-facing message."""
        return cls(kind=BootstrapKind.FAILED_FATAL, error=message)
