"""
Identity Provider Interface.

Protocol-based interface for the remote identity provider backing the
sign-in page.

Key requirements:
- Every call is awaitable and either resolves or raises ProviderError
- Errors carry a provider code (``auth/wrong-password`` style)
- Persistence mode is selected before any sign-in is attempted
- Callers never read the provider's signed-in user directly

Implementation strategies:
1. DevIdentityProvider: in-memory accounts, logs reset emails (dev/test)
2. FirebaseIdentityClient: Identity Toolkit REST API over httpx

All strategies implement the same IdentityProviderPort interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class PersistenceMode(Enum):
    """How long a signed-in session outlives the current page."""

    SESSION = "session"  # Cleared when the browsing session ends
    NONE = "none"  # Nothing kept after the call returns


@dataclass(frozen=True)
class ProviderSession:
    """Signed-in session returned by a successful sign-in."""

    uid: str
    is_anonymous: bool
    email: str | None = None
    id_token: str | None = None
    refresh_token: str | None = None


class IdentityProviderPort(Protocol):
    """
    Identity provider client interface.

    Implementations:
    - DevIdentityProvider: in-memory (dev/test)
    - FirebaseIdentityClient: Firebase Auth REST
    """

    async def set_persistence(self, mode: PersistenceMode) -> None:
        """Select session persistence. May raise ProviderError."""
        ...

    async def sign_in_anonymously(self) -> ProviderSession:
        """Create an anonymous session."""
        ...

    async def sign_in_with_custom_token(self, token: str) -> ProviderSession:
        """Exchange an externally minted token for a session."""
        ...

    async def sign_in_with_email_and_password(
        self, email: str, password: str
    ) -> ProviderSession:
        """Sign in with account credentials."""
        ...

    async def send_password_reset_email(self, email: str) -> None:
        """
        Dispatch a password reset email.

        Resolves with no payload on success.
        """
        ...


# --- Error Types ---


class ProviderError(Exception):
    """Coded failure raised by an identity provider call."""

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.message = message or ""
        super().__init__(message or code)


# --- Constants ---


ALREADY_SIGNED_IN = "auth/already-signed-in"
NETWORK_REQUEST_FAILED = "auth/network-request-failed"
INTERNAL_ERROR = "auth/internal-error"
