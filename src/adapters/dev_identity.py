"""
Dev Identity Provider Adapter.

In-memory identity provider for local development and testing.
Accounts live in a dict, reset emails are logged instead of sent.

Key behaviors:
- Mirrors the provider's error codes (auth/user-not-found, ...)
- Locks an address out with auth/too-many-requests after repeated failures
- Stores dispatched reset emails in memory for test assertions
- Failures can be injected per call for tests
- Optional latency so callers see a real suspension point
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from src.core.ports.identity import (
    ALREADY_SIGNED_IN,
    PersistenceMode,
    ProviderError,
    ProviderSession,
)

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class SentReset:
    """Record of a logged reset email for test assertions."""

    id: str
    recipient: str
    logged_at: datetime


@dataclass
class DevIdentityProvider:
    """
    Dev identity provider that keeps everything in memory.

    Implements IdentityProviderPort.
    """

    # email -> password
    accounts: dict[str, str] = field(default_factory=dict)
    persistence: PersistenceMode | None = None
    current_session: ProviderSession | None = None

    # Lockout after this many consecutive bad passwords per address
    max_failed_attempts: int = 5
    latency_seconds: float = 0.0

    sent_resets: list[SentReset] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    # method name -> error raised on every call to it
    failures: dict[str, ProviderError] = field(default_factory=dict)

    _failed_attempts: dict[str, int] = field(default_factory=dict)

    async def set_persistence(self, mode: PersistenceMode) -> None:
        await self._enter("set_persistence")
        self.persistence = mode
        if mode is PersistenceMode.NONE:
            self.current_session = None

    async def sign_in_anonymously(self) -> ProviderSession:
        await self._enter("sign_in_anonymously")
        self._reject_if_signed_in()
        return self._keep(ProviderSession(uid=f"anon-{uuid4().hex[:12]}", is_anonymous=True))

    async def sign_in_with_custom_token(self, token: str) -> ProviderSession:
        await self._enter("sign_in_with_custom_token")
        if not token:
            raise ProviderError("auth/invalid-custom-token", "The custom token format is incorrect.")
        self._reject_if_signed_in()
        return self._keep(ProviderSession(uid=f"token-{uuid4().hex[:12]}", is_anonymous=False))

    async def sign_in_with_email_and_password(
        self, email: str, password: str
    ) -> ProviderSession:
        await self._enter("sign_in_with_email_and_password")
        self._check_email(email)

        if self._failed_attempts.get(email, 0) >= self.max_failed_attempts:
            raise ProviderError(
                "auth/too-many-requests",
                "Access to this account has been temporarily disabled.",
            )

        stored = self.accounts.get(email)
        if stored is None:
            raise ProviderError("auth/user-not-found", "There is no user record for this email.")

        if stored != password:
            self._failed_attempts[email] = self._failed_attempts.get(email, 0) + 1
            raise ProviderError("auth/wrong-password", "The password is invalid.")

        self._failed_attempts.pop(email, None)
        return self._keep(
            ProviderSession(uid=f"user-{uuid4().hex[:12]}", is_anonymous=False, email=email)
        )

    async def send_password_reset_email(self, email: str) -> None:
        await self._enter("send_password_reset_email")
        self._check_email(email)
        if email not in self.accounts:
            raise ProviderError("auth/user-not-found", "There is no user record for this email.")

        sent = SentReset(id=f"dev-{uuid4().hex[:12]}", recipient=email, logged_at=datetime.now(UTC))
        self.sent_resets.append(sent)
        logger.info(f"PASSWORD RESET (dev): To={email}, MessageID={sent.id}")

    # --- Internals ---

    async def _enter(self, method: str) -> None:
        self.calls.append(method)
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)
        error = self.failures.get(method)
        if error is not None:
            raise error

    def _check_email(self, email: str) -> None:
        if not _EMAIL_RE.match(email or ""):
            raise ProviderError("auth/invalid-email", "The email address is badly formatted.")

    def _reject_if_signed_in(self) -> None:
        if self.persistence is PersistenceMode.SESSION and self.current_session is not None:
            raise ProviderError(ALREADY_SIGNED_IN, "A session is already active.")

    def _keep(self, session: ProviderSession) -> ProviderSession:
        if self.persistence is not PersistenceMode.NONE:
            self.current_session = session
        return session

    # --- Test Helper Methods ---

    def add_account(self, email: str, password: str) -> None:
        self.accounts[email] = password

    def fail_with(self, method: str, code: str, message: str | None = None) -> None:
        """Make every later call to method raise ProviderError(code)."""
        self.failures[method] = ProviderError(code, message)

    def call_count(self, method: str) -> int:
        return self.calls.count(method)

    def get_last_reset(self) -> SentReset | None:
        return self.sent_resets[-1] if self.sent_resets else None

    def clear(self) -> None:
        """Reset recorded calls and emails (for test isolation)."""
        self.calls.clear()
        self.sent_resets.clear()
        self.failures.clear()
        self._failed_attempts.clear()


# --- Factory Function ---


def create_dev_identity_provider(
    accounts: dict[str, str] | None = None,
    latency_seconds: float = 0.0,
) -> DevIdentityProvider:
    """
    Create a dev identity provider.

    Args:
        accounts: Initial email -> password map
        latency_seconds: Simulated delay before every call

    Returns:
        Configured DevIdentityProvider
    """
    return DevIdentityProvider(accounts=dict(accounts or {}), latency_seconds=latency_seconds)
