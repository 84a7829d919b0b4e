"""Password reset component port definitions."""

from typing import Protocol


class ResetProviderPort(Protocol):
    """Identity provider slice used by the reset dialog."""

    async def send_password_reset_email(self, email: str) -> None:
        """Dispatch the reset email. Resolves with no payload."""
        ...
