"""Password reset component implementation.

Validates the address typed into the reset dialog and asks the identity
provider to send a reset link. The caller owns the dialog state.
"""

from __future__ import annotations

import logging

from src.core.ports.identity import ProviderError
from src.domain.auth_errors import (
    AuthErrorKind,
    ErrorClassification,
    classify_error,
    kind_for,
    reset_message,
)

from .models import ResetInput, ResetOutput
from .ports import ResetProviderPort

logger = logging.getLogger(__name__)

MISSING_EMAIL_MESSAGE = "Please enter your email address."
PROVIDER_UNAVAILABLE_MESSAGE = "Authentication service is not initialized."
RESET_SENT_MESSAGE = "Password reset email sent! Please check your inbox (and spam folder)."


def check_preconditions(
    reset_input: ResetInput, *, provider_available: bool
) -> ResetOutput | None:
    if not reset_input.email:
        return ResetOutput.rejected(MISSING_EMAIL_MESSAGE, AuthErrorKind.VALIDATION)

    if not provider_available:
        return ResetOutput.rejected(
            PROVIDER_UNAVAILABLE_MESSAGE, AuthErrorKind.PROVIDER_UNAVAILABLE
        )

    return None


def _failed(failure: ErrorClassification) -> ResetOutput:
    return ResetOutput.failed(
        reset_message(failure.code, failure.raw_message), kind_for(failure.category)
    )


async def run_password_reset(
    reset_input: ResetInput, provider: ResetProviderPort | None
) -> ResetOutput:
    """Request a reset email for reset_input.email.

    Args:
        reset_input: Address entered in the dialog.
        provider: Identity provider client, or None if unavailable.

    Returns:
        ResetOutput with the confirmation message or a classified error.
    """
    rejected = check_preconditions(reset_input, provider_available=provider is not None)
    if rejected:
        return rejected
    assert provider is not None

    try:
        await provider.send_password_reset_email(reset_input.email)
    except ProviderError as e:
        logger.warning(f"Password reset error: {e.code}")
        return _failed(classify_error(e.code, e.message))
    except Exception as e:
        logger.exception("Unexpected password reset error")
        return _failed(classify_error(None, str(e)))

    return ResetOutput.sent(RESET_SENT_MESSAGE)


async def run(reset_input: ResetInput, provider: ResetProviderPort | None) -> ResetOutput:
    """Main entry point for the password reset component."""
    return await run_password_reset(reset_input, provider)
