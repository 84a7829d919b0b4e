"""Password reset component - reset-link request from the sign-in dialog."""

from .component import (
    MISSING_EMAIL_MESSAGE,
    PROVIDER_UNAVAILABLE_MESSAGE,
    RESET_SENT_MESSAGE,
    check_preconditions,
    run,
    run_password_reset,
)
from .models import ResetInput, ResetModalState, ResetOutput
from .ports import ResetProviderPort

__all__ = [
    # Entry points
    "run",
    "run_password_reset",
    "check_preconditions",
    # Messages
    "MISSING_EMAIL_MESSAGE",
    "PROVIDER_UNAVAILABLE_MESSAGE",
    "RESET_SENT_MESSAGE",
    # Models
    "ResetInput",
    "ResetModalState",
    "ResetOutput",
    # Ports
    "ResetProviderPort",
]
