"""
Auth component - Credential sign-in.

Checks readiness and required fields, submits email/password to the
identity provider, and navigates home on success.
"""

from .component import (
    MISSING_FIELDS_MESSAGE,
    NOT_READY_MESSAGE,
    check_preconditions,
    run,
    run_sign_in,
)
from .models import (
    CredentialForm,
    CredentialSignInState,
    SignInOutput,
)
from .ports import (
    RouterPort,
    SignInProviderPort,
)

__all__ = [
    # Entry points
    "run",
    "run_sign_in",
    "check_preconditions",
    # Messages
    "MISSING_FIELDS_MESSAGE",
    "NOT_READY_MESSAGE",
    # Models
    "CredentialForm",
    "CredentialSignInState",
    "SignInOutput",
    # Ports
    "RouterPort",
    "SignInProviderPort",
]
