"""
Provider error classification.

Maps identity-provider error codes onto a closed set of categories and
renders the user-facing message for each operation. Codes may arrive with
or without the ``auth/`` prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    ACCOUNT_NOT_FOUND = "account_not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    ALREADY_SIGNED_IN = "already_signed_in"
    UNKNOWN = "unknown"


class AuthErrorKind(Enum):
    """Where an error stored in view state came from."""

    PROVIDER_UNAVAILABLE = "provider_unavailable"
    VALIDATION = "validation"
    NOT_READY = "not_ready"
    AUTH_FAILURE = "auth_failure"
    NETWORK_OR_UNKNOWN = "network_or_unknown"


_CATEGORY_BY_CODE: dict[str, ErrorCategory] = {
    "wrong-password": ErrorCategory.INVALID_CREDENTIALS,
    "invalid-credential": ErrorCategory.INVALID_CREDENTIALS,
    "invalid-email": ErrorCategory.ACCOUNT_NOT_FOUND,
    "user-not-found": ErrorCategory.ACCOUNT_NOT_FOUND,
    "too-many-requests": ErrorCategory.TOO_MANY_ATTEMPTS,
    "network-request-failed": ErrorCategory.SERVICE_UNAVAILABLE,
    "internal-error": ErrorCategory.SERVICE_UNAVAILABLE,
    "operation-not-allowed": ErrorCategory.SERVICE_UNAVAILABLE,
    "invalid-api-key": ErrorCategory.SERVICE_UNAVAILABLE,
    "already-signed-in": ErrorCategory.ALREADY_SIGNED_IN,
}

# Codes the sign-in form reports as a generic credential failure.
_SIGN_IN_CREDENTIAL_CODES = frozenset(
    {"invalid-email", "user-not-found", "wrong-password", "invalid-credential"}
)
_RESET_NOT_FOUND_CODES = frozenset({"user-not-found", "invalid-email"})

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."
TOO_MANY_ATTEMPTS_MESSAGE = "Too many login attempts. Try again later."
SIGN_IN_FALLBACK_MESSAGE = "Failed to sign in. Please try again later."
RESET_NOT_FOUND_MESSAGE = "No account found with that email address."
RESET_FALLBACK_MESSAGE = "Failed to send password reset email. Please try again later."


@dataclass(frozen=True)
class ErrorClassification:
    category: ErrorCategory
    code: str
    raw_message: str | None = None


def normalize_code(code: str | None) -> str:
    """Strip the ``auth/`` namespace so both code spellings compare equal."""
    if not code:
        return ""
    code = code.strip()
    if code.startswith("auth/"):
        return code[len("auth/"):]
    return code


def classify(code: str | None) -> ErrorCategory:
    """Total mapping from a provider code to its category (UNKNOWN default)."""
    return _CATEGORY_BY_CODE.get(normalize_code(code), ErrorCategory.UNKNOWN)


def classify_error(code: str | None, raw_message: str | None = None) -> ErrorClassification:
    return ErrorClassification(
        category=classify(code),
        code=normalize_code(code),
        raw_message=raw_message or None,
    )


def kind_for(category: ErrorCategory) -> AuthErrorKind:
    if category in (ErrorCategory.SERVICE_UNAVAILABLE, ErrorCategory.UNKNOWN):
        return AuthErrorKind.NETWORK_OR_UNKNOWN
    return AuthErrorKind.AUTH_FAILURE


def sign_in_message(code: str | None, raw_message: str | None = None) -> str:
    normalized = normalize_code(code)
    if normalized in _SIGN_IN_CREDENTIAL_CODES:
        return INVALID_CREDENTIALS_MESSAGE
    if classify(normalized) is ErrorCategory.TOO_MANY_ATTEMPTS:
        return TOO_MANY_ATTEMPTS_MESSAGE
    return raw_message or SIGN_IN_FALLBACK_MESSAGE


def reset_message(code: str | None, raw_message: str | None = None) -> str:
    if normalize_code(code) in _RESET_NOT_FOUND_CODES:
        return RESET_NOT_FOUND_MESSAGE
    return raw_message or RESET_FALLBACK_MESSAGE
