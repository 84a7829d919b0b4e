from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.ports.identity import ProviderSession
    from src.domain.auth_errors import AuthErrorKind


@dataclass(frozen=True)
class CredentialForm:
    email: str = ""
    password: str = ""


@dataclass
class CredentialSignInState:
    loading: bool = False
    error: str | None = None
    error_kind: AuthErrorKind | None = None


@dataclass
class SignInOutput:
    session: ProviderSession | None = None
    success: bool = False
    attempted: bool = False
    error: str | None = None
    kind: AuthErrorKind | None = None
