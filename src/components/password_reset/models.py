"""Password reset component data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.auth_errors import AuthErrorKind


@dataclass
class ResetModalState:
    """View state of the reset dialog. success and error are never both set."""

    open: bool = False
    email: str = ""
    loading: bool = False
    error: str | None = None
    success: str | None = None
    error_kind: AuthErrorKind | None = None

    @property
    def input_visible(self) -> bool:
        return self.success is None

    def clear_messages(self) -> None:
        self.error = None
        self.error_kind = None
        self.success = None


@dataclass(frozen=True)
class ResetInput:
    email: str


@dataclass(frozen=True)
class ResetOutput:
    success: bool
    attempted: bool = False
    message: str | None = None
    error: str | None = None
    kind: AuthErrorKind | None = None

    @classmethod
    def sent(cls, message: str) -> ResetOutput:
        return cls(success=True, attempted=True, message=message)

    @classmethod
    def rejected(cls, error: str, kind: AuthErrorKind) -> ResetOutput:
        """Precondition failure; the provider was not called."""
        return cls(success=False, error=error, kind=kind)

    @classmethod
    def failed(cls, error: str, kind: AuthErrorKind) -> ResetOutput:
        return cls(success=False, attempted=True, error=error, kind=kind)
