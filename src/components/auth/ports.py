from typing import Protocol

from src.core.ports.identity import ProviderSession


class SignInProviderPort(Protocol):
    async def sign_in_with_email_and_password(
        self, email: str, password: str
    ) -> ProviderSession: ...


class RouterPort(Protocol):
    def navigate(self, path: str) -> None: ...
