from dataclasses import dataclass

from src.core.ports.identity import ProviderSession


@dataclass
class AppState:
    current_session: ProviderSession | None = None

    @property
    def is_signed_in(self) -> bool:
        """Anonymous bootstrap sessions do not count as signed in."""
        return self.current_session is not None and not self.current_session.is_anonymous

    def logout(self) -> None:
        self.current_session = None
