# signin-gate: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.identity import (
    ALREADY_SIGNED_IN,
    IdentityProviderPort,
    PersistenceMode,
    ProviderError,
    ProviderSession,
)
from src.core.ports.navigation import NavigationPort

__all__ = [
    # Identity provider
    "ALREADY_SIGNED_IN",
    "IdentityProviderPort",
    "PersistenceMode",
    "ProviderError",
    "ProviderSession",
    # Router
    "NavigationPort",
]
