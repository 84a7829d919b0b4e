"""Bootstrap component for silent session start-up.

Selects session persistence and signs in with a bootstrap token or
anonymously, then releases the readiness gate.
"""

from .component import run, run_bootstrap
from .models import BootstrapInput, BootstrapKind, BootstrapOutcome
from .ports import BootstrapProviderPort, ReadinessWriterPort

__all__ = [
    # Entry points
    "run",
    "run_bootstrap",
    # Models
    "BootstrapInput",
    "BootstrapKind",
    "BootstrapOutcome",
    # Ports
    "BootstrapProviderPort",
    "ReadinessWriterPort",
]
