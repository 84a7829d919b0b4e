from enum import Enum


class SessionReadiness(Enum):
    NOT_READY = "not_ready"
    READY = "ready"


class ReadinessGate:
    """
    One-way NOT_READY -> READY flag shared by the sign-in operations.

    Only the bootstrap initializer calls mark_ready(); everything else
    reads. Once READY it never goes back.
    """

    def __init__(self) -> None:
        self._state = SessionReadiness.NOT_READY
        self.transitions = 0

    @property
    def state(self) -> SessionReadiness:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is SessionReadiness.READY

    def mark_ready(self) -> None:
        if self._state is SessionReadiness.READY:
            return
        self._state = SessionReadiness.READY
        self.transitions += 1
