from typing import Protocol


class NavigationPort(Protocol):
    """Router side effect used after a successful sign-in."""

    def navigate(self, path: str) -> None:
        """Go to path. Fire-and-forget; may unmount the calling view."""
        ...
