"""Diagnostic sink used by the core.

Core functions never print. They receive a Reporter explicitly, so the CLI
can hand in its console formatter and tests can hand in a recorder.
"""

from typing import Protocol


class Reporter(Protocol):
    """Interface for progress and diagnostic messages emitted by the core."""

    def info(self, msg: str) -> None:
        """Report an informational message."""
        ...

    def warn(self, msg: str) -> None:
        """Report a warning."""
        ...

    def error(self, msg: str) -> None:
        """Report an error."""
        ...
