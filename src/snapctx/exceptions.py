from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SnapctxError(Exception):
    """Base exception for errors in the snapctx package."""


@dataclass(frozen=True)
class PathResolutionError(SnapctxError):
    """Raised when the project path does not exist or cannot be canonicalized."""

    path: Path
    message: str = "The project path does not exist or cannot be resolved."

    def __str__(self) -> str:
        return f"{self.message} ({self.path})"


@dataclass(frozen=True)
class TraversalError(SnapctxError):
    """Raised when the project root itself cannot be read."""

    path: Path
    message: str = "The project root cannot be read."

    def __str__(self) -> str:
        return f"{self.message} ({self.path})"


@dataclass(frozen=True)
class EntryReadWarning(UserWarning):
    """Recorded when a single entry below the root cannot be inspected.

    Never raised by the scanner: it is collected and logged, and the scan goes on.
    """

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
