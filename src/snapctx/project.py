from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from snapctx.exceptions import PathResolutionError
from snapctx.logging import logger

UNKNOWN_PROJECT_NAME = "unknown"


class ProjectRoot(BaseModel):
    """The canonical directory a snapshot is taken of.

    Attributes:
        path: Absolute, symlink-resolved directory path.
        name: Display name, the last path segment (or "unknown" for a bare anchor like `/`).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    path: Path = Field(..., description="Absolute, symlink-resolved project directory")
    name: str = Field(..., description="Display name of the project")

    @classmethod
    def from_path(cls, path: str | Path) -> ProjectRoot:
        """Canonicalize a user-supplied path into a project root.

        Args:
            path (str | Path): absolute or relative path to the project directory

        Raises:
            PathResolutionError: if the path does not exist, cannot be resolved
                (e.g. broken symlink chain, permission denied on an ancestor),
                or is not a directory.

        Returns:
            ProjectRoot: the resolved root
        """
        raw = Path(path).expanduser()
        try:
            resolved = raw.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            logger.error("Cannot resolve project path %s: %s", raw, e)
            raise PathResolutionError(path=raw) from e
        if not resolved.is_dir():
            raise PathResolutionError(path=resolved, message="The project path is not a directory.")
        return cls(path=resolved, name=resolved.name or UNKNOWN_PROJECT_NAME)

    def relpath(self, file: Path) -> str:
        """Return `file` relative to the root, with POSIX separators."""
        return file.relative_to(self.path).as_posix()
