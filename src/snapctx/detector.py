from __future__ import annotations

from typing import TYPE_CHECKING

from snapctx.config import MARKER_RULES, ProjectType
from snapctx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from snapctx.project import ProjectRoot


def has_marker(directory: Path, marker: str) -> bool:
    """Check whether `marker` is a regular file directly inside `directory`.

    Args:
        directory (Path): the directory to look in (not searched recursively)
        marker (str): the exact basename to look for

    Returns:
        bool: True if the marker file exists; False if it is absent or cannot be checked
    """
    try:
        return (directory / marker).is_file()
    except OSError as e:
        logger.warning("Cannot check marker %s in %s: %s", marker, directory, e)
        return False


class ProjectClassifier:
    """Tell a project's ecosystem from the marker files at its top level.

    Rules are tried in order and the first marker found decides, so a root with
    both `Cargo.toml` and `package.json` is a Rust project.
    """

    def __init__(self, rules: Sequence[tuple[ProjectType, str]] | None = None) -> None:
        self.rules: tuple[tuple[ProjectType, str], ...] = MARKER_RULES if rules is None else tuple(rules)

    def classify(self, root: ProjectRoot) -> ProjectType:
        """Return the type of the first rule whose marker exists, or `ProjectType.UNKNOWN`.

        Never raises: a missing marker is an expected outcome.
        """
        for project_type, marker in self.rules:
            if has_marker(root.path, marker):
                logger.info("Detected %s project from %s", project_type, marker)
                return project_type
        logger.info("No marker file found in %s", root.path)
        return ProjectType.UNKNOWN
