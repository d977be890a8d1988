from __future__ import annotations

from enum import StrEnum


class ProjectType(StrEnum):
    """Ecosystem of a project, as told by the marker files at its top level."""

    RUST = "Rust"
    JAVASCRIPT = "JavaScript"
    PYTHON = "Python"
    UNKNOWN = "Unknown"


# First match wins.
MARKER_RULES: tuple[tuple[ProjectType, str], ...] = (
    (ProjectType.RUST, "Cargo.toml"),
    (ProjectType.JAVASCRIPT, "package.json"),
    (ProjectType.PYTHON, "requirements.txt"),
    (ProjectType.PYTHON, "setup.py"),
)

DEFAULT_IGNORE_RULES: frozenset[str] = frozenset({
    # version control
    ".git",
    ".hg",
    ".svn",
    # rust
    "target",
    # javascript
    "node_modules",
    "bower_components",
    ".next",
    # shared build outputs
    "build",
    "dist",
    "out",
    # python
    "__pycache__",
    ".venv",
    "venv",
    ".eggs",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".tox",
    ".ipynb_checkpoints",
    # editors
    ".idea",
    ".vscode",
})

BYTECODE_SUFFIXES: tuple[str, ...] = (".pyc", ".pyo", ".class")

SNAPSHOT_SUFFIX = "_snapshot_"
SNAPSHOT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
HEADER_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

EXT2LANG: dict[str, str] = {
    ".bash": "bash",
    ".c": "c",
    ".cc": "cpp",
    ".cfg": "ini",
    ".cjs": "javascript",
    ".conf": "ini",
    ".cpp": "cpp",
    ".css": "css",
    ".go": "go",
    ".h": "c",
    ".hpp": "cpp",
    ".html": "html",
    ".ini": "ini",
    ".java": "java",
    ".js": "javascript",
    ".json": "json",
    ".jsx": "jsx",
    ".md": "markdown",
    ".mjs": "javascript",
    ".php": "php",
    ".py": "python",
    ".rs": "rust",
    ".sh": "bash",
    ".sql": "sql",
    ".toml": "toml",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".txt": "text",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".zsh": "zsh",
}
