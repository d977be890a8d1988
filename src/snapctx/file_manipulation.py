from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from snapctx.config import EXT2LANG, SNAPSHOT_SUFFIX, SNAPSHOT_TIMESTAMP_FORMAT
from snapctx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path


def relpath(path: Path, root: Path) -> str:
    """Send the relative path of path from root.

    Args:
        path (Path): the path to "relativise"
        root (Path): the root to relativise from

    Returns:
        str: the relative path from root to path, with POSIX separators.
            If path is not under root, returns the original path as a string.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def file_language(path: Path) -> str:
    """Heuristically determine a file's language for the code fence.

    Args:
        path (Path): the file path to analyze

    Returns:
        str: a language string like "rust" or "python", or "" if unknown
    """
    name = path.name.lower()
    if name == "dockerfile":
        return "dockerfile"
    if name == "makefile":
        return "makefile"
    return EXT2LANG.get(path.suffix.lower(), "")


def read_text_or_none(path: Path) -> str | None:
    """Read a file as UTF-8 text.

    Args:
        path (Path): the file to read

    Returns:
        str | None: the file contents, or None if the file is unreadable or not UTF-8 text
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.info("Omitting contents of non-text file %s", path)
        return None
    except OSError as e:
        logger.warning("Omitting contents of unreadable file %s: %s", path, e)
        return None


def snapshot_filename(project_name: str, when: datetime) -> str:
    """Name of the snapshot document for `project_name` taken at `when`."""
    return f"{project_name}{SNAPSHOT_SUFFIX}{when.strftime(SNAPSHOT_TIMESTAMP_FORMAT)}.md"


def is_snapshot_file(path: Path, root: Path, project_name: str) -> bool:
    """Check if `path` is a snapshot document previously written into `root`.

    Args:
        path (Path): the candidate file
        root (Path): the project directory snapshots are written to
        project_name (str): the project's display name

    Returns:
        bool: True for `<root>/<project_name>_snapshot_<YYYYMMDD_HHMMSS>.md`
    """
    if path.parent != root or path.suffix != ".md":
        return False
    prefix = f"{project_name}{SNAPSHOT_SUFFIX}"
    if not path.stem.startswith(prefix):
        return False
    try:
        datetime.strptime(path.stem[len(prefix) :], SNAPSHOT_TIMESTAMP_FORMAT)  # noqa: DTZ007
    except ValueError:
        return False
    return True


@dataclass
class TreeNode:
    """A directory in the drawn file tree."""

    dirs: dict[str, TreeNode] = field(default_factory=dict)
    files: set[str] = field(default_factory=set)


def build_tree_lines(root: Path, files: Sequence[Path], *, root_name: str | None = None) -> list[str]:
    """Draw `files` as a box-drawing tree hanging from `root`.

    Directories come before files at every level, each group sorted
    case-insensitively. Paths outside `root` are not drawn.

    Args:
        root (Path): the directory the tree hangs from
        files (Sequence[Path]): absolute file paths below `root`
        root_name (str | None): label of the first line; defaults to `root.name`

    Returns:
        list[str]: the tree, one line per entry
    """
    tree = TreeNode()
    for f in files:
        try:
            parts = f.relative_to(root).parts
        except ValueError:
            continue
        if not parts:
            continue
        node = tree
        for part in parts[:-1]:
            node = node.dirs.setdefault(part, TreeNode())
        node.files.add(parts[-1])

    return [root_name or root.name, *_draw(tree, "")]


def _draw(node: TreeNode, indent: str) -> Iterator[str]:
    entries: list[tuple[str, TreeNode | None]] = [
        (f"{name}/", node.dirs[name]) for name in sorted(node.dirs, key=str.lower)
    ]
    entries.extend((name, None) for name in sorted(node.files, key=str.lower))
    for idx, (label, child) in enumerate(entries):
        last = idx == len(entries) - 1
        yield f"{indent}{'└── ' if last else '├── '}{label}"
        if child is not None:
            yield from _draw(child, indent + ("    " if last else "│   "))


def fence_for(text: str) -> str:
    """Return a backtick fence longer than any backtick run inside `text`."""
    longest = run = 0
    for ch in text:
        run = run + 1 if ch == "`" else 0
        longest = max(longest, run)
    return "`" * max(3, longest + 1)
