"""Recursive file discovery with ignore-rule filtering."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import GitIgnoreSpec

from snapctx.config import BYTECODE_SUFFIXES, DEFAULT_IGNORE_RULES
from snapctx.exceptions import EntryReadWarning, TraversalError
from snapctx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from snapctx.project import ProjectRoot

    # An ignore spec and the directory its patterns are relative to.
    ScopedSpec = tuple[Path, GitIgnoreSpec]

# Later files win within one directory, as `.ignore` overrides `.gitignore`.
IGNORE_FILES: tuple[str, ...] = (".gitignore", ".ignore")


def build_ignore_rules(extra: Iterable[str] = ()) -> frozenset[str]:
    """Merge additional names into the default ignore rule set.

    Args:
        extra (Iterable[str]): basenames to ignore on top of `DEFAULT_IGNORE_RULES`;
            blank entries and surrounding slashes are dropped

    Returns:
        frozenset[str]: the combined rule set
    """
    names = {e.strip().strip("/\\") for e in extra}
    return DEFAULT_IGNORE_RULES | {n for n in names if n}


def is_hidden_or_bytecode(name: str) -> bool:
    """Check a basename against the dotfile and compiled-artifact exclusion.

    Args:
        name (str): the basename to test

    Returns:
        bool: True if the name starts with "." or ends with a bytecode suffix
    """
    return name.startswith(".") or name.endswith(BYTECODE_SUFFIXES)


def has_ignored_component(parts: Sequence[str], rules: frozenset[str]) -> bool:
    """Check whether any path component is an ignored name.

    Args:
        parts (Sequence[str]): the components of a root-relative path
        rules (frozenset[str]): the ignored basenames

    Returns:
        bool: True if at least one component is in `rules`
    """
    return any(p in rules for p in parts)


def load_ignore_file(path: Path) -> GitIgnoreSpec | None:
    """Compile one `.gitignore`-style file, if it exists.

    Args:
        path (Path): the ignore file

    Returns:
        GitIgnoreSpec | None: the compiled patterns, or None when the file is absent
    """
    if not path.is_file():
        return None
    lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    return GitIgnoreSpec.from_lines(lines)


def is_gitignored(path: Path, specs: Sequence[ScopedSpec], *, is_dir: bool = False) -> bool:
    """Apply the ignore files in scope of `path`, outermost first.

    Each spec sees `path` relative to the directory holding its file. The last
    spec with a matching pattern decides, so a nested `!pattern` re-includes
    what an outer file ignored.

    Args:
        path (Path): the entry to test
        specs (Sequence[ScopedSpec]): (base directory, spec) pairs, from the root down
        is_dir (bool): whether `path` is a directory, for directory-only patterns

    Returns:
        bool: True if the entry is ignored
    """
    ignored = False
    for base, spec in specs:
        try:
            rel = path.relative_to(base).as_posix()
        except ValueError:
            continue
        result = spec.check_file(rel + ("/" if is_dir else ""))
        if result.include is not None:
            ignored = result.include
    return ignored


class DirectoryScanner:
    """Enumerate the regular files of a project, skipping ignored subtrees.

    An entry is skipped when its basename is hidden or bytecode, when any
    component of its root-relative path is in the ignore rule set, or, with
    `respect_gitignore`, when a `.gitignore` or `.ignore` file in its directory
    or any ancestor up to the root matches it. Skipped directories are pruned,
    never descended into.

    Symbolic links are neither listed nor descended into unless
    `follow_symlinks` is set.

    Attributes:
        ignore_rules: basenames ignored anywhere in a path.
        follow_symlinks: descend into symlinked directories and list symlinked files.
        respect_gitignore: apply `.gitignore` and `.ignore` files found during the walk.
        warnings: entries that could not be inspected during the last scan.
    """

    def __init__(
        self,
        ignore_rules: Iterable[str] | None = None,
        *,
        follow_symlinks: bool = False,
        respect_gitignore: bool = True,
    ) -> None:
        self.ignore_rules: frozenset[str] = (
            DEFAULT_IGNORE_RULES if ignore_rules is None else frozenset(ignore_rules)
        )
        self.follow_symlinks = follow_symlinks
        self.respect_gitignore = respect_gitignore
        self.warnings: list[EntryReadWarning] = []

    def scan(self, root: ProjectRoot) -> list[Path]:
        """Walk `root` depth-first and return every file that survives the filters.

        Names are sorted within each directory, so the order is stable for an
        unchanged filesystem.

        Args:
            root (ProjectRoot): the project to scan

        Raises:
            TraversalError: if the root directory itself cannot be read.

        Returns:
            list[Path]: absolute paths of the retained regular files, in traversal order
        """
        self.warnings = []
        top = root.path
        try:
            with os.scandir(top):
                pass
        except OSError as e:
            logger.error("Cannot read project root %s: %s", top, e)
            raise TraversalError(path=top) from e

        def onerror(err: OSError) -> None:
            failed = Path(err.filename) if err.filename else top
            if failed == top:
                raise TraversalError(path=top) from err
            self._warn(failed, err)

        # Ignore specs in scope for each visited directory; parents are visited first.
        scopes: dict[Path, list[ScopedSpec]] = {}
        results: list[Path] = []
        for dirpath, dirs, files in os.walk(top, onerror=onerror, followlinks=self.follow_symlinks):
            current = Path(dirpath)
            specs = scopes.get(current.parent, []) if current != top else []
            specs = specs + self._ignore_specs(current)
            scopes[current] = specs
            dirs[:] = sorted(d for d in dirs if self._keep_dir(top, current / d, specs))
            for name in sorted(files):
                path = current / name
                if self.is_excluded(top, path, specs=specs):
                    continue
                if self._is_listable_file(path):
                    results.append(path)

        logger.info(
            "Scanned %s: %d files, %d warnings",
            top,
            len(results),
            len(self.warnings),
        )
        return results

    def is_excluded(
        self,
        top: Path,
        path: Path,
        *,
        specs: Sequence[ScopedSpec] = (),
        is_dir: bool = False,
    ) -> bool:
        """Decide whether `path` (below `top`) is filtered out by name, component or ignore-file rules.

        Args:
            top (Path): the project directory
            path (Path): a path below `top`
            specs (Sequence[ScopedSpec]): ignore files in scope, from the root down
            is_dir (bool): whether `path` is a directory, for directory-only patterns

        Returns:
            bool: True if the path must be skipped
        """
        try:
            rel = path.relative_to(top)
        except ValueError:
            return True
        if is_hidden_or_bytecode(path.name):
            return True
        if has_ignored_component(rel.parts, self.ignore_rules):
            return True
        return is_gitignored(path, specs, is_dir=is_dir)

    def _ignore_specs(self, directory: Path) -> list[ScopedSpec]:
        if not self.respect_gitignore:
            return []
        specs: list[ScopedSpec] = []
        for name in IGNORE_FILES:
            try:
                spec = load_ignore_file(directory / name)
            except OSError as e:
                self._warn(directory / name, e)
                continue
            if spec is not None:
                specs.append((directory, spec))
        return specs

    def _keep_dir(self, top: Path, path: Path, specs: Sequence[ScopedSpec]) -> bool:
        if self.is_excluded(top, path, specs=specs, is_dir=True):
            return False
        if self.follow_symlinks:
            return True
        try:
            return not path.is_symlink()
        except OSError as e:
            self._warn(path, e)
            return False

    def _is_listable_file(self, path: Path) -> bool:
        try:
            st = os.stat(path, follow_symlinks=False)
            if stat.S_ISLNK(st.st_mode):
                if not self.follow_symlinks:
                    return False
                st = os.stat(path)
        except OSError as e:
            self._warn(path, e)
            return False
        return stat.S_ISREG(st.st_mode)

    def _warn(self, path: Path, err: OSError) -> None:
        warning = EntryReadWarning(path=path, message=err.strerror or str(err))
        self.warnings.append(warning)
        logger.warning("Skipping %s: %s", path, warning.message)
