"""
snapctx: snapshot a project directory for an LLM.

Overview
--------
Writes a single Markdown document into the project directory, named
`<project>_snapshot_<YYYYMMDD_HHMMSS>.md`, that contains:

- a header with the project name, generation time and detected type
  (Rust, JavaScript, Python or Unknown, from `Cargo.toml`, `package.json`,
  `requirements.txt` or `setup.py` at the top level),
- a tree of every listed file,
- the contents of every listed text file in fenced code blocks,
- optionally, a prompt for the LLM.

Version-control metadata, hidden files, bytecode, and dependency or build
output directories (`node_modules`, `target`, `build`, `__pycache__`, ...)
are skipped at any depth. Patterns from the root `.gitignore` are honored
unless `--no-gitignore` is given.

Usage
-----
    snapctx .                      # current directory, asks for a prompt
    snapctx ~/projects/myapp --batch-mode
    snapctx . --prompt "Review the error handling" --ignore fixtures
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from snapctx import __version__
from snapctx.detector import ProjectClassifier
from snapctx.exceptions import PathResolutionError, TraversalError
from snapctx.logging import logger, setup_logging
from snapctx.output_construction import OutputGenerator
from snapctx.project import ProjectRoot
from snapctx.scanner import DirectoryScanner, build_ignore_rules
from snapctx.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command-line arguments into settings.

    Args:
        argv (Sequence[str] | None): arguments without the program name; defaults to `sys.argv[1:]`

    Returns:
        Settings: the settings for this invocation
    """
    p = argparse.ArgumentParser(
        prog="snapctx",
        description="Snapshot a project directory into a Markdown document for an LLM.",
    )
    p.add_argument("project_path", type=str, help="Project directory (absolute or relative).")
    p.add_argument(
        "--batch-mode",
        action="store_true",
        help="Skip interactive prompts and generate summary directly.",
    )
    p.add_argument(
        "--prompt",
        type=str,
        default="",
        help="Prompt appended to the snapshot (no interactive question).",
    )
    p.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links while scanning.",
    )
    p.add_argument(
        "--no-gitignore",
        dest="respect_gitignore",
        action="store_false",
        help="Do not honor the root .gitignore.",
    )
    p.add_argument(
        "--ignore",
        dest="extra_ignore",
        action="append",
        default=[],
        help="Extra file or directory name to skip anywhere (repeatable).",
    )
    p.add_argument("--log-file", type=str, default=None, help="Log file path.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = vars(p.parse_args(argv))
    if args["log_file"] is None:
        del args["log_file"]
    return Settings(**args)


def run(settings: Settings) -> int:
    """Resolve, scan, classify and write the snapshot for `settings`.

    Raises:
        PathResolutionError: if the project path cannot be resolved.
        TraversalError: if the project directory cannot be read.

    Returns:
        int: the process exit code
    """
    root = ProjectRoot.from_path(settings.project_path)
    scanner = DirectoryScanner(
        build_ignore_rules(settings.extra_ignore),
        follow_symlinks=settings.follow_symlinks,
        respect_gitignore=settings.respect_gitignore,
    )
    files = scanner.scan(root)
    project_type = ProjectClassifier().classify(root)

    output_path = OutputGenerator(settings).generate(root, project_type, files)
    print(f"Summary written to: {output_path}")
    if scanner.warnings:
        print(f"{len(scanner.warnings)} entries could not be read and were skipped.", file=sys.stderr)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        return run(settings)
    except (PathResolutionError, TraversalError) as e:
        logger.error("Snapshot aborted: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
