from __future__ import annotations

import io
import sys
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from snapctx.config import HEADER_TIMESTAMP_FORMAT
from snapctx.file_manipulation import (
    build_tree_lines,
    fence_for,
    file_language,
    is_snapshot_file,
    read_text_or_none,
    relpath,
    snapshot_filename,
)
from snapctx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from snapctx.config import ProjectType
    from snapctx.project import ProjectRoot
    from snapctx.settings import Settings

PROMPT_QUESTION = "Enter your question/prompt for the LLM (or press Enter to skip):"


def build_markdown(
    root: ProjectRoot,
    project_type: ProjectType,
    files: Sequence[Path],
    *,
    now: datetime | None = None,
) -> str:
    """Build the snapshot document for a project.

    The document has a header naming the project, its detected type and the
    generation time, a tree of all listed files, and one fenced section per
    file. Files whose contents cannot be read as UTF-8 text keep their place in
    the tree but get no section.

    Args:
        root (ProjectRoot): the project the files belong to
        project_type (ProjectType): the detected ecosystem
        files (Sequence[Path]): absolute paths of the files to include, in listing order
        now (datetime | None): generation time; defaults to the current local time

    Returns:
        str: the Markdown document
    """
    when = now or datetime.now().astimezone()
    out = io.StringIO()
    out.write(f"# Project Summary: {root.name}\n")
    out.write(f"Generated: {when.strftime(HEADER_TIMESTAMP_FORMAT)}\n")
    out.write(f"Type: {project_type}\n\n")

    rels = [relpath(f, root.path) for f in files]
    out.write("## Project Structure\n")
    out.write("```text\n")
    out.write("\n".join(build_tree_lines(root.path, files, root_name=root.name)))
    out.write("\n```\n\n")

    out.write("## File Contents\n")
    for path, rel in zip(files, rels, strict=True):
        content = read_text_or_none(path)
        if content is None:
            continue
        fence = fence_for(content)
        body = content.removesuffix("\n")
        out.write(f"\n### {rel}\n{fence}{file_language(path)}\n{body}\n{fence}\n")

    return out.getvalue()


def append_prompt(output_path: Path, prompt: str) -> bool:
    """Append an `LLM Prompt` section to a written snapshot.

    Args:
        output_path (Path): the snapshot document
        prompt (str): the prompt text; blank prompts are ignored

    Returns:
        bool: True if a section was appended
    """
    text = prompt.strip()
    if not text:
        return False
    with output_path.open("a", encoding="utf-8") as f:
        f.write(f"\n## LLM Prompt\n{text}\n")
    return True


class OutputGenerator:
    """Write the snapshot document of a project into the project directory."""

    def __init__(self, settings: Settings, stdin: TextIO | None = None) -> None:
        self.settings = settings
        self.stdin = stdin

    def output_path(self, root: ProjectRoot, now: datetime | None = None) -> Path:
        """Return `<root>/<name>_snapshot_<YYYYMMDD_HHMMSS>.md` for `now` (default: current local time)."""
        when = now or datetime.now().astimezone()
        return root.path / snapshot_filename(root.name, when)

    def generate(self, root: ProjectRoot, project_type: ProjectType, files: Sequence[Path]) -> Path:
        """Write the snapshot and, when asked for, the prompt section.

        Snapshots left in the root by earlier runs are not included.

        Args:
            root (ProjectRoot): the project
            project_type (ProjectType): the detected ecosystem
            files (Sequence[Path]): the scanner's listing

        Returns:
            Path: the written document
        """
        now = datetime.now().astimezone()
        kept = [f for f in files if not is_snapshot_file(f, root.path, root.name)]
        output_path = self.output_path(root, now)
        output_path.write_text(build_markdown(root, project_type, kept, now=now), encoding="utf-8")
        logger.info("Summary written to %s (%d files)", output_path, len(kept))

        prompt = self.settings.prompt
        if not prompt and not self.settings.batch_mode:
            prompt = self.ask_prompt()
        if append_prompt(output_path, prompt):
            logger.info("Prompt appended to %s", output_path)
        return output_path

    def ask_prompt(self) -> str:
        """Read one line from stdin, after asking for it on stdout."""
        stream = self.stdin or sys.stdin
        print(f"\n{PROMPT_QUESTION}")
        return stream.readline()
