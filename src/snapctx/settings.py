from __future__ import annotations

from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_FILE = find_dotenv(usecwd=True)


def default_log_file() -> str:
    """Return the log file configured through `SNAPCTX_LOG_FILE` in a `.env` file, if any."""
    if not ENV_FILE:
        return ""
    return dotenv_values(ENV_FILE).get("SNAPCTX_LOG_FILE") or ""


class Settings(BaseModel):
    """Configuration settings for one snapctx invocation."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    project_path: Path = Field(default_factory=Path.cwd, description="Project directory to snapshot.")
    batch_mode: bool = Field(default=False, description="Skip interactive prompts.")
    prompt: str = Field(default="", description="Prompt appended to the snapshot.")
    follow_symlinks: bool = Field(default=False, description="Follow symbolic links while scanning.")
    respect_gitignore: bool = Field(
        default=True,
        description="Honor the patterns of the root .gitignore.",
    )
    extra_ignore: list[str] = Field(
        default_factory=list,
        description="Additional names ignored anywhere in a path.",
    )
    log_file: str = Field(default_factory=default_log_file, description="Log file path.")
