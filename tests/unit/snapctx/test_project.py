from __future__ import annotations

import os
from pathlib import Path

import pytest

from snapctx.exceptions import PathResolutionError
from snapctx.project import UNKNOWN_PROJECT_NAME, ProjectRoot


@pytest.mark.unit
def test_from_path_resolves_relative_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    project = tmp_path / "myapp"
    project.mkdir()
    monkeypatch.chdir(tmp_path)

    root = ProjectRoot.from_path("myapp")

    assert root.path == project.resolve()
    assert root.path.is_absolute()
    assert root.name == "myapp"


@pytest.mark.unit
def test_from_path_resolves_symlinks(tmp_path: Path) -> None:
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    os.symlink(real, link)

    root = ProjectRoot.from_path(link)

    assert root.path == real.resolve()
    assert root.name == "real"


@pytest.mark.unit
def test_from_path_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(PathResolutionError) as exc_info:
        ProjectRoot.from_path(tmp_path / "does-not-exist")

    assert exc_info.value.path == tmp_path / "does-not-exist"


@pytest.mark.unit
def test_from_path_broken_symlink_raises(tmp_path: Path) -> None:
    link = tmp_path / "dangling"
    os.symlink(tmp_path / "gone", link)

    with pytest.raises(PathResolutionError):
        ProjectRoot.from_path(link)


@pytest.mark.unit
def test_from_path_regular_file_raises(tmp_path: Path) -> None:
    file = tmp_path / "Cargo.toml"
    file.write_text("[package]\n", encoding="utf-8")

    with pytest.raises(PathResolutionError) as exc_info:
        ProjectRoot.from_path(file)

    assert "not a directory" in str(exc_info.value)


@pytest.mark.unit
def test_filesystem_anchor_gets_fallback_name() -> None:
    root = ProjectRoot.from_path(Path("/"))

    assert root.name == UNKNOWN_PROJECT_NAME


@pytest.mark.unit
def test_project_root_is_immutable(tmp_path: Path) -> None:
    root = ProjectRoot.from_path(tmp_path)

    with pytest.raises(ValueError, match="frozen"):
        root.name = "other"  # type: ignore[misc]


@pytest.mark.unit
def test_relpath_uses_posix_separators(tmp_path: Path) -> None:
    root = ProjectRoot.from_path(tmp_path)

    assert root.relpath(root.path / "src" / "main.rs") == "src/main.rs"
