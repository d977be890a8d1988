from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from snapctx.config import MARKER_RULES, ProjectType
from snapctx.detector import ProjectClassifier, has_marker
from snapctx.project import ProjectRoot

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from tests.conftest import MakeTree


@pytest.mark.unit
@pytest.mark.parametrize(
    ("marker", "expected"),
    [
        ("Cargo.toml", ProjectType.RUST),
        ("package.json", ProjectType.JAVASCRIPT),
        ("requirements.txt", ProjectType.PYTHON),
        ("setup.py", ProjectType.PYTHON),
    ],
)
def test_classify_by_marker(make_tree: MakeTree, marker: str, expected: ProjectType) -> None:
    root = ProjectRoot.from_path(make_tree({marker: "", "src/main": "x"}))

    assert ProjectClassifier().classify(root) is expected


@pytest.mark.unit
def test_classify_without_marker_is_unknown(make_tree: MakeTree) -> None:
    root = ProjectRoot.from_path(make_tree({"README.md": "# hi"}))

    assert ProjectClassifier().classify(root) is ProjectType.UNKNOWN


@pytest.mark.unit
def test_classify_empty_directory_is_unknown(tmp_path: Path) -> None:
    assert ProjectClassifier().classify(ProjectRoot.from_path(tmp_path)) is ProjectType.UNKNOWN


@pytest.mark.unit
def test_earlier_rule_wins_on_tie(make_tree: MakeTree) -> None:
    root = ProjectRoot.from_path(make_tree({"package.json": "{}", "Cargo.toml": "[package]"}))

    assert ProjectClassifier().classify(root) is ProjectType.RUST


@pytest.mark.unit
def test_javascript_beats_python(make_tree: MakeTree) -> None:
    root = ProjectRoot.from_path(make_tree({"setup.py": "", "requirements.txt": "", "package.json": "{}"}))

    assert ProjectClassifier().classify(root) is ProjectType.JAVASCRIPT


@pytest.mark.unit
def test_markers_are_only_looked_up_at_top_level(make_tree: MakeTree) -> None:
    root = ProjectRoot.from_path(make_tree({"crates/core/Cargo.toml": "[package]"}))

    assert ProjectClassifier().classify(root) is ProjectType.UNKNOWN


@pytest.mark.unit
def test_directory_named_like_a_marker_does_not_count(tmp_path: Path) -> None:
    (tmp_path / "package.json").mkdir()

    assert ProjectClassifier().classify(ProjectRoot.from_path(tmp_path)) is ProjectType.UNKNOWN


@pytest.mark.unit
def test_custom_rules_replace_defaults(make_tree: MakeTree) -> None:
    root = ProjectRoot.from_path(make_tree({"pyproject.toml": "", "Cargo.toml": ""}))
    classifier = ProjectClassifier([(ProjectType.PYTHON, "pyproject.toml")])

    assert classifier.classify(root) is ProjectType.PYTHON


@pytest.mark.unit
def test_marker_check_errors_count_as_absent(tmp_path: Path, mocker: MockerFixture) -> None:
    (tmp_path / "Cargo.toml").write_text("", encoding="utf-8")
    mocker.patch.object(Path, "is_file", side_effect=PermissionError(13, "Permission denied"))

    assert not has_marker(tmp_path, "Cargo.toml")
    assert ProjectClassifier().classify(ProjectRoot.from_path(tmp_path)) is ProjectType.UNKNOWN


@pytest.mark.unit
def test_default_rule_order() -> None:
    assert [marker for _, marker in MARKER_RULES] == [
        "Cargo.toml",
        "package.json",
        "requirements.txt",
        "setup.py",
    ]
    assert ProjectClassifier().rules == MARKER_RULES
    assert str(ProjectType.JAVASCRIPT) == "JavaScript"
