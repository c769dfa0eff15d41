"""Shared fixtures and helpers for tests."""

import json
from pathlib import Path

import pytest

from repo_scan.models import Query

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# RecordingObserver — captures skip events for assertions
# ---------------------------------------------------------------------------


class RecordingObserver:
    def __init__(self) -> None:
        self.scanned: list[str] = []
        self.skipped: list[tuple[str, OSError]] = []
        self.long_lines: list[tuple[str, int]] = []
        self.entries: list[tuple[str, OSError]] = []

    def file_scanned(self, path: str) -> None:
        self.scanned.append(path)

    def file_skipped(self, path: str, error: OSError) -> None:
        self.skipped.append((path, error))

    def line_too_long(self, path: str, line_number: int) -> None:
        self.long_lines.append((path, line_number))

    def entry_skipped(self, path: str, error: OSError) -> None:
        self.entries.append((path, error))


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def repos_dir(tmp_path: Path) -> Path:
    """Return an empty parent directory for repositories."""
    path = tmp_path / "repos"
    path.mkdir()
    return path


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Create *files* (relative path -> content) under *root*."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


def write_queries(path: Path, queries: list[tuple[str, list[str]]]) -> Path:
    models = [Query(pattern=pattern, extensions=extensions) for pattern, extensions in queries]
    document = {"queries": [q.model_dump(by_alias=True) for q in models]}
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path
