"""Scan configuration: tuning constants and the queries document loader."""

import os
from pathlib import Path

from pydantic import ValidationError

from repo_scan.core.errors import ConfigError
from repo_scan.models import QueriesFile, Query

MAX_LINE_LENGTH = 10 * 1024 * 1024  # characters per line before a file is abandoned
RESULT_QUEUE_SIZE = 10_000  # pending results before producers block
DEFAULT_REPOS_DIR = "repos"


def get_repos_dir(override: str | Path | None = None) -> Path:
    """Return the parent directory holding one subdirectory per repository."""
    if override is not None:
        return Path(override)
    return Path(os.getenv("REPO_SCAN_REPOS_DIR", DEFAULT_REPOS_DIR))


def parse_queries(raw: str | bytes) -> list[Query]:
    try:
        document = QueriesFile.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"Malformed queries document: {exc}") from exc
    return document.queries


def load_queries(path: str | Path) -> list[Query]:
    """Read and validate a queries JSON file.

    Raises ConfigError when the file cannot be read or does not match
    ``{"queries": [{"query": ..., "extensions": [...]}]}``.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Cannot read queries file {file_path}: {exc.strerror or exc}") from exc
    return parse_queries(raw)
