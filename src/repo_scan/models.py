import re
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Query(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pattern: str = Field(alias="query")
    extensions: list[str] = Field(default_factory=list)


class QueriesFile(BaseModel):
    queries: list[Query]


@dataclass(frozen=True)
class CompiledPattern:
    original: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class MatchSpan:
    pattern: str
    start: int
    end: int


@dataclass(frozen=True)
class ScanResult:
    file_path: str
    line_number: int
    line_text: str
    repository: str
    match: MatchSpan


@dataclass(frozen=True)
class Repository:
    name: str
    path: Path


@dataclass(frozen=True)
class ScanStats:
    files_scanned: int = 0
    files_skipped: int = 0
    files_aborted: int = 0
    entries_skipped: int = 0
    results: int = 0


@dataclass(frozen=True)
class ScanReport:
    results: list[ScanResult]
    stats: ScanStats
    elapsed: float
