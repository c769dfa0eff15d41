from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Coroutine, Sequence
from typing import Any

from repo_scan.config import MAX_LINE_LENGTH
from repo_scan.core.ports.observer import ScanObserver
from repo_scan.core.scanner import scan_file
from repo_scan.models import CompiledPattern, Repository, ScanResult

Spawn = Callable[[Coroutine[Any, Any, None]], object]


def file_extension(path: str) -> str:
    """Return the suffix from the last dot of the base name, dot included."""
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _is_eligible(path: str, extensions: frozenset[str]) -> bool:
    return file_extension(path) in extensions


def _list_directory(directory: str) -> tuple[list[str], list[str], list[tuple[str, OSError]]]:
    subdirs: list[str] = []
    files: list[str] = []
    failures: list[tuple[str, OSError]] = []
    with os.scandir(directory) as it:
        for entry in it:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path)
                elif entry.is_file():
                    files.append(entry.path)
            except OSError as exc:
                failures.append((entry.path, exc))
    return subdirs, files, failures


async def walk_repository(
    repository: Repository,
    patterns: Sequence[CompiledPattern],
    extensions: frozenset[str],
    sink: asyncio.Queue[ScanResult | None],
    spawn: Spawn,
    observer: ScanObserver,
    max_line_length: int = MAX_LINE_LENGTH,
) -> None:
    """Schedule a scan task for every eligible file under the repository.

    Does not wait for the spawned scans. Directory listings run in worker
    threads; symlinked directories are not descended into.
    """
    pending = [str(repository.path)]
    while pending:
        directory = pending.pop()
        try:
            subdirs, files, failures = await asyncio.to_thread(_list_directory, directory)
        except OSError as exc:
            observer.entry_skipped(directory, exc)
            continue

        for path, error in failures:
            observer.entry_skipped(path, error)
        pending.extend(subdirs)
        for path in files:
            if _is_eligible(path, extensions):
                spawn(scan_file(path, patterns, repository.name, sink, observer, max_line_length))
