from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import Coroutine, Sequence
from pathlib import Path
from typing import Any

from repo_scan.config import MAX_LINE_LENGTH, RESULT_QUEUE_SIZE
from repo_scan.core.errors import RepositoryRootError
from repo_scan.core.patterns import compile_patterns
from repo_scan.core.ports.observer import ScanObserver
from repo_scan.core.walker import walk_repository
from repo_scan.models import CompiledPattern, Query, Repository, ScanReport, ScanResult, ScanStats
from repo_scan.observers.logging_adapter import LoggingScanObserver

logger = logging.getLogger(__name__)


def discover_repositories(parent: str | Path) -> list[Repository]:
    """Return one repository per immediate subdirectory of *parent*, sorted by name."""
    root = Path(parent)
    try:
        with os.scandir(root) as it:
            names = sorted(entry.name for entry in it if entry.is_dir(follow_symlinks=False))
    except OSError as exc:
        raise RepositoryRootError(f"Cannot read repositories directory {root}: {exc.strerror or exc}") from exc
    return [Repository(name=name, path=root / name) for name in names]


class _StatsRecorder:
    """Count observer events and forward them to the wrapped observer."""

    def __init__(self, delegate: ScanObserver) -> None:
        self._delegate = delegate
        self.files_scanned = 0
        self.files_skipped = 0
        self.files_aborted = 0
        self.entries_skipped = 0

    def file_scanned(self, path: str) -> None:
        self.files_scanned += 1
        self._delegate.file_scanned(path)

    def file_skipped(self, path: str, error: OSError) -> None:
        self.files_skipped += 1
        self._delegate.file_skipped(path, error)

    def line_too_long(self, path: str, line_number: int) -> None:
        self.files_aborted += 1
        self._delegate.line_too_long(path, line_number)

    def entry_skipped(self, path: str, error: OSError) -> None:
        self.entries_skipped += 1
        self._delegate.entry_skipped(path, error)

    def to_stats(self, results: int) -> ScanStats:
        return ScanStats(
            files_scanned=self.files_scanned,
            files_skipped=self.files_skipped,
            files_aborted=self.files_aborted,
            entries_skipped=self.entries_skipped,
            results=results,
        )


async def _limited(semaphore: asyncio.Semaphore, coro: Coroutine[Any, Any, None]) -> None:
    async with semaphore:
        await coro


async def run_scan(
    repositories: Sequence[Repository],
    patterns: Sequence[CompiledPattern],
    extensions: frozenset[str],
    *,
    queue_size: int = RESULT_QUEUE_SIZE,
    max_line_length: int = MAX_LINE_LENGTH,
    max_workers: int | None = None,
    observer: ScanObserver | None = None,
) -> ScanReport:
    """Scan every repository concurrently and collect all results.

    One task walks each repository and one task scans each eligible file.
    Results flow through a queue bounded by *queue_size*; the queue is closed
    only once every walker and file task has finished. *max_workers* caps the
    number of files scanned at once, ``None`` leaves it unbounded. The
    returned results are in no particular order.
    """
    started = time.perf_counter()
    recorder = _StatsRecorder(observer or LoggingScanObserver())
    sink: asyncio.Queue[ScanResult | None] = asyncio.Queue(maxsize=queue_size)
    semaphore = asyncio.Semaphore(max_workers) if max_workers else None

    async def produce() -> None:
        try:
            async with asyncio.TaskGroup() as group:

                def spawn(coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
                    if semaphore is not None:
                        coro = _limited(semaphore, coro)
                    return group.create_task(coro)

                for repository in repositories:
                    logger.info("Scanning repository: %s", repository.name)
                    group.create_task(
                        walk_repository(
                            repository,
                            patterns,
                            extensions,
                            sink,
                            spawn,
                            recorder,
                            max_line_length,
                        )
                    )
        finally:
            await sink.put(None)

    producer = asyncio.create_task(produce())
    results: list[ScanResult] = []
    while (item := await sink.get()) is not None:
        results.append(item)

    try:
        await producer
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from eg

    elapsed = time.perf_counter() - started
    logger.info("Collected %d results in %.2fs", len(results), elapsed)
    return ScanReport(results=results, stats=recorder.to_stats(len(results)), elapsed=elapsed)


def scan_repositories(
    queries: Sequence[Query],
    repos_dir: str | Path,
    *,
    queue_size: int = RESULT_QUEUE_SIZE,
    max_line_length: int = MAX_LINE_LENGTH,
    max_workers: int | None = None,
    observer: ScanObserver | None = None,
) -> ScanReport:
    """Compile *queries*, discover repositories under *repos_dir* and scan them."""
    patterns, extensions = compile_patterns(queries)
    repositories = discover_repositories(repos_dir)
    return asyncio.run(
        run_scan(
            repositories,
            patterns,
            extensions,
            queue_size=queue_size,
            max_line_length=max_line_length,
            max_workers=max_workers,
            observer=observer,
        )
    )
