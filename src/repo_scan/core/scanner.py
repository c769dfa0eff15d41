from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TextIO

from repo_scan.config import MAX_LINE_LENGTH
from repo_scan.core.matching import find_matches
from repo_scan.core.ports.observer import ScanObserver
from repo_scan.models import CompiledPattern, ScanResult

READ_BATCH_LINES = 256
READ_BATCH_CHARS = 1024 * 1024


def _strip_terminator(raw: str) -> str:
    line = raw.removesuffix("\n")
    return line.removesuffix("\r")


def _open_text(path: str) -> TextIO:
    return open(path, encoding="utf-8", errors="replace", newline="\n")


def read_batch(handle: TextIO, read_limit: int, max_lines: int = READ_BATCH_LINES) -> list[str]:
    """Read raw lines until *max_lines* lines or ``READ_BATCH_CHARS`` characters.

    Always returns at least one line unless the file is exhausted. Each line
    is read with ``readline(read_limit)``, so an oversized line comes back
    truncated without a terminator.
    """
    batch: list[str] = []
    size = 0
    while len(batch) < max_lines and size < READ_BATCH_CHARS:
        raw = handle.readline(read_limit)
        if not raw:
            break
        batch.append(raw)
        size += len(raw)
    return batch


async def scan_file(
    path: str,
    patterns: Sequence[CompiledPattern],
    repository: str,
    sink: asyncio.Queue[ScanResult | None],
    observer: ScanObserver,
    max_line_length: int = MAX_LINE_LENGTH,
) -> None:
    """Scan one file line by line and push one result per match into *sink*.

    Blocking reads run in worker threads, a batch at a time. Each result is
    put before the next line is matched, so a full sink stops the scan. An
    unreadable file is reported to *observer* and skipped; a line longer than
    *max_line_length* characters ends the file, keeping earlier results.
    """
    # +2 leaves room for a "\r\n" terminator on a line of exactly the maximum length
    read_limit = max_line_length + 2
    try:
        handle = await asyncio.to_thread(_open_text, path)
    except OSError as exc:
        observer.file_skipped(path, exc)
        return

    with handle:
        line_number = 0
        while True:
            try:
                batch = await asyncio.to_thread(read_batch, handle, read_limit)
            except OSError as exc:
                observer.file_skipped(path, exc)
                return
            if not batch:
                break

            for raw in batch:
                line_number += 1
                line = _strip_terminator(raw)
                if len(line) > max_line_length:
                    observer.line_too_long(path, line_number)
                    return
                for pattern in patterns:
                    for span in find_matches(line, pattern):
                        await sink.put(
                            ScanResult(
                                file_path=path,
                                line_number=line_number,
                                line_text=line,
                                repository=repository,
                                match=span,
                            )
                        )

    observer.file_scanned(path)
