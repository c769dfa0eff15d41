from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingScanObserver:
    """Report best-effort skips through the standard logging module.

    Implements the ``ScanObserver`` protocol.
    """

    def file_scanned(self, path: str) -> None:
        logger.debug("Scanned %s", path)

    def file_skipped(self, path: str, error: OSError) -> None:
        logger.info("Skipping unreadable file %s: %s", path, error.strerror or error)

    def line_too_long(self, path: str, line_number: int) -> None:
        logger.warning("Line %d of %s exceeds the maximum line length, skipping rest of file", line_number, path)

    def entry_skipped(self, path: str, error: OSError) -> None:
        logger.info("Skipping untraversable entry %s: %s", path, error.strerror or error)
