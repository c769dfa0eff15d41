import csv
from collections.abc import Iterable
from pathlib import Path

from repo_scan.core.errors import ReportWriteError
from repo_scan.models import ScanResult

REPORT_COLUMNS = (
    "file_path",
    "line_number",
    "line_content",
    "repository_name",
    "pattern",
    "start_index",
    "end_index",
)


def result_to_row(result: ScanResult) -> list[str]:
    return [
        result.file_path,
        str(result.line_number),
        result.line_text,
        result.repository,
        result.match.pattern,
        str(result.match.start),
        str(result.match.end),
    ]


def write_results(results: Iterable[ScanResult], output: str | Path) -> int:
    """Write *results* as CSV with a header row. Returns the number of data rows.

    Paths that came from undecodable file names keep their original bytes.
    """
    count = 0
    try:
        with open(output, "w", encoding="utf-8", errors="surrogateescape", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(REPORT_COLUMNS)
            for result in results:
                writer.writerow(result_to_row(result))
                count += 1
    except OSError as exc:
        raise ReportWriteError(f"Cannot write report {output}: {exc.strerror or exc}") from exc
    return count
