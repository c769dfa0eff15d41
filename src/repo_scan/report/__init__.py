from repo_scan.report.csv_writer import REPORT_COLUMNS, result_to_row, write_results

__all__ = [
    "REPORT_COLUMNS",
    "result_to_row",
    "write_results",
]
