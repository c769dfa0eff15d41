from typing import Protocol


class ScanObserver(Protocol):
    def file_scanned(self, path: str) -> None: ...

    def file_skipped(self, path: str, error: OSError) -> None: ...

    def line_too_long(self, path: str, line_number: int) -> None: ...

    def entry_skipped(self, path: str, error: OSError) -> None: ...
