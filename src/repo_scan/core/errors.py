class ScanError(Exception):
    """Base class for errors that abort a whole scan run."""


class ConfigError(ScanError):
    """Raised when the queries file cannot be read or parsed."""


class InvalidPatternError(ScanError):
    """Raised when a translated wildcard pattern does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern = pattern


class RepositoryRootError(ScanError):
    """Raised when the directory holding the repositories cannot be listed."""


class ReportWriteError(ScanError):
    """Raised when the CSV report cannot be created or written."""
