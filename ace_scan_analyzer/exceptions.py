"""
Custom exceptions for ACE scan log analysis.

This module defines the errors raised around the parsing core: a missing
log file, a file that is not a Huorong security log, a log with no usable
scan entries, bad run options, and a failed CSV export. Missing or malformed
fields inside an entry are never errors; those fields are simply skipped.
"""

from typing import Optional


class AceScanAnalysisError(Exception):
    """Base exception for all ACE scan analysis errors."""

    pass


class LogFileNotFoundError(AceScanAnalysisError):
    """Raised when the log file to analyze does not exist.

    Attributes:
        file_path: Path that was looked up.
    """

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        self.file_path = file_path
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.file_path:
            return f"{base} (file: {self.file_path})"
        return base


class LogFormatError(AceScanAnalysisError):
    """Raised when a file fails the Huorong log signature check.

    Attributes:
        file_path: Path to the rejected file.
    """

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        self.file_path = file_path
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.file_path:
            return f"{base} (file: {self.file_path})"
        return base


class NoValidEntriesError(AceScanAnalysisError):
    """Raised when segmentation leaves no scan entries to analyze.

    Attributes:
        file_path: Path to the analyzed file (if known).
        required: Minimum number of entries required.
        actual: Number of entries found.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        required: Optional[int] = None,
        actual: Optional[int] = None,
    ) -> None:
        self.file_path = file_path
        self.required = required
        self.actual = actual
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.file_path:
            base = f"{base} (file: {self.file_path})"
        if self.required is not None and self.actual is not None:
            return f"{base} (required: {self.required}, actual: {self.actual})"
        return base


class ConfigurationError(AceScanAnalysisError):
    """Raised for invalid run options."""

    pass


class ExportError(AceScanAnalysisError):
    """Raised when the CSV export cannot be written.

    Attributes:
        output_path: Destination that failed.
    """

    def __init__(self, message: str, output_path: Optional[str] = None) -> None:
        self.output_path = output_path
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.output_path:
            return f"{base} (output: {self.output_path})"
        return base
