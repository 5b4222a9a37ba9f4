"""
Error definitions and handling for the CNC line annotator.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, List


class AnnotatorException(Exception):
    """Base exception for all annotator errors."""
    pass


class DictionaryException(AnnotatorException):
    """Base exception for code dictionary errors."""
    pass


class DictionaryImportError(DictionaryException):
    """A dictionary document could not be parsed or has the wrong shape."""

    def __init__(self, reason: str, source: Optional[str] = None):
        self.reason = reason
        self.source = source
        message = f"JSON読み込みエラー: {reason}"
        if source:
            message += f" ({source})"
        super().__init__(message)


class DictionaryExportError(DictionaryException):
    """Failed to write a dictionary document."""
    pass


class SettingsException(AnnotatorException):
    """Failed to load or save application settings."""
    pass


class ErrorType(Enum):
    UNKNOWN_TOKEN = "unknown_token"
    UNREGISTERED_CODE = "unregistered_code"


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class AnnotationIssue:
    """Represents a problem found while annotating a line, with position information."""
    line_number: int
    char_start: int
    char_end: int
    message: str
    error_type: ErrorType
    severity: ErrorSeverity = ErrorSeverity.WARNING

    def __str__(self):
        return f"Line {self.line_number}: {self.message}"


class ErrorCollector:
    """Collects and manages issues during annotation."""

    def __init__(self):
        self.errors: List[AnnotationIssue] = []

    def add_error(self, line_number: int, char_start: int, char_end: int,
                  message: str, error_type: ErrorType,
                  severity: ErrorSeverity = ErrorSeverity.WARNING):
        """Add an issue to the collection."""
        error = AnnotationIssue(line_number, char_start, char_end, message,
                                error_type, severity)
        self.errors.append(error)

    def get_errors_for_line(self, line_number: int) -> List[AnnotationIssue]:
        """Get all issues for a specific line."""
        return [error for error in self.errors if error.line_number == line_number]

    def has_errors(self) -> bool:
        """Check if there are any issues of warning severity or above."""
        return any(error.severity in [ErrorSeverity.WARNING, ErrorSeverity.ERROR]
                  for error in self.errors)

    def clear(self):
        """Clear all issues."""
        self.errors.clear()

    def get_all_errors(self) -> List[AnnotationIssue]:
        """Get all issues sorted by line number."""
        return sorted(self.errors, key=lambda e: (e.line_number, e.char_start))
