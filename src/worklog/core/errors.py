"""Exception types raised by the document codec and services."""

from enum import Enum
from pathlib import Path
from typing import Any, Optional


class WorklogError(Exception):
    """Base exception for worklog errors."""

    pass


class ParseErrorKind(str, Enum):
    """Reason a persisted document could not be read."""

    MALFORMED_FRONTMATTER = "malformed_frontmatter"
    MISSING_FIELD = "missing_field"
    INVALID_DATE = "invalid_date"
    UNKNOWN_DOCUMENT_KIND = "unknown_document_kind"


class ParseError(WorklogError, ValueError):
    """A document's frontmatter is malformed or incomplete."""

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        source_path: Optional[Path] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.value = value
        self.source_path = source_path

    def __str__(self) -> str:
        message = super().__str__()
        if self.source_path is not None:
            return f"{message} ({self.source_path})"
        return message

    @classmethod
    def malformed(cls, message: str) -> "ParseError":
        return cls(ParseErrorKind.MALFORMED_FRONTMATTER, message)

    @classmethod
    def missing_field(cls, field: str, message: Optional[str] = None) -> "ParseError":
        return cls(
            ParseErrorKind.MISSING_FIELD,
            message or f"Missing required field: {field}",
            field=field,
        )

    @classmethod
    def invalid_date(cls, value: Any, field: str = "date") -> "ParseError":
        return cls(
            ParseErrorKind.INVALID_DATE,
            f"Invalid date value: {value!r}",
            field=field,
            value=value,
        )


class DocumentExistsError(WorklogError):
    """Raised when creating a document that is already present."""

    pass


class DocumentNotFoundError(WorklogError):
    """Raised when a document to read or update does not exist."""

    pass


class ConfigError(WorklogError):
    """Raised for an unreadable workspace configuration file."""

    pass
