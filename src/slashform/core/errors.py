"""
Error types for slashform schema construction, document decoding and editing.
"""

from dataclasses import dataclass
from typing import Optional


class SlashFormError(Exception):
    """Base exception for all slashform errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class DecodeError(SlashFormError):
    """
    Raised when document text cannot be decoded into a field mapping.

    Examples:
    - Malformed YAML (unbalanced quotes, bad indentation)
    - A document whose top level is a list or a bare scalar
    """

    @property
    def line(self) -> int | None:
        return self.context.line if self.context else None

    @property
    def column(self) -> int | None:
        return self.context.column if self.context else None


class SchemaError(SlashFormError):
    """
    Raised when a schema registry is malformed.

    Examples:
    - Two field definitions sharing a name
    - A registry without any fields
    - An unknown schema name requested from the catalogue
    """

    pass


class UnknownFieldError(SlashFormError):
    """Raised when a field name is not declared by the schema."""

    pass


class FieldReadOnlyError(SlashFormError):
    """Raised when an edit targets a field whose enablement rule is false."""

    pass


class InvalidOptionError(SlashFormError):
    """
    Raised when a multi-select toggle is not applicable.

    Examples:
    - Toggling a text or single-select field
    - Toggling an option the field does not declare
    """

    pass


class ControllerStateError(SlashFormError):
    """
    Raised when a sync controller operation is not allowed in its current status.

    Examples:
    - Editing a field while the document failed to parse
    - Resetting before any document arrived
    """

    pass


class ConfigError(SlashFormError):
    """Raised when slashform.toml cannot be read or holds invalid values."""

    pass


@dataclass
class ErrorContext:
    """
    Location of a problem inside document text.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source excerpt around the problem
        snippet_start: Line number of the first snippet line
        source: Optional name of the document (usually a file path)
    """

    line: int
    column: int
    snippet: str | None = None
    snippet_start: int = 1
    source: str | None = None

    def location(self) -> str:
        """Location like "command.yml:3:7", or "line 3, column 7" without a source."""
        if self.source:
            return f"{self.source}:{self.line}:{self.column}"
        return f"line {self.line}, column {self.column}"

    def format(self) -> str:
        """Location followed by the numbered excerpt, if there is one."""
        return "\n".join([self.location(), *self.excerpt()])

    def excerpt(self) -> list[str]:
        """
        Numbered snippet lines with a caret under the problem column.

        Returns:
            Lines like "   3 | type: [webhook", empty when no snippet was captured
        """
        if not self.snippet:
            return []

        numbered = []
        for offset, text in enumerate(self.snippet.split("\n")):
            line_num = self.snippet_start + offset
            gutter = f"{line_num:4d} | "
            numbered.append(gutter + text)
            if line_num == self.line:
                numbered.append(" " * (len(gutter) + self.column - 1) + "^")
        return numbered
