"""
Error recovery for documents that fail to decode.

Surfaces the raw decoder message and rebuilds state from schema defaults
when the author chooses to reset.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from .codec import DocumentCodec
from .errors import DecodeError
from .registry import SchemaRegistry
from .state import FormState

logger = logging.getLogger(__name__)


class ErrorReport(BaseModel):
    """What the author sees while the document cannot be decoded."""

    message: str
    line: int | None = None
    column: int | None = None
    excerpt: tuple[str, ...] = ()
    reset_label: str = "Reset to default values"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_error(cls, error: DecodeError) -> ErrorReport:
        excerpt = tuple(error.context.excerpt()) if error.context else ()
        return cls(
            message=error.message, line=error.line, column=error.column, excerpt=excerpt
        )


class ErrorRecovery:
    """Builds default state and the default document for a schema."""

    def __init__(self, registry: SchemaRegistry, codec: DocumentCodec):
        self.registry = registry
        self.codec = codec

    def default_state(self, version: int = 0) -> FormState:
        return FormState.from_defaults(self.registry, version)

    def default_document(self) -> str:
        """Serialize the default state; this is what a reset writes."""
        return self.codec.serialize(self.default_state().to_raw())

    def report(self, error: DecodeError) -> ErrorReport:
        logger.debug(f"Reporting decode error for schema '{self.registry.name}': {error.message}")
        return ErrorReport.from_error(error)
