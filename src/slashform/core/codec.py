"""
Document codec: YAML text <-> raw field mapping.

The codec is the only place that knows the document is YAML. Parsing
discards comments, anchors and formatting the source may carry, so
re-serializing an externally written document normalises it. The
round-trip guarantee only holds for mappings produced by this codec:

    serialize(parse(serialize(m))) == serialize(m)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import yaml

from .errors import DecodeError, ErrorContext

logger = logging.getLogger(__name__)


class _DocumentDumper(yaml.SafeDumper):
    """Safe dumper with literal blocks for multi-line text and no aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


def _represent_tuple(dumper: yaml.SafeDumper, data: tuple[Any, ...]) -> yaml.SequenceNode:
    return dumper.represent_list(list(data))


_DocumentDumper.add_representer(str, _represent_str)
_DocumentDumper.add_representer(tuple, _represent_tuple)


class DocumentCodec:
    """
    Converts document text to a raw mapping and back.

    Args:
        indent: Indentation width for nested sequences
        width: Preferred line width before long scalars are folded
        allow_unicode: Write non-ASCII characters as-is instead of escaping them
    """

    def __init__(self, indent: int = 2, width: int = 80, allow_unicode: bool = True):
        self.indent = indent
        self.width = width
        self.allow_unicode = allow_unicode

    def parse(self, text: str, source: str | None = None) -> dict[str, Any]:
        """
        Parse document text into a raw mapping.

        An empty document parses to an empty mapping.

        Args:
            text: Document text
            source: Optional document name used in error locations

        Returns:
            Mapping of document keys to decoded values

        Raises:
            DecodeError: If the text is not valid YAML or its top level is not a mapping
        """
        try:
            data = yaml.safe_load(text)
        except yaml.MarkedYAMLError as e:
            raise self._decode_error(e, text, source) from e
        except yaml.YAMLError as e:
            raise DecodeError(str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(
                f"Document must be a mapping of field names to values, "
                f"got {type(data).__name__}"
            )
        return data

    def serialize(self, mapping: Mapping[str, Any]) -> str:
        """
        Serialize a mapping to document text.

        Keys are written in the mapping's iteration order; callers pass
        mappings already ordered by the schema.
        """
        return yaml.dump(
            dict(mapping),
            Dumper=_DocumentDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=self.allow_unicode,
            indent=self.indent,
            width=self.width,
        )

    def _decode_error(
        self, error: yaml.MarkedYAMLError, text: str, source: str | None
    ) -> DecodeError:
        """Build a DecodeError carrying the problem location and a source snippet."""
        parts = [part for part in (error.context, error.problem) if part]
        message = ", ".join(parts) if parts else str(error)

        mark = error.problem_mark or error.context_mark
        if mark is None:
            return DecodeError(message)

        line = mark.line + 1
        column = mark.column + 1
        lines = text.splitlines()
        start = max(1, line - 2)
        snippet = "\n".join(lines[start - 1 : line + 2]) or None

        logger.debug(f"Decode failure at line {line}, column {column}: {message}")
        return DecodeError(
            message,
            ErrorContext(
                line=line, column=column, snippet=snippet, snippet_start=start, source=source
            ),
        )
