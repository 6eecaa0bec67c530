"""
Schema registry.

An ordered, read-only collection of field definitions. Registry order is
display order and serialization key order; nothing re-sorts it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .errors import SchemaError, UnknownFieldError
from .ir import FieldDefinition, FieldValue

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    Ordered field definitions for one document type.

    Construction fails fast on a malformed schema: an empty field list or
    two definitions sharing a name. Per-field shape problems are rejected
    earlier, when the FieldDefinition itself is built.
    """

    def __init__(self, name: str, fields: Iterable[FieldDefinition]):
        self.name = name
        self._fields: tuple[FieldDefinition, ...] = tuple(fields)

        if not self._fields:
            raise SchemaError(f"Schema '{name}' declares no fields")

        self._by_name: dict[str, FieldDefinition] = {}
        for definition in self._fields:
            if definition.name in self._by_name:
                raise SchemaError(
                    f"Schema '{name}' declares field '{definition.name}' more than once"
                )
            self._by_name[definition.name] = definition

        logger.debug(f"Registered schema '{name}' with {len(self._fields)} fields")

    def fields_in_order(self) -> tuple[FieldDefinition, ...]:
        """Field definitions in display order."""
        return self._fields

    def names(self) -> tuple[str, ...]:
        return tuple(definition.name for definition in self._fields)

    def get(self, name: str) -> FieldDefinition:
        """
        Get a field definition by name.

        Raises:
            UnknownFieldError: If the schema does not declare the field
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownFieldError(f"Unknown field '{name}' in schema '{self.name}'") from None

    def defaults(self) -> dict[str, FieldValue]:
        """Default value of every field, in registry order."""
        return {definition.name: definition.default_value for definition in self._fields}

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"SchemaRegistry(name={self.name!r}, fields={len(self._fields)})"
