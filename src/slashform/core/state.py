"""
State store for one editing session.

FormState is an immutable, versioned snapshot holding a value for every
field the schema declares and nothing else. Updates return a new
snapshot, so a render plan built from an older snapshot never observes a
later edit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .errors import InvalidOptionError, UnknownFieldError
from .ir import FieldKind
from .registry import SchemaRegistry

logger = logging.getLogger(__name__)


def _freeze(value: Any) -> Any:
    """Store sequences as tuples so snapshots cannot be changed in place."""
    if isinstance(value, list | tuple):
        return tuple(value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


class FormState(Mapping[str, Any]):
    """
    Canonical field-name -> value mapping.

    Hidden fields keep their values; visibility is decided later by the
    predicate evaluator and never touches the state.
    """

    __slots__ = ("_registry", "_values", "_version")

    def __init__(self, registry: SchemaRegistry, values: Mapping[str, Any], version: int = 0):
        self._registry = registry
        self._values = MappingProxyType(
            {name: _freeze(values[name]) for name in registry.names()}
        )
        self._version = version

    @classmethod
    def from_defaults(cls, registry: SchemaRegistry, version: int = 0) -> FormState:
        """Build a snapshot holding every field's default value."""
        return cls(registry, registry.defaults(), version)

    @classmethod
    def from_raw(
        cls, registry: SchemaRegistry, raw: Mapping[str, Any], version: int = 0
    ) -> FormState:
        """
        Build a snapshot from a decoded document.

        Each field takes the document's value when the key is present and
        its default otherwise. Keys the schema does not declare are dropped.
        """
        dropped = [key for key in raw if key not in registry]
        if dropped:
            logger.info(
                f"Dropping {len(dropped)} key(s) not declared by schema "
                f"'{registry.name}': {', '.join(str(key) for key in dropped)}"
            )

        values = {
            definition.name: raw[definition.name]
            if definition.name in raw
            else definition.default_value
            for definition in registry.fields_in_order()
        }
        return cls(registry, values, version)

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    @property
    def version(self) -> int:
        return self._version

    def set(self, name: str, value: Any) -> FormState:
        """
        Return a new snapshot with one field replaced.

        No validation happens here; advisory validation is the evaluator's job.

        Raises:
            UnknownFieldError: If the schema does not declare the field
        """
        if name not in self._registry:
            raise UnknownFieldError(f"Unknown field '{name}' in schema '{self._registry.name}'")

        values = dict(self._values)
        values[name] = value
        return FormState(self._registry, values, self._version + 1)

    def toggle(self, name: str, option: str) -> FormState:
        """
        Return a new snapshot with one multi-select option flipped.

        The option is added when absent and removed when present. Selected
        declared options follow the field's option order; values the
        document carried that are not declared options stay after them in
        their existing order.

        Raises:
            UnknownFieldError: If the schema does not declare the field
            InvalidOptionError: If the field is not multi-select or the option is undeclared
        """
        definition = self._registry.get(name)
        if definition.kind != FieldKind.MULTI_SELECT:
            raise InvalidOptionError(
                f"Field '{name}' is {definition.kind.value}; only multi-select fields toggle"
            )
        if option not in definition.options:
            raise InvalidOptionError(f"'{option}' is not an option of field '{name}'")

        current = self._values[name]
        if isinstance(current, tuple):
            selected = list(current)
        elif current is None:
            selected = []
        else:
            selected = [current]
        if option in selected:
            selected = [v for v in selected if v != option]
        else:
            selected.append(option)

        declared = [o for o in definition.options if o in selected]
        extra = [v for v in selected if v not in definition.options]
        return self.set(name, declared + extra)

    def to_raw(self) -> dict[str, Any]:
        """Plain mapping in schema order, ready for the codec."""
        return {name: _thaw(value) for name, value in self._values.items()}

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FormState):
            return dict(self._values) == dict(other._values)
        return super().__eq__(other)

    def __repr__(self) -> str:
        return f"FormState(version={self._version}, values={dict(self._values)!r})"


def init_from_raw(registry: SchemaRegistry, raw: Mapping[str, Any]) -> FormState:
    """Build the initial snapshot for a freshly decoded document."""
    return FormState.from_raw(registry, raw)
