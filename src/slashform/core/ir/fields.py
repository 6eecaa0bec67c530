"""
Field definition types for slashform IR.

This module contains the closed set of field kinds and the immutable
field definition that pairs a kind with its per-field predicates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# Scalar fields hold a string; multi-select fields hold an ordered tuple of strings.
# Values decoded from a document may be any YAML scalar until the author edits them.
FieldValue = str | tuple[str, ...]

StateView = Mapping[str, Any]

VisibilityRule = Callable[[StateView], bool]
EnablementRule = Callable[[StateView], bool]
ValidationRule = Callable[[StateView], str | None]


def always(state: StateView) -> bool:
    return True


def no_message(state: StateView) -> str | None:
    return None


class FieldKind(str, Enum):
    """Enumeration of supported field kinds."""

    TEXT = "text"
    MULTILINE_TEXT = "multiline-text"
    SINGLE_SELECT = "single-select"
    MULTI_SELECT = "multi-select"

    @property
    def is_select(self) -> bool:
        return self in (FieldKind.SINGLE_SELECT, FieldKind.MULTI_SELECT)


class FieldDefinition(BaseModel):
    """
    Specification for a single editable field.

    The name doubles as the document key. Rules receive the whole current
    state, never just the field's own value, so one field can react to
    another.

    Attributes:
        name: Field identifier and serialization key
        kind: Input kind
        description: Optional help text shown with the control
        default_value: Value used when the document does not carry the key
        options: Allowed values for select kinds, in display order
        visibility_rule: False removes the field from the render plan
        enablement_rule: False renders the field read-only
        validation_rule: Returns an advisory message, or None when valid

    Examples:
        - FieldDefinition(name="title", kind=TEXT, default_value="Untitled")
        - FieldDefinition(name="type", kind=SINGLE_SELECT,
              options=("webhook", "md_shortcut"), default_value="webhook")
    """

    name: str
    kind: FieldKind
    description: str | None = None
    default_value: FieldValue
    options: tuple[str, ...] = ()
    visibility_rule: VisibilityRule = always
    enablement_rule: EnablementRule = always
    validation_rule: ValidationRule = no_message

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Field names become document keys and must be non-blank."""
        if not v.strip():
            raise ValueError("Field name cannot be blank")
        return v

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure options are unique."""
        seen: set[str] = set()
        for option in v:
            if option in seen:
                raise ValueError(f"Duplicate option '{option}'")
            seen.add(option)
        return v

    @model_validator(mode="after")
    def validate_shape(self) -> FieldDefinition:
        """Ensure options and default value match the field kind."""
        if self.kind.is_select and not self.options:
            raise ValueError(f"Field '{self.name}' of kind {self.kind.value} requires options")
        if not self.kind.is_select and self.options:
            raise ValueError(f"Field '{self.name}' of kind {self.kind.value} cannot have options")

        if self.kind == FieldKind.MULTI_SELECT:
            if not isinstance(self.default_value, tuple):
                raise ValueError(f"Field '{self.name}' is multi-select; default must be a list")
            unknown = [v for v in self.default_value if v not in self.options]
            if unknown:
                raise ValueError(
                    f"Field '{self.name}' default contains undeclared options: {', '.join(unknown)}"
                )
        elif not isinstance(self.default_value, str):
            raise ValueError(f"Field '{self.name}' is {self.kind.value}; default must be a string")
        elif self.kind == FieldKind.SINGLE_SELECT and self.default_value not in self.options:
            raise ValueError(
                f"Field '{self.name}' default '{self.default_value}' is not one of its options"
            )
        return self

    @property
    def is_multi_select(self) -> bool:
        """Check if field holds a list of options."""
        return self.kind == FieldKind.MULTI_SELECT

    def is_visible(self, state: StateView) -> bool:
        return bool(self.visibility_rule(state))

    def is_enabled(self, state: StateView) -> bool:
        return bool(self.enablement_rule(state))

    def validation_message(self, state: StateView) -> str | None:
        """Run the validation rule; falsy results mean the value is valid."""
        return self.validation_rule(state) or None
