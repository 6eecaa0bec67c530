"""
Render plan types for slashform IR.

A render plan is what the predicate evaluator produces for one state
snapshot: the visible fields in schema order, each with its current value,
enablement and advisory validation message.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .fields import FieldKind


class ValidationIssue(BaseModel):
    """
    An advisory validation result for one field.

    Issues are shown next to their field; they never block the document
    from being written.
    """

    field: str
    message: str

    model_config = ConfigDict(frozen=True)


class FieldPlan(BaseModel):
    """
    Everything a render layer needs to draw one field control.

    Attributes:
        name: Field identifier (also the control label)
        kind: Input kind, selects the control type
        description: Optional help text
        options: Choices for select kinds
        value: Current value from the state snapshot
        enabled: False means the control is read-only
        validation_message: Inline error text, if any
    """

    name: str
    kind: FieldKind
    description: str | None = None
    options: tuple[str, ...] = ()
    value: Any = None
    enabled: bool = True
    validation_message: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_error(self) -> bool:
        return self.validation_message is not None


class RenderPlan(BaseModel):
    """
    Complete render plan for one state snapshot.

    Attributes:
        version: Version of the state snapshot the plan was built from
        fields: Visible fields in schema order
        hidden_fields: Names excluded by their visibility rule
        issues: Advisory validation issues of visible fields
    """

    version: int
    fields: tuple[FieldPlan, ...] = ()
    hidden_fields: tuple[str, ...] = ()
    issues: tuple[ValidationIssue, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_valid(self) -> bool:
        """Check if no visible field reports a validation message."""
        return len(self.issues) == 0

    def get(self, name: str) -> FieldPlan | None:
        """Get the plan entry for a visible field."""
        for field_plan in self.fields:
            if field_plan.name == name:
                return field_plan
        return None

    def is_visible(self, name: str) -> bool:
        return self.get(name) is not None
