"""
Predicate evaluation.

Derives visibility, enablement and advisory validation for every field
from one state snapshot and assembles them into a render plan.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .ir import FieldDefinition, FieldPlan, RenderPlan, ValidationIssue
from .registry import SchemaRegistry

logger = logging.getLogger(__name__)


def evaluate_field(definition: FieldDefinition, state: Mapping[str, Any]) -> FieldPlan | None:
    """
    Evaluate one field's rules against a state snapshot.

    Returns:
        FieldPlan for a visible field, None when the visibility rule hides it
    """
    if not definition.is_visible(state):
        return None

    return FieldPlan(
        name=definition.name,
        kind=definition.kind,
        description=definition.description,
        options=definition.options,
        value=state.get(definition.name),
        enabled=definition.is_enabled(state),
        validation_message=definition.validation_message(state),
    )


def build_render_plan(
    registry: SchemaRegistry, state: Mapping[str, Any], version: int | None = None
) -> RenderPlan:
    """
    Build the render plan for a state snapshot.

    Every rule sees the same snapshot; no rule observes another rule's
    result, so evaluation order never changes the outcome. Validation
    messages are collected as issues but never block anything.

    Args:
        registry: Schema whose fields are evaluated, in registry order
        state: Current state snapshot
        version: Snapshot version; taken from the state when it carries one

    Returns:
        RenderPlan with visible fields, hidden field names and issues

    Examples:
        >>> from slashform.schemas import get_schema
        >>> from slashform.core.state import FormState
        >>> registry = get_schema("slash-command")
        >>> plan = build_render_plan(registry, FormState.from_defaults(registry))
        >>> plan.hidden_fields
        ('value', 'value_source')
        >>> plan.is_valid
        True
    """
    if version is None:
        version = getattr(state, "version", 0)

    fields: list[FieldPlan] = []
    hidden: list[str] = []
    issues: list[ValidationIssue] = []

    for definition in registry.fields_in_order():
        field_plan = evaluate_field(definition, state)
        if field_plan is None:
            hidden.append(definition.name)
            continue

        fields.append(field_plan)
        if field_plan.validation_message:
            issues.append(
                ValidationIssue(field=field_plan.name, message=field_plan.validation_message)
            )

    if issues:
        logger.debug(
            f"Render plan v{version} has {len(issues)} advisory issue(s): "
            f"{', '.join(issue.field for issue in issues)}"
        )

    return RenderPlan(
        version=version,
        fields=tuple(fields),
        hidden_fields=tuple(hidden),
        issues=tuple(issues),
    )
