"""
slashform Intermediate Representation.

Immutable pydantic models shared by the registry, evaluator and controller.
"""

from .fields import (
    EnablementRule,
    FieldDefinition,
    FieldKind,
    FieldValue,
    StateView,
    ValidationRule,
    VisibilityRule,
    always,
    no_message,
)
from .plan import FieldPlan, RenderPlan, ValidationIssue

__all__ = [
    # Fields
    "FieldKind",
    "FieldDefinition",
    "FieldValue",
    "StateView",
    "VisibilityRule",
    "EnablementRule",
    "ValidationRule",
    "always",
    "no_message",
    # Plans
    "FieldPlan",
    "RenderPlan",
    "ValidationIssue",
]
