"""
Plain-text render layer.

Draws a render plan (or a decode error report) as terminal lines. One
block per visible field: label, help text, current value, inline error.
"""

from typing import Any

from slashform.core.ir import FieldKind, FieldPlan, RenderPlan
from slashform.core.recovery import ErrorReport


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _selected_options(value: Any) -> tuple[str, ...]:
    """A scalar in a multi-select field counts as one selected value."""
    if isinstance(value, tuple):
        return value
    if value is None:
        return ()
    return (str(value),)


def render_field(field_plan: FieldPlan) -> list[str]:
    """Render one field control as text lines."""
    label = field_plan.name
    if not field_plan.enabled:
        label += " (read-only)"
    lines = [label]

    if field_plan.description:
        lines.append(f"  {field_plan.description}")

    value = field_plan.value
    if field_plan.kind == FieldKind.MULTI_SELECT:
        selected = _selected_options(value)
        for option in field_plan.options:
            mark = "x" if option in selected else " "
            lines.append(f"  [{mark}] {option}")
        # Values the document carries that are not declared options
        for extra in selected:
            if extra not in field_plan.options:
                lines.append(f"  [x] {extra} (unknown option)")
    elif field_plan.kind == FieldKind.SINGLE_SELECT:
        choices = [f"({'*' if option == value else ' '}) {option}" for option in field_plan.options]
        lines.append("  " + "   ".join(choices))
        if value not in field_plan.options:
            lines.append(f"  current: {_format_scalar(value)!r} (unknown option)")
    elif field_plan.kind == FieldKind.MULTILINE_TEXT:
        text = _format_scalar(value)
        for text_line in text.split("\n") if text else [""]:
            lines.append(f"  | {text_line}")
    else:
        lines.append(f"  > {_format_scalar(value)}")

    if field_plan.has_error:
        lines.append(f"  ! {field_plan.validation_message}")
    return lines


def render_plan(plan: RenderPlan) -> list[str]:
    """Render every visible field, separated by blank lines."""
    lines: list[str] = []
    for field_plan in plan.fields:
        if lines:
            lines.append("")
        lines.extend(render_field(field_plan))
    return lines


def render_error(report: ErrorReport) -> list[str]:
    """Render a decode error with the reset hint."""
    lines = ["Error parsing YAML"]
    if report.line is not None:
        lines.append(f"  at line {report.line}, column {report.column}")
    lines.append(f"  {report.message}")
    lines.extend(f"  {excerpt_line}" for excerpt_line in report.excerpt)
    lines.append(f"  [{report.reset_label}]")
    return lines
