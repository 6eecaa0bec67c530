"""
Slash command configuration schema.

Describes the YAML file that configures one slash command: how it is
titled in the "/" menu, where it appears, what users type to trigger it
and what the trigger is replaced with.
"""

from slashform.core.ir import FieldDefinition, FieldKind, StateView
from slashform.core.registry import SchemaRegistry

SURFACES = (
    "issue_description",
    "issue_comment",
    "pull_request_description",
    "pull_request_comment",
)


def _not_webhook(state: StateView) -> bool:
    return state.get("type") != "webhook"


def _trigger_has_no_spaces(state: StateView) -> str | None:
    value = state.get("trigger-on") or ""
    if " " in str(value):
        return "Trigger on cannot contain spaces"
    return None


def _single_value_source(state: StateView) -> str | None:
    if state.get("value_source") and state.get("value"):
        return "Cannot set both value and value_source"
    return None


FIELDS = [
    FieldDefinition(
        name="title",
        kind=FieldKind.TEXT,
        description=(
            'When the slash command menu appears after typing "/" what should the title be?'
        ),
        default_value="My slash command",
    ),
    FieldDefinition(
        name="description",
        kind=FieldKind.MULTILINE_TEXT,
        default_value="",
    ),
    FieldDefinition(
        name="type",
        kind=FieldKind.SINGLE_SELECT,
        description="Type of slash command, can be Webhook or MD-Shortcut",
        options=("webhook", "md_shortcut"),
        default_value="webhook",
    ),
    FieldDefinition(
        name="surfaces",
        kind=FieldKind.MULTI_SELECT,
        description='What surfaces the slash command should appear on when a user types "/"',
        options=SURFACES,
        default_value=SURFACES,
    ),
    FieldDefinition(
        name="trigger-on",
        kind=FieldKind.TEXT,
        description="What do users type to use this slash command",
        default_value="my-command",
        validation_rule=_trigger_has_no_spaces,
    ),
    FieldDefinition(
        name="value",
        kind=FieldKind.MULTILINE_TEXT,
        description="What should your trigger word be replaced with after the user hits enter?",
        default_value="",
        visibility_rule=_not_webhook,
        validation_rule=_single_value_source,
    ),
    FieldDefinition(
        name="value_source",
        kind=FieldKind.TEXT,
        description="Same as above, except pull a .md file for the contents",
        default_value="file.md",
        visibility_rule=_not_webhook,
        validation_rule=_single_value_source,
    ),
]

SLASH_COMMAND_SCHEMA = SchemaRegistry("slash-command", FIELDS)
