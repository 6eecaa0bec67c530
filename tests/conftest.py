"""Shared pytest fixtures for slashform tests."""

import pytest

from slashform.core.codec import DocumentCodec
from slashform.core.controller import SyncController
from slashform.core.registry import SchemaRegistry
from slashform.core.state import FormState
from slashform.schemas import SLASH_COMMAND_SCHEMA

SAMPLE_DOCUMENT = """\
title: Greet
description: Says hello
type: md_shortcut
surfaces:
  - issue_comment
  - pull_request_comment
trigger-on: hello
value: Hello there!
value_source: ''
"""


@pytest.fixture
def sample_document() -> str:
    """A valid markdown-shortcut document."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def registry() -> SchemaRegistry:
    """Return the slash command schema."""
    return SLASH_COMMAND_SCHEMA


@pytest.fixture
def codec() -> DocumentCodec:
    return DocumentCodec()


@pytest.fixture
def default_state(registry: SchemaRegistry) -> FormState:
    return FormState.from_defaults(registry)


@pytest.fixture
def emitted() -> list[str]:
    """Documents the controller emitted to the host, in order."""
    return []


@pytest.fixture
def controller(registry: SchemaRegistry, emitted: list[str]) -> SyncController:
    """Controller that has not received a document yet."""
    return SyncController(registry, emit=emitted.append)


@pytest.fixture
def ready_controller(controller: SyncController) -> SyncController:
    """Controller loaded with SAMPLE_DOCUMENT."""
    controller.load_document(SAMPLE_DOCUMENT)
    return controller
