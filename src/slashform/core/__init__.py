"""
slashform core: schema registry, document codec, state store, predicate
evaluator and the sync controller that ties them together.
"""

from .codec import DocumentCodec
from .controller import ControllerStatus, FieldBinding, SyncController
from .errors import (
    ConfigError,
    ControllerStateError,
    DecodeError,
    ErrorContext,
    FieldReadOnlyError,
    InvalidOptionError,
    SchemaError,
    SlashFormError,
    UnknownFieldError,
)
from .evaluator import build_render_plan, evaluate_field
from .recovery import ErrorRecovery, ErrorReport
from .registry import SchemaRegistry
from .state import FormState, init_from_raw

__all__ = [
    # Components
    "SchemaRegistry",
    "DocumentCodec",
    "FormState",
    "init_from_raw",
    "evaluate_field",
    "build_render_plan",
    "SyncController",
    "ControllerStatus",
    "FieldBinding",
    "ErrorRecovery",
    "ErrorReport",
    # Errors
    "SlashFormError",
    "DecodeError",
    "SchemaError",
    "UnknownFieldError",
    "FieldReadOnlyError",
    "InvalidOptionError",
    "ControllerStateError",
    "ConfigError",
    "ErrorContext",
]
