"""
slashform - schema-driven editor for structured command configuration.

Keeps an in-memory field state and a YAML document in step, and derives
which fields are shown, editable and valid from the current values.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import DecodeError, SchemaError, SlashFormError

__version__ = get_version()

__all__ = [
    "__version__",
    "SlashFormError",
    "DecodeError",
    "SchemaError",
]
