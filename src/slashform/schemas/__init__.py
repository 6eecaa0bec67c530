"""
Schema catalogue.

Maps schema names (as used in slashform.toml) to their registries.
"""

from slashform.core.errors import SchemaError
from slashform.core.registry import SchemaRegistry
from slashform.schemas.slash_command import SLASH_COMMAND_SCHEMA

SCHEMAS: dict[str, SchemaRegistry] = {
    SLASH_COMMAND_SCHEMA.name: SLASH_COMMAND_SCHEMA,
}


def get_schema(name: str) -> SchemaRegistry:
    """
    Get a registered schema by name.

    Raises:
        SchemaError: If no schema is registered under the name
    """
    try:
        return SCHEMAS[name]
    except KeyError:
        available = ", ".join(sorted(SCHEMAS))
        raise SchemaError(f"Unknown schema '{name}'. Available: {available}") from None


def list_schemas() -> list[str]:
    return sorted(SCHEMAS)


__all__ = [
    "SCHEMAS",
    "SLASH_COMMAND_SCHEMA",
    "get_schema",
    "list_schemas",
]
