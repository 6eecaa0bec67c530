"""
Project configuration loaded from slashform.toml.

Example slashform.toml:

    [editor]
    schema = "slash-command"

    [codec]
    indent = 2
    width = 80
    allow_unicode = true

    [logging]
    level = "WARNING"

Every section is optional. SLASHFORM_LOG_LEVEL overrides [logging] level.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .codec import DocumentCodec
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "slashform.toml"
LOG_LEVEL_ENV = "SLASHFORM_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EditorConfig:
    """Which schema describes the edited documents."""

    schema: str = "slash-command"


@dataclass
class CodecConfig:
    """YAML output options."""

    indent: int = 2  # PyYAML accepts 2..9
    width: int = 80  # Preferred line width before long scalars fold
    allow_unicode: bool = True

    def build(self) -> DocumentCodec:
        return DocumentCodec(indent=self.indent, width=self.width, allow_unicode=self.allow_unicode)


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class SlashFormConfig:
    """Complete slashform configuration."""

    editor: EditorConfig = field(default_factory=EditorConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None  # File the values came from, None for defaults


def get_config_path(project_root: Path) -> Path:
    return project_root / CONFIG_FILE


def load_config(path: Path | None = None) -> SlashFormConfig:
    """
    Load configuration from slashform.toml.

    Args:
        path: Config file to read; defaults to ./slashform.toml. A missing
            file yields the default configuration.

    Returns:
        SlashFormConfig instance

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    config_path = path or get_config_path(Path.cwd())

    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug(f"No {CONFIG_FILE} found, using defaults")
        config = SlashFormConfig()
    else:
        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
        config = _parse_config_data(data, config_path)

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        config.logging.level = env_level

    _validate_config(config)
    return config


def _parse_config_data(data: dict, config_path: Path) -> SlashFormConfig:
    editor_data = data.get("editor", {})
    codec_data = data.get("codec", {})
    logging_data = data.get("logging", {})

    return SlashFormConfig(
        editor=EditorConfig(schema=editor_data.get("schema", "slash-command")),
        codec=CodecConfig(
            indent=codec_data.get("indent", 2),
            width=codec_data.get("width", 80),
            allow_unicode=codec_data.get("allow_unicode", True),
        ),
        logging=LoggingConfig(level=logging_data.get("level", "WARNING")),
        path=config_path,
    )


def _validate_config(config: SlashFormConfig) -> None:
    source = config.path or "defaults"

    indent = config.codec.indent
    if not isinstance(indent, int) or not 2 <= indent <= 9:
        raise ConfigError(f"[codec] indent must be an integer from 2 to 9 ({source})")

    width = config.codec.width
    if not isinstance(width, int) or width <= indent * 2:
        raise ConfigError(f"[codec] width must be an integer above {indent * 2} ({source})")

    if not isinstance(config.editor.schema, str) or not config.editor.schema:
        raise ConfigError(f"[editor] schema must be a schema name ({source})")

    level = str(config.logging.level).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"Log level must be one of {', '.join(_LOG_LEVELS)}, got '{config.logging.level}'"
        )
    config.logging.level = level
