"""
Configuration schema and loading for NodeQuiz.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from nodequiz.core.catalogue import SchemaCatalogue

ENVVAR_PREFIX = "NODEQUIZ"


class NodeQuizSettings(BaseModel):
    """Top-level NodeQuiz configuration.

    Example YAML:
        quizzes_dir: ./quizzes
        catalogue_path: ./schemas/invokeai.yaml   # omit for the built-in catalogue
        log_level: DEBUG
        json_logs: true
    """

    model_config = {"frozen": True}

    quizzes_dir: Path = Field(
        default=Path("quizzes"),
        description="Directory holding one JSON file per quiz",
    )
    catalogue_path: Path | None = Field(
        default=None,
        description="YAML or JSON node schema catalogue (None = built-in catalogue)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    def load_catalogue(self) -> SchemaCatalogue:
        """Load the configured schema catalogue."""
        if self.catalogue_path is None:
            return SchemaCatalogue.builtin()
        return SchemaCatalogue.from_file(self.catalogue_path)


def load_settings(config_path: Path | None = None) -> NodeQuizSettings:
    """Load settings from an optional YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (NODEQUIZ_*) - highest priority
    2. Config file, if given
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file, or None for env + defaults

    Returns:
        Validated NodeQuizSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If an explicit config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # and drop Dynaconf's own settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    known_keys = set(NodeQuizSettings.model_fields)
    raw_config = {
        k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys and k.lower() in known_keys
    }

    return NodeQuizSettings(**raw_config)
