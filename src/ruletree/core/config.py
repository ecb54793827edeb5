# src/ruletree/core/config.py
"""
Runtime settings for ruletree.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ruletree.contracts.enums import ScalarParsePolicy


class RuleTreeSettings(BaseModel):
    """Top-level ruletree settings.

    Example YAML:
        scalar_parse_policy: strict
        log_level: INFO
        json_logs: false
    """

    model_config = {"frozen": True, "extra": "forbid"}

    scalar_parse_policy: ScalarParsePolicy = Field(
        default=ScalarParsePolicy.STRICT,
        description="How boolean tuple values are parsed (strict rejects anything but true/false)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console output",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


def load_settings(config_path: Path | None = None) -> RuleTreeSettings:
    """Load settings from an optional YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (RULETREE_*) - highest priority
    2. Config file (when given)
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML settings file, or None for env/defaults only

    Returns:
        Validated RuleTreeSettings instance

    Raises:
        ValidationError: If settings fail Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="RULETREE",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return RuleTreeSettings(**raw_config)
