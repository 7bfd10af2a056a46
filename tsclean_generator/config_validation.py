"""
Configuration loading and validation.

Settings come from an optional YAML file, overridden by command line flags,
and are validated against a pydantic schema before generation starts.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Self

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import DefaultConfig
from .domain.field_parser import parse_fields
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    min_node_version: int = Field(
        default=DefaultConfig.MIN_NODE_VERSION,
        ge=1,
        description="Lowest Node.js major version accepted by the preflight check.",
    )
    default_fields: str = Field(
        default=DefaultConfig.DEFAULT_FIELDS,
        min_length=1,
        description="Field specification used for features declared without --fields.",
    )
    port: int = Field(
        default=DefaultConfig.PORT,
        description="PORT written to the generated .env file.",
    )
    mongodb_host: str = Field(
        default=DefaultConfig.MONGODB_HOST,
        min_length=1,
        description="MongoDB server URI; the project name is appended as database name.",
    )
    api_prefix: str = Field(
        default=DefaultConfig.API_PREFIX,
        description="Path prefix every feature router is mounted under.",
    )
    install_dependencies: bool = Field(
        default=DefaultConfig.INSTALL_DEPENDENCIES,
        description="Run 'npm install' in a newly generated project.",
    )
    check_environment: bool = Field(
        default=DefaultConfig.CHECK_ENVIRONMENT,
        description="Check for node, npm and tsc before generating.",
    )

    model_config = ConfigDict(
        extra="ignore",
    )

    @field_validator("port", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> int:
        """Ensure port is a number or string representation of one, and within range."""
        if isinstance(v, bool):
            raise ValueError("Port must be an integer, got bool")
        if isinstance(v, str):
            if not v.isdigit():
                raise ValueError(f"Port must be a number or string containing only digits, got '{v}'")
            v = int(v)
        if not isinstance(v, int):
            raise ValueError(f"Port must be an integer or string containing digits, got {type(v).__name__}")
        if not 0 < v <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {v}")
        return v

    @field_validator("default_fields")
    @classmethod
    def validate_default_fields(cls, v: str) -> str:
        """Ensure the default field specification declares at least one field."""
        if not parse_fields(v):
            raise ValueError(f"'{v}' does not declare any field")
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Make the prefix start with '/' and never end with one."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> Self:
        """Perform cross-field checks."""
        if self.install_dependencies and not self.check_environment:
            logger.debug(
                "'install_dependencies' is enabled while the environment check is off; "
                "'npm install' may fail if npm is missing."
            )
        return self


def validate_and_parse_config(config_dict: Dict[str, Any], config_file: Optional[str] = None) -> ToolConfigSchema:
    """
    Validate a raw configuration dictionary against ToolConfigSchema.

    Raises:
        ConfigurationError: listing every invalid key
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug("Configuration dictionary parsed and validated successfully against schema.")
        return validated_config
    except ValidationError as e:
        problems = []
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")
            logger.debug(f"Configuration error at '{loc_str}': {msg} (input: {error.get('input', 'N/A')!r})")
            problems.append(f"{loc_str}: {msg}")
        raise ConfigurationError(
            f"Invalid configuration: {'; '.join(problems)}",
            config_file=config_file,
        ) from e


def load_config(config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> ToolConfigSchema:
    """
    Load configuration from a YAML file, apply overrides and validate.

    Args:
        config_path: Optional path to a YAML file
        overrides: Values from command line flags; None values are skipped

    Returns:
        Validated configuration
    """
    raw_config: Dict[str, Any] = {}

    if config_path:
        config_file = Path(config_path)
        if config_file.is_file():
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Error parsing YAML file {config_path}: {e}", config_file=config_path) from e

            if yaml_config and isinstance(yaml_config, dict):
                raw_config.update(yaml_config)
                logger.debug(f"Loaded configuration from {config_path}")
            elif yaml_config:
                raise ConfigurationError(
                    f"Content in config file {config_path} is not a mapping",
                    config_file=config_path,
                )
        else:
            logger.warning(f"Config file not found at {config_path}. Using defaults and CLI arguments.")

    overridden_keys = set()
    for key, value in (overrides or {}).items():
        if value is not None and key in ToolConfigSchema.model_fields:
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    return validate_and_parse_config(raw_config, config_file=config_path)
