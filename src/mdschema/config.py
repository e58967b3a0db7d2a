"""Application configuration: settings schema and mdschema.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mdschema.errors import ConfigError


CONFIG_FILE = "mdschema.yaml"
ENV_PREFIX = "MDSCHEMA_"


class Settings(BaseModel):
    heading_key_casing: str  = Field(default="exact", pattern="^(exact|lower_first)$",
                                     description="How heading labels are matched to property names")
    parser_config:      str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    strip_front_matter: bool = Field(default=True, description="Drop a leading YAML front-matter block")
    validate_result:    bool = Field(default=True, description="Run schema validation after normalizing")
    log_level:          str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdschema.yaml, then MDSCHEMA_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
