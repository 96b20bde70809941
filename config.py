# axion-stamp/config.py
# Purpose: Gateway configuration schema and loader (JSON file + environment).
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigError(Exception): ...


class AgentDefaults(BaseModel):
    """Per-user preferences applied to every agent context."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_timezone: Optional[str] = Field(default=None, alias="userTimezone")
    time_format: Optional[str] = Field(default=None, alias="timeFormat")


class AgentsConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    defaults: AgentDefaults = Field(default_factory=AgentDefaults)

    @field_validator("defaults", mode="before")
    @classmethod
    def defaults_or_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class GatewayConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    agents: AgentsConfig = Field(default_factory=AgentsConfig)

    @field_validator("agents", mode="before")
    @classmethod
    def agents_or_empty(cls, value: Any) -> Any:
        return {} if value is None else value


def coerce_config(cfg: Union[GatewayConfig, Mapping[str, Any], None]) -> GatewayConfig:
    """Accept a GatewayConfig or a raw nested mapping; missing levels become defaults."""
    if isinstance(cfg, GatewayConfig):
        return cfg
    try:
        return GatewayConfig.model_validate(dict(cfg or {}))
    except ValidationError as exc:
        raise ConfigError(f"Invalid gateway config: {exc}") from exc


def load_config(path: Optional[Union[str, Path]] = None) -> GatewayConfig:
    """Load the gateway config from ``path`` or $GATEWAY_CONFIG; empty config when neither is set."""
    target = path or os.getenv("GATEWAY_CONFIG", "").strip()
    if not target:
        return GatewayConfig()
    target = Path(target).expanduser()
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config {target}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config {target} is not UTF-8 text: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config {target} is not valid JSON: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Config {target} must contain a JSON object")
    return coerce_config(raw)
