"""
Configuration module for client settings.

This module provides configuration loading and validation for the service
endpoint, credentials, continuation handling, request pacing and telemetry.
"""
# [CTX:PBI-1:1-8:CFG]

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml

from .exceptions import ConfigValidationError
from .telemetry import TelemetryLevel, TelemetryRecorder, set_recorder

DEFAULT_BASE_URL = "https://api.tempo-db.com"
DEFAULT_VERSION = "v1"


@dataclass
class PacingConfig:
    """Configuration for client-side request pacing."""

    enabled: bool = False
    steady_rate: float = 10.0  # requests per second
    burst: int = 20

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PacingConfig":
        return cls(
            enabled=data.get("enabled", False),
            steady_rate=data.get("steady_rate", 10.0),
            burst=data.get("burst", 20),
        )


@dataclass
class TelemetryConfig:
    """Configuration for the telemetry recorder."""

    level: str = TelemetryLevel.INFO.value
    format_json: bool = True
    collect_stats: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TelemetryConfig":
        return cls(
            level=data.get("level", TelemetryLevel.INFO.value),
            format_json=data.get("format_json", True),
            collect_stats=data.get("collect_stats", False),
        )


@dataclass
class ClientConfig:
    """Configuration for a client instance."""

    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    api_key: str = ""
    api_secret: str = ""
    timeout: float = 30.0  # seconds
    user_agent: str = "tempo-client-python"
    reattach_continuation_params: bool = False
    pacing: PacingConfig = field(default_factory=PacingConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Create ClientConfig from dictionary."""
        return cls(
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            version=data.get("version", DEFAULT_VERSION),
            api_key=data.get("api_key", ""),
            api_secret=data.get("api_secret", ""),
            timeout=data.get("timeout", 30.0),
            user_agent=data.get("user_agent", "tempo-client-python"),
            reattach_continuation_params=data.get("reattach_continuation_params", False),
            pacing=PacingConfig.from_dict(data.get("pacing") or {}),
            telemetry=TelemetryConfig.from_dict(data.get("telemetry") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, e.g. for dumping back to YAML."""
        return asdict(self)


def load_config(config_path: str | Path | None = None) -> ClientConfig:
    """
    Load client configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        ClientConfig, with defaults when the file is missing or empty

    Raises:
        ConfigValidationError: If the file is invalid YAML or fails validation
    """
    if config_path is None:
        config_path = Path(__file__).parents[3] / "config" / "client.yml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        return ClientConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e

    if not data:
        return ClientConfig()

    if not isinstance(data, dict):
        raise ConfigValidationError("Config must be a dictionary")

    config = ClientConfig.from_dict(data)
    validate_config(config)
    return config


def validate_config(config: ClientConfig) -> None:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not config.base_url:
        raise ConfigValidationError("base_url must be set")

    if urlsplit(config.base_url).scheme not in ("http", "https"):
        raise ConfigValidationError(
            f"base_url must be an http(s) URL, got {config.base_url!r}"
        )

    if not config.version:
        raise ConfigValidationError("version must be set")

    if config.timeout <= 0:
        raise ConfigValidationError("timeout must be positive")

    if config.pacing.steady_rate <= 0:
        raise ConfigValidationError("pacing steady_rate must be positive")

    if config.pacing.burst <= 0:
        raise ConfigValidationError("pacing burst must be positive")

    levels = [level.value for level in TelemetryLevel]
    if config.telemetry.level not in levels:
        raise ConfigValidationError(
            f"telemetry level must be one of {levels}, got {config.telemetry.level!r}"
        )


def configure_telemetry(config: TelemetryConfig) -> TelemetryRecorder:
    """
    Build a recorder from configuration and install it globally.

    Args:
        config: Telemetry settings

    Returns:
        The installed recorder
    """
    recorder = TelemetryRecorder(
        level=TelemetryLevel(config.level),
        format_json=config.format_json,
        collect_stats=config.collect_stats,
    )
    set_recorder(recorder)
    return recorder
