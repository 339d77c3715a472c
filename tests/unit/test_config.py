"""
Unit tests for configuration loading and validation.
Tests cover:
- Loading valid config
- Validation errors for invalid configs
- Fallback to defaults when config is missing
- Telemetry recorder installation from config
"""
import pytest
from pathlib import Path
import tempfile
import yaml

from tempo_client.core.config import (
    ClientConfig,
    ConfigValidationError,
    PacingConfig,
    TelemetryConfig,
    configure_telemetry,
    load_config,
    validate_config,
)
from tempo_client.core.telemetry import TelemetryLevel, get_recorder


def write_yaml(data) -> Path:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        if isinstance(data, str):
            f.write(data)
        else:
            yaml.dump(data, f)
        return Path(f.name)


class TestClientConfig:
    """Test ClientConfig class."""

    def test_create_with_defaults(self):
        """Test creating ClientConfig with no arguments."""
        config = ClientConfig()

        assert config.base_url == "https://api.tempo-db.com"
        assert config.version == "v1"
        assert config.api_key == ""
        assert config.timeout == 30.0
        assert config.reattach_continuation_params is False
        assert config.pacing == PacingConfig()
        assert config.telemetry == TelemetryConfig()

    def test_from_dict(self):
        """Test creating ClientConfig from dictionary."""
        data = {
            "base_url": "http://localhost:8080",
            "version": "v2",
            "api_key": "key",
            "api_secret": "secret",
            "timeout": 5,
            "reattach_continuation_params": True,
            "pacing": {"enabled": True, "steady_rate": 2, "burst": 4},
            "telemetry": {"level": "debug", "format_json": False, "collect_stats": True},
        }

        config = ClientConfig.from_dict(data)

        assert config.base_url == "http://localhost:8080"
        assert config.version == "v2"
        assert config.api_key == "key"
        assert config.api_secret == "secret"
        assert config.timeout == 5
        assert config.reattach_continuation_params is True
        assert config.pacing == PacingConfig(enabled=True, steady_rate=2, burst=4)
        assert config.telemetry == TelemetryConfig(level="debug", format_json=False, collect_stats=True)

    def test_from_dict_with_missing_fields(self):
        """Test from_dict uses defaults for missing fields."""
        config = ClientConfig.from_dict({"api_key": "key"})

        assert config.api_key == "key"
        assert config.base_url == "https://api.tempo-db.com"
        assert config.pacing.steady_rate == 10.0
        assert config.pacing.burst == 20

    def test_from_dict_null_sections(self):
        """Empty YAML sections parse as None and fall back to defaults."""
        config = ClientConfig.from_dict({"pacing": None, "telemetry": None})

        assert config.pacing == PacingConfig()
        assert config.telemetry == TelemetryConfig()

    def test_to_dict(self):
        """Test converting ClientConfig to dictionary."""
        result = ClientConfig(api_key="key").to_dict()

        assert result["api_key"] == "key"
        assert result["pacing"] == {"enabled": False, "steady_rate": 10.0, "burst": 20}
        assert result["telemetry"]["level"] == "info"


class TestValidateConfig:
    """Test configuration validation."""

    def test_valid_config(self):
        """Test validation passes for valid config."""
        validate_config(ClientConfig())

    def test_missing_base_url(self):
        with pytest.raises(ConfigValidationError, match="base_url must be set"):
            validate_config(ClientConfig(base_url=""))

    def test_non_http_base_url(self):
        with pytest.raises(ConfigValidationError, match="http"):
            validate_config(ClientConfig(base_url="ftp://example.com"))

    def test_missing_version(self):
        with pytest.raises(ConfigValidationError, match="version"):
            validate_config(ClientConfig(version=""))

    def test_zero_timeout(self):
        with pytest.raises(ConfigValidationError, match="timeout must be positive"):
            validate_config(ClientConfig(timeout=0))

    def test_negative_steady_rate(self):
        config = ClientConfig(pacing=PacingConfig(steady_rate=-5))
        with pytest.raises(ConfigValidationError, match="steady_rate must be positive"):
            validate_config(config)

    def test_zero_burst(self):
        config = ClientConfig(pacing=PacingConfig(burst=0))
        with pytest.raises(ConfigValidationError, match="burst must be positive"):
            validate_config(config)

    def test_unknown_telemetry_level(self):
        config = ClientConfig(telemetry=TelemetryConfig(level="verbose"))
        with pytest.raises(ConfigValidationError, match="telemetry level"):
            validate_config(config)

    def test_error_is_value_error(self):
        """Callers catching ValueError still see validation errors."""
        with pytest.raises(ValueError):
            validate_config(ClientConfig(timeout=-1))


class TestLoadConfig:
    """Test configuration loading."""

    def test_load_valid_config_file(self):
        """Test loading a valid config file."""
        temp_path = write_yaml({
            "base_url": "https://tsdb.internal",
            "api_key": "key",
            "api_secret": "secret",
            "pacing": {"enabled": True, "steady_rate": 5, "burst": 10},
        })

        try:
            config = load_config(temp_path)

            assert config.base_url == "https://tsdb.internal"
            assert config.api_key == "key"
            assert config.pacing.enabled is True
            assert config.pacing.steady_rate == 5
        finally:
            temp_path.unlink()

    def test_load_missing_file_returns_default(self):
        """Test loading non-existent file returns default config."""
        config = load_config(Path("/tmp/nonexistent_config_file_123456.yml"))

        assert config == ClientConfig()

    def test_load_empty_file_returns_default(self):
        temp_path = write_yaml("")

        try:
            assert load_config(temp_path) == ClientConfig()
        finally:
            temp_path.unlink()

    def test_load_invalid_yaml(self):
        """Test loading invalid YAML raises error."""
        temp_path = write_yaml("invalid: yaml: content:\n  - bad indentation")

        try:
            with pytest.raises(ConfigValidationError, match="Invalid YAML"):
                load_config(temp_path)
        finally:
            temp_path.unlink()

    def test_load_non_mapping(self):
        temp_path = write_yaml(["a", "b"])

        try:
            with pytest.raises(ConfigValidationError, match="must be a dictionary"):
                load_config(temp_path)
        finally:
            temp_path.unlink()

    def test_load_invalid_values(self):
        """Test loaded config is validated."""
        temp_path = write_yaml({"timeout": -1})

        try:
            with pytest.raises(ConfigValidationError, match="timeout"):
                load_config(temp_path)
        finally:
            temp_path.unlink()

    def test_load_default_location(self):
        """Test loading from default location."""
        config = load_config()

        assert isinstance(config, ClientConfig)
        assert config.version == "v1"


class TestConfigureTelemetry:
    """Test telemetry installation from config."""

    def test_installs_global_recorder(self):
        recorder = configure_telemetry(
            TelemetryConfig(level="debug", format_json=False, collect_stats=True)
        )

        assert get_recorder() is recorder
        assert recorder.level == TelemetryLevel.DEBUG
        assert recorder.format_json is False
        assert recorder.collect_stats is True
