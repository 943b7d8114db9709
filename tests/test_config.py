"""Tests for layered configuration and formatter settings."""

import json
from unittest.mock import patch

import pytest

from numberformat.exceptions import ConfigError, ConfigSourceError, ConfigValidationError
from numberformat.infrastructure.config import (
    ConfigManager,
    ConfigProfile,
    ConfigSchema,
    ConfigValidator,
    DictConfigSource,
    EnvConfigSource,
    FileConfigSource,
    FormatterSettings,
    create_default_schema,
    get_settings,
    load_settings,
    reset_settings,
)
from numberformat.options import FormatStyle, RoundingMode


class TestEnvConfigSource:
    """Tests for EnvConfigSource."""

    def test_load_simple_values(self):
        """Test loading top-level keys."""
        with patch.dict("os.environ", {
            "NUMBERFORMAT_DEFAULT_LOCALE": "de",
            "NUMBERFORMAT_ROUNDING_MODE": "half_up",
        }):
            config = EnvConfigSource().load()

        assert config["default_locale"] == "de"
        assert config["rounding_mode"] == "half_up"

    def test_nested_values(self):
        """Test double underscores nest keys."""
        with patch.dict("os.environ", {
            "NUMBERFORMAT_LOGGING__LEVEL": "DEBUG",
            "NUMBERFORMAT_LOGGING__FORMAT": "json",
        }):
            config = EnvConfigSource().load()

        assert config["logging"] == {"level": "DEBUG", "format": "json"}

    def test_value_parsing(self):
        """Test booleans, numbers, null and JSON."""
        with patch.dict("os.environ", {
            "NUMBERFORMAT_ENABLED": "yes",
            "NUMBERFORMAT_DISABLED": "off",
            "NUMBERFORMAT_COUNT": "12",
            "NUMBERFORMAT_RATIO": "0.5",
            "NUMBERFORMAT_EMPTY": "",
            "NUMBERFORMAT_LIST": '["a", "b"]',
            "NUMBERFORMAT_ONE": "1",
        }):
            config = EnvConfigSource().load()

        assert config["enabled"] is True
        assert config["disabled"] is False
        assert config["count"] == 12
        assert config["ratio"] == 0.5
        assert config["empty"] is None
        assert config["list"] == ["a", "b"]
        assert config["one"] == 1

    def test_other_prefixes_ignored(self):
        """Test variables with another prefix are skipped."""
        with patch.dict("os.environ", {"OTHER_DEFAULT_LOCALE": "fr"}):
            assert "default_locale" not in EnvConfigSource().load()

    def test_custom_prefix(self):
        """Test a custom prefix."""
        with patch.dict("os.environ", {"APP_DEFAULT_LOCALE": "fr"}):
            assert EnvConfigSource(prefix="APP").load()["default_locale"] == "fr"


class TestFileConfigSource:
    """Tests for FileConfigSource."""

    def test_yaml(self, tmp_path):
        """Test YAML files."""
        path = tmp_path / "numberformat.yaml"
        path.write_text("default_locale: fr\nlogging:\n  level: info\n")
        config = FileConfigSource(path).load()
        assert config == {"default_locale": "fr", "logging": {"level": "info"}}

    def test_json(self, tmp_path):
        """Test JSON files."""
        path = tmp_path / "numberformat.json"
        path.write_text(json.dumps({"rounding_mode": "half_up"}))
        assert FileConfigSource(path).load() == {"rounding_mode": "half_up"}

    def test_toml(self, tmp_path):
        """Test TOML files."""
        path = tmp_path / "numberformat.toml"
        path.write_text('default_style = "percent"\n\n[logging]\nformat = "json"\n')
        config = FileConfigSource(path).load()
        assert config["default_style"] == "percent"
        assert config["logging"]["format"] == "json"

    def test_empty_yaml(self, tmp_path):
        """Test an empty YAML file is an empty mapping."""
        path = tmp_path / "numberformat.yaml"
        path.write_text("")
        assert FileConfigSource(path).load() == {}

    def test_missing_optional(self, tmp_path):
        """Test a missing optional file loads nothing."""
        assert FileConfigSource(tmp_path / "missing.yaml").load() == {}

    def test_missing_required(self, tmp_path):
        """Test a missing required file raises."""
        with pytest.raises(ConfigSourceError):
            FileConfigSource(tmp_path / "missing.yaml", required=True).load()

    def test_invalid_required(self, tmp_path):
        """Test a malformed required file raises."""
        path = tmp_path / "numberformat.json"
        path.write_text("{not json")
        with pytest.raises(ConfigSourceError):
            FileConfigSource(path, required=True).load()

    def test_invalid_optional_logs_warning(self, tmp_path, caplog):
        """Test a malformed optional file is skipped with a warning."""
        path = tmp_path / "numberformat.json"
        path.write_text("{not json")
        assert FileConfigSource(path).load() == {}
        assert "Ignoring unreadable config file" in caplog.text

    def test_non_mapping(self, tmp_path):
        """Test top-level lists are rejected."""
        path = tmp_path / "numberformat.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigSourceError):
            FileConfigSource(path).load()


class TestConfigValidator:
    """Tests for schema validation."""

    def test_valid(self):
        """Test a valid configuration has no errors."""
        config = {"default_locale": "en_IN", "rounding_mode": "half_up", "logging": {"level": "debug"}}
        assert ConfigValidator(create_default_schema()).validate(config) == []

    def test_choice_normalization(self):
        """Test choices accept case and dash variants."""
        assert ConfigValidator(create_default_schema()).validate({"rounding_mode": "HALF-UP"}) == []

    def test_bad_choice(self):
        """Test a value outside the choices."""
        errors = ConfigValidator(create_default_schema()).validate({"rounding_mode": "nearest"})
        assert len(errors) == 1
        assert "rounding_mode" in errors[0]

    def test_bad_type(self):
        """Test a value of the wrong type."""
        errors = ConfigValidator(create_default_schema()).validate({"preload_catalogue": 1})
        assert errors == ["Field 'preload_catalogue' should be bool, got int"]

    def test_bad_pattern(self):
        """Test a malformed locale."""
        errors = ConfigValidator(create_default_schema()).validate({"default_locale": "not a locale"})
        assert "default_locale" in errors[0]

    def test_required(self):
        """Test a missing required field."""
        schema = ConfigSchema().add_field("default_locale", str, required=True)
        assert ConfigValidator(schema).validate({}) == ["Required field 'default_locale' is missing"]


class TestConfigManager:
    """Tests for source merging."""

    def test_priority_order(self):
        """Test higher priority sources win."""
        manager = ConfigManager()
        manager.add_source(DictConfigSource({"default_locale": "de"}, priority=200))
        manager.add_source(DictConfigSource({"default_locale": "fr", "rounding_mode": "up"}, priority=50))
        profile = manager.load()
        assert profile.get("default_locale") == "de"
        assert profile.get("rounding_mode") == "up"

    def test_deep_merge(self):
        """Test nested mappings merge key by key."""
        manager = ConfigManager()
        manager.add_source(DictConfigSource({"logging": {"level": "info", "format": "json"}}, priority=1))
        manager.add_source(DictConfigSource({"logging": {"level": "debug"}}, priority=2))
        assert manager.load().to_dict()["logging"] == {"level": "debug", "format": "json"}

    def test_validation_error(self):
        """Test invalid merged config raises ConfigValidationError."""
        manager = ConfigManager().set_schema(create_default_schema())
        manager.add_source(DictConfigSource({"default_style": "fancy"}))
        with pytest.raises(ConfigValidationError) as exc_info:
            manager.load()
        assert len(exc_info.value.errors) == 1

    def test_skip_validation(self):
        """Test validate=False accepts anything."""
        manager = ConfigManager().set_schema(create_default_schema())
        manager.add_source(DictConfigSource({"default_style": "fancy"}))
        assert manager.load(validate=False).get("default_style") == "fancy"

    def test_config_property_loads(self):
        """Test config loads on first access."""
        manager = ConfigManager().add_source(DictConfigSource({"default_locale": "ja"}))
        assert manager.config.get("default_locale") == "ja"


class TestConfigProfile:
    """Tests for typed access."""

    def test_nested_get(self):
        """Test dot-separated keys."""
        profile = ConfigProfile({"logging": {"level": "info"}})
        assert profile.get("logging.level") == "info"
        assert "logging.level" in profile
        assert "logging.format" not in profile

    def test_defaults(self):
        """Test missing keys return the default."""
        profile = ConfigProfile({})
        assert profile.get_str("default_locale", "en") == "en"
        assert profile.get_bool("preload_catalogue", True) is True

    def test_bool_strings(self):
        """Test string booleans."""
        assert ConfigProfile({"flag": "on"}).get_bool("flag") is True
        assert ConfigProfile({"flag": "off"}).get_bool("flag") is False

    def test_required(self):
        """Test a required missing key raises."""
        with pytest.raises(ConfigError):
            ConfigProfile({}).get("default_locale", required=True)


class TestFormatterSettings:
    """Tests for settings loading."""

    def test_defaults(self):
        """Test the built-in defaults."""
        settings = FormatterSettings()
        assert settings.default_locale == "en"
        assert settings.rounding_mode is RoundingMode.HALF_EVEN
        assert settings.default_style is FormatStyle.STANDARD

    def test_from_profile(self):
        """Test conversion from a profile."""
        profile = ConfigProfile({
            "default_locale": "fr",
            "rounding_mode": "half-up",
            "default_style": "percent",
            "logging": {"level": "DEBUG", "format": "json"},
        })
        settings = FormatterSettings.from_profile(profile)
        assert settings.default_locale == "fr"
        assert settings.rounding_mode is RoundingMode.HALF_UP
        assert settings.default_style is FormatStyle.PERCENT
        assert settings.log_level == "debug"
        assert settings.log_format == "json"

    def test_default_options(self):
        """Test settings become per-call defaults."""
        options = FormatterSettings(default_locale="de", rounding_mode=RoundingMode.DOWN).default_options()
        assert options.locale == "de"
        assert options.rounding_mode is RoundingMode.DOWN

    def test_load_from_file(self, tmp_path):
        """Test load_settings with a file."""
        path = tmp_path / "numberformat.yaml"
        path.write_text("default_locale: de\nrounding_mode: half_up\n")
        settings = load_settings(path)
        assert settings.default_locale == "de"
        assert get_settings() is settings

    def test_load_from_directory(self, tmp_path):
        """Test a directory is searched for numberformat.* files."""
        (tmp_path / "numberformat.toml").write_text('default_locale = "ja"\n')
        assert load_settings(tmp_path).default_locale == "ja"

    def test_missing_file(self, tmp_path):
        """Test an explicit missing path raises."""
        with pytest.raises(ConfigSourceError):
            load_settings(tmp_path / "missing.yaml")

    def test_env_overrides_file(self, tmp_path):
        """Test environment variables win over files."""
        path = tmp_path / "numberformat.yaml"
        path.write_text("default_locale: de\n")
        with patch.dict("os.environ", {"NUMBERFORMAT_DEFAULT_LOCALE": "fr"}):
            assert load_settings(path).default_locale == "fr"

    def test_overrides_win(self):
        """Test explicit overrides win over the environment."""
        with patch.dict("os.environ", {"NUMBERFORMAT_DEFAULT_LOCALE": "fr"}):
            assert load_settings(overrides={"default_locale": "ko"}).default_locale == "ko"

    def test_config_env_var(self, tmp_path):
        """Test NUMBERFORMAT_CONFIG names the file."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"default_locale": "es"}))
        with patch.dict("os.environ", {"NUMBERFORMAT_CONFIG": str(path)}):
            assert load_settings().default_locale == "es"

    def test_invalid_env(self):
        """Test invalid environment values fail validation."""
        with patch.dict("os.environ", {"NUMBERFORMAT_ROUNDING_MODE": "sideways"}):
            with pytest.raises(ConfigValidationError):
                load_settings()

    def test_get_settings_caches(self):
        """Test get_settings loads once until reset."""
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first
