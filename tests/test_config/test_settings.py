"""Tests for configuration settings functionality."""

import pytest
import warnings
from pathlib import Path
from unittest.mock import patch

from stream_temporal.config.settings import (
    Settings,
    get_config,
    set_config
)
from stream_temporal.config.random_state import get_global_seed


@pytest.fixture
def isolated_config_paths(tmp_path, monkeypatch):
    """Run from an empty directory with an empty home, so no config file is found."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


class TestSettingsDataclass:
    """Test suite for the Settings dataclass."""

    def test_settings_default_initialization(self):
        """Test Settings initialization with default values."""
        settings = Settings()

        assert settings.max_list_size == 20
        assert settings.engine == "hypothesis"
        assert settings.max_examples == 100
        assert settings.deadline_ms is None
        assert settings.random_seed is None
        assert settings.verbose is False

    def test_settings_custom_initialization(self):
        """Test Settings initialization with custom values."""
        settings = Settings(max_list_size=5, engine="numpy", random_seed=7, verbose=True)

        assert settings.max_list_size == 5
        assert settings.engine == "numpy"
        assert settings.random_seed == 7
        assert settings.verbose is True

        # Defaults are preserved
        assert settings.max_examples == 100

    def test_settings_warns_on_unknown_engine(self):
        """Test that __post_init__ warns about questionable values."""
        with pytest.warns(UserWarning, match="Engine 'quickcheck' not recognized"):
            Settings(engine="quickcheck")

    def test_settings_warns_on_tiny_lists(self):
        with pytest.warns(UserWarning, match="below minimum"):
            Settings(max_list_size=0)

    def test_valid_settings_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Settings(max_list_size=10, deadline_ms=500)


class TestSettingsFromPreset:
    """Test suite for Settings.from_preset() method."""

    def test_from_preset_default(self):
        settings = Settings.from_preset("default")
        assert settings == Settings()

    def test_from_preset_quick(self):
        """Test the quick preset trades coverage for speed."""
        settings = Settings.from_preset("quick")

        assert settings.max_list_size < Settings().max_list_size
        assert settings.max_examples < Settings().max_examples
        assert settings.deadline_ms == 200

    def test_from_preset_thorough(self):
        settings = Settings.from_preset("thorough")

        assert settings.max_examples >= 1000
        assert settings.max_list_size > Settings().max_list_size

    def test_from_preset_overrides(self):
        settings = Settings.from_preset("quick", random_seed=3, engine="numpy")

        assert settings.random_seed == 3
        assert settings.engine == "numpy"
        assert settings.max_examples == 25

    def test_from_preset_invalid_preset(self):
        """Test error handling for invalid preset name."""
        with pytest.raises(ValueError, match="Unknown preset 'invalid'"):
            Settings.from_preset("invalid")

    def test_from_preset_lists_available_presets(self):
        with pytest.raises(ValueError) as exc_info:
            Settings.from_preset("nonexistent")

        assert "thorough" in str(exc_info.value)


class TestSettingsFromToml:
    """Test suite for Settings.from_toml() method."""

    def test_from_toml_missing_tomllib(self):
        """Test error when tomllib is not available."""
        with patch('stream_temporal.config.settings.tomllib', None):
            with pytest.raises(ImportError, match="tomllib not available"):
                Settings.from_toml("dummy.toml")

    def test_from_toml_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Settings.from_toml(tmp_path / "nonexistent.toml")

    def test_from_toml_nested_structure(self, tmp_path):
        """Test loading TOML with sections."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[sampling]\n'
            'max_list_size = 12\n'
            'engine = "numpy"\n'
            '\n'
            '[testing]\n'
            'max_examples = 40\n'
            'deadline_ms = 300\n'
            '\n'
            '[advanced]\n'
            'random_seed = 11\n'
        )

        settings = Settings.from_toml(path)

        assert settings.max_list_size == 12
        assert settings.engine == "numpy"
        assert settings.max_examples == 40
        assert settings.deadline_ms == 300
        assert settings.random_seed == 11
        assert settings.verbose is False

    def test_from_toml_flat_structure(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('max_examples = 10\nverbose = true\n')

        settings = Settings.from_toml(path)

        assert settings.max_examples == 10
        assert settings.verbose is True
        assert settings.max_list_size == 20

    def test_from_toml_unknown_key(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('alphabet_size = 10\n')

        with pytest.raises(TypeError):
            Settings.from_toml(path)


class TestSettingsToToml:
    """Test suite for Settings.to_toml() method."""

    def test_to_toml_missing_tomli_w(self):
        """Test error when tomli_w is not available."""
        with patch('stream_temporal.config.settings.tomli_w', None):
            with pytest.raises(ImportError, match="tomli_w not available"):
                Settings().to_toml("dummy.toml")

    def test_to_toml_round_trip(self, tmp_path):
        """Test that a written file loads back to equal settings."""
        settings = Settings(max_list_size=9, engine="numpy", deadline_ms=150,
                            random_seed=5, verbose=True)
        path = tmp_path / "out.toml"

        settings.to_toml(path)

        assert Settings.from_toml(path) == settings

    def test_to_toml_omits_unset_values(self, tmp_path):
        """Test None values are left out of the file."""
        path = tmp_path / "out.toml"
        Settings().to_toml(path)

        content = path.read_text()
        assert "random_seed" not in content
        assert "deadline_ms" not in content
        assert Settings.from_toml(path) == Settings()


class TestSettingsUpdate:
    """Test suite for Settings.update() method."""

    def test_update_single_field(self):
        original = Settings(max_list_size=15)
        updated = original.update(max_list_size=30)

        assert original.max_list_size == 15
        assert updated.max_list_size == 30
        assert updated.engine == original.engine

    def test_update_unknown_field(self):
        with pytest.raises(TypeError):
            Settings().update(max_depth=3)


class TestHypothesisSettings:
    """Test suite for Settings.hypothesis_settings()."""

    def test_carries_example_budget(self):
        profile = Settings(max_examples=17, deadline_ms=250).hypothesis_settings()

        assert profile.max_examples == 17
        assert profile.deadline.total_seconds() == pytest.approx(0.25)

    def test_no_deadline(self):
        assert Settings().hypothesis_settings().deadline is None

    def test_seed_derandomizes(self):
        assert Settings(random_seed=1).hypothesis_settings().derandomize is True
        assert Settings().hypothesis_settings().derandomize is False

    def test_overrides_take_precedence(self):
        profile = Settings(max_examples=17).hypothesis_settings(max_examples=3)
        assert profile.max_examples == 3


class TestGlobalConfig:
    """Test suite for get_config() and set_config()."""

    def test_set_config_is_returned(self):
        settings = Settings(max_list_size=7)
        set_config(settings)

        assert get_config() is settings

    def test_set_config_applies_seed(self):
        set_config(Settings(random_seed=1234))
        assert get_global_seed() == 1234

    def test_get_config_falls_back_to_preset(self, isolated_config_paths):
        settings = get_config(preset="quick", reload=True)
        assert settings == Settings.from_preset("quick")

    def test_get_config_reads_local_file(self, isolated_config_paths):
        """Test a stream_temporal.toml in the working directory is picked up."""
        (isolated_config_paths / "stream_temporal.toml").write_text('max_list_size = 4\n')

        assert get_config(reload=True).max_list_size == 4

    def test_get_config_skips_broken_file(self, isolated_config_paths, caplog):
        """Test an unusable config file is logged and skipped."""
        (isolated_config_paths / "stream_temporal.toml").write_text('no_such_field = 1\n')

        with caplog.at_level("WARNING", logger="stream_temporal.config.settings"):
            settings = get_config(reload=True)

        assert settings == Settings.from_preset("default")
        assert "Could not load config" in caplog.text

    def test_get_config_explicit_path(self, tmp_path):
        path = tmp_path / "explicit.toml"
        path.write_text('[sampling]\nengine = "numpy"\n')

        assert get_config(config_path=path, reload=True).engine == "numpy"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()
