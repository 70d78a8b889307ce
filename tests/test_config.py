# -*- coding: utf-8 -*-
"""Tests for engine configuration."""

import pytest

from biochar_corc.config import CORCConfig, get_config, reset_config, set_config
from biochar_corc.exceptions import ConfigurationError


class TestDefaults:

    def test_default_values(self):
        config = CORCConfig()

        assert config.near_threshold_warning_ratio == 0.6
        assert config.include_formula_steps is True
        assert config.batch_max_workers == 4
        assert config.permanence_type == "BC200+"

    def test_defaults_are_valid(self):
        assert CORCConfig().validate() == CORCConfig()

    @pytest.mark.parametrize("overrides", [
        {"near_threshold_warning_ratio": 0.0},
        {"near_threshold_warning_ratio": 0.8},
        {"batch_max_workers": 0},
        {"permanence_type": "BC50+"},
    ])
    def test_out_of_range_values_rejected(self, overrides):
        with pytest.raises(ConfigurationError):
            CORCConfig(**overrides).validate()


class TestFromEnv:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("BIOCHAR_CORC_BATCH_MAX_WORKERS", "8")
        monkeypatch.setenv("BIOCHAR_CORC_INCLUDE_FORMULA_STEPS", "false")
        monkeypatch.setenv("BIOCHAR_CORC_NEAR_THRESHOLD_WARNING_RATIO", "0.55")
        monkeypatch.setenv("BIOCHAR_CORC_PERMANENCE_TYPE", "BC100+")

        config = CORCConfig.from_env()

        assert config.batch_max_workers == 8
        assert config.include_formula_steps is False
        assert config.near_threshold_warning_ratio == 0.55
        assert config.permanence_type == "BC100+"

    def test_unparseable_number_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("BIOCHAR_CORC_BATCH_MAX_WORKERS", "many")
        assert CORCConfig.from_env().batch_max_workers == 4

    def test_invalid_env_value_rejected(self, monkeypatch):
        monkeypatch.setenv("BIOCHAR_CORC_BATCH_MAX_WORKERS", "0")
        with pytest.raises(ConfigurationError):
            CORCConfig.from_env()


class TestFromYaml:

    def test_top_level_settings(self, tmp_path):
        path = tmp_path / "corc.yaml"
        path.write_text("batch_max_workers: 2\ninclude_formula_steps: false\n", encoding="utf-8")

        config = CORCConfig.from_yaml(path)

        assert config.batch_max_workers == 2
        assert config.include_formula_steps is False

    def test_nested_section(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text(
            "biochar_corc:\n  near_threshold_warning_ratio: 0.5\n",
            encoding="utf-8",
        )
        assert CORCConfig.from_yaml(path).near_threshold_warning_ratio == 0.5

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert CORCConfig.from_yaml(path) == CORCConfig()

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("co2_to_c_ratio: 3.5\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            CORCConfig.from_yaml(path)
        assert exc_info.value.context["unknown_keys"] == ["co2_to_c_ratio"]

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            CORCConfig.from_yaml(path)


class TestSingleton:

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_and_reset(self):
        custom = CORCConfig(batch_max_workers=1)
        set_config(custom)
        assert get_config() is custom

        reset_config()
        assert get_config() is not custom

    def test_set_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError):
            set_config(CORCConfig(batch_max_workers=0))

    def test_to_dict(self):
        assert CORCConfig().to_dict()["permanence_type"] == "BC200+"
