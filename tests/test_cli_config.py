"""Tests for configuration loading and CLI overrides."""

import argparse

import pytest

from cli_config import apply_cli_overrides, build_config, config_path_from, load_config_file
from resolution.config import ConfigError, ResolverConfig


def _args(**kwargs):
    defaults = {"CONFIG": None, "CONDITIONS": None, "EXTENSIONS": None, "PREFER_MODULE": False, "STRICT": False}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


class TestLoadConfigFile:
    """Test YAML/JSON config loading."""

    def test_no_path(self):
        assert load_config_file(None) == {}

    def test_yaml_section(self, tmp_path):
        cfg = tmp_path / "resolvewith.yml"
        cfg.write_text("resolver:\n  conditions: [require, default]\n  prefer_module: true\n")
        assert load_config_file(str(cfg)) == {"conditions": ["require", "default"], "prefer_module": True}

    def test_yaml_without_section(self, tmp_path):
        cfg = tmp_path / "resolvewith.yaml"
        cfg.write_text("strict_descriptors: true\n")
        assert load_config_file(str(cfg)) == {"strict_descriptors": True}

    def test_json(self, tmp_path):
        cfg = tmp_path / "resolvewith.json"
        cfg.write_text('{"resolver": {"extensions": [".js"]}}')
        assert load_config_file(str(cfg)) == {"extensions": [".js"]}

    def test_empty_file(self, tmp_path):
        cfg = tmp_path / "empty.yml"
        cfg.write_text("")
        assert load_config_file(str(cfg)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config_file(str(tmp_path / "nope.yml"))

    def test_invalid_yaml(self, tmp_path):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("resolver: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config_file(str(cfg))

    def test_non_mapping(self, tmp_path):
        cfg = tmp_path / "list.yml"
        cfg.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config_file(str(cfg))

    def test_env_var_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RESOLVEWITH_CONFIG", str(tmp_path / "env.yml"))
        assert config_path_from(_args()) == str(tmp_path / "env.yml")
        assert config_path_from(_args(CONFIG="cli.yml")) == "cli.yml"


class TestResolverConfig:
    """Test mapping validation."""

    def test_defaults(self):
        config = ResolverConfig.from_mapping(None)
        assert config.extensions == (".js", ".mjs", ".cjs", ".json")
        assert config.conditions == ("import", "require", "default")
        assert config.prefer_module is False

    def test_from_mapping(self):
        config = ResolverConfig.from_mapping({
            "extensions": [".ts", ".js"],
            "conditions": "require",
            "project_root": "/app",
            "extra_core_modules": ["electron"],
        })
        assert config.extensions == (".ts", ".js")
        assert config.conditions == ("require",)
        assert config.project_root == "/app"
        assert config.extra_core_modules == ("electron",)

    @pytest.mark.parametrize("data", [
        {"unknown": 1},
        {"extensions": [1]},
        {"extensions": ["js"]},
        {"prefer_module": "yes"},
        {"project_root": 5},
    ])
    def test_invalid(self, data):
        with pytest.raises(ConfigError):
            ResolverConfig.from_mapping(data)


class TestOverrides:
    """Test CLI precedence."""

    def test_no_overrides(self):
        config = ResolverConfig()
        assert apply_cli_overrides(config, _args()) is config

    def test_overrides_win(self, tmp_path):
        cfg = tmp_path / "resolvewith.yml"
        cfg.write_text("resolver:\n  conditions: [import]\n  extensions: ['.js']\n")
        config = build_config(_args(CONFIG=str(cfg), CONDITIONS=["require"], STRICT=True))
        assert config.conditions == ("require",)
        assert config.extensions == (".js",)
        assert config.strict_descriptors is True

    def test_bad_extension_override(self):
        with pytest.raises(ConfigError):
            apply_cli_overrides(ResolverConfig(), _args(EXTENSIONS=["ts"]))
