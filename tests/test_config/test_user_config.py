"""Tests for user configuration loading."""

import logging
from pathlib import Path

import pytest

from ergobox.bindings.models import LayerMode
from ergobox.config.models import UserConfigData
from ergobox.config.user_config import create_user_config
from ergobox.core.errors import ConfigError


class TestUserConfigDefaults:
    def test_defaults_without_files(self, isolated_env):
        config = create_user_config()

        assert config.main_config_path is None
        assert config.config.keyboard_name == "custom-ergogen"
        assert config.config.unicode_os == "linux"
        assert config.config.layer_mode == LayerMode.HOLD
        assert config.config.magic_hold_letters == ["A", "B", "C", "P", "V", "X"]
        assert config.get_source("keyboard_name") == "default"
        assert config.get_log_level_int() == logging.WARNING

    def test_search_paths(self, isolated_env, tmp_path):
        config = create_user_config(tmp_path / "cli.yaml")

        assert config.config_paths == [
            (tmp_path / "cli.yaml").resolve(),
            Path.cwd() / "ergobox.yaml",
            tmp_path / "xdg" / "ergobox" / "config.yaml",
        ]


class TestUserConfigFiles:
    def test_cli_path_wins(self, isolated_env, tmp_path):
        (isolated_env / "ergobox.yaml").write_text("keyboard_name: from-cwd\n")
        cli_file = tmp_path / "cli.yaml"
        cli_file.write_text("keyboard_name: from-cli\nlog_level: debug\n")

        config = create_user_config(cli_file)

        assert config.config.keyboard_name == "from-cli"
        assert config.config.log_level == "DEBUG"
        assert config.get_source("keyboard_name") == "file:cli.yaml"
        assert config.get_log_level_int() == logging.DEBUG

    def test_xdg_config(self, isolated_env, tmp_path):
        xdg_file = tmp_path / "xdg" / "ergobox" / "config.yaml"
        xdg_file.parent.mkdir(parents=True)
        xdg_file.write_text("unicode_os: MacOS\nlayer_mode: toggle\n")

        config = create_user_config()

        assert config.main_config_path == xdg_file
        assert config.config.unicode_os == "macos"
        assert config.get("layer_mode") == LayerMode.TOGGLE
        assert config.get("missing", "fallback") == "fallback"

    def test_empty_file_gives_defaults(self, isolated_env):
        (isolated_env / "ergobox.yaml").write_text("")

        assert create_user_config().config.maintainer == "you"

    @pytest.mark.parametrize(
        "content",
        ["keyboard_name: [unclosed", "- a\n- b\n", "log_level: LOUD\n", "unicode_os: dos\n"],
    )
    def test_invalid_files(self, isolated_env, content):
        (isolated_env / "ergobox.yaml").write_text(content)

        with pytest.raises(ConfigError):
            create_user_config()


class TestEnvironmentOverrides:
    def test_environment_beats_file(self, isolated_env, monkeypatch):
        (isolated_env / "ergobox.yaml").write_text("keyboard_name: from-file\n")
        monkeypatch.setenv("ERGOBOX_KEYBOARD_NAME", "from-env")

        config = create_user_config()

        assert config.config.keyboard_name == "from-env"
        assert config.get_source("keyboard_name") == "environment"

    def test_hold_letters_from_environment(self, isolated_env, monkeypatch):
        monkeypatch.setenv("ERGOBOX_MAGIC_HOLD_LETTERS", "x, c,a")

        assert create_user_config().config.magic_hold_letters == ["A", "C", "X"]

    def test_key_registry_path_expanded(self, isolated_env, monkeypatch):
        monkeypatch.setenv("ERGOBOX_KEY_REGISTRY_PATH", "~/keys.yaml")

        path = create_user_config().config.key_registry_path

        assert path is not None
        assert "~" not in str(path)

    def test_settings_model_directly(self, isolated_env):
        with pytest.raises(ValueError):
            UserConfigData(keyboard_name="  ")
