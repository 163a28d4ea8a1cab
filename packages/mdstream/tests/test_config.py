"""Tests for mdstream.config"""
import os

import pytest

from mdstream.config import (
    ENV_DIR,
    ENV_STYLE,
    ENV_WIDTH,
    ENV_WRITE_LOG,
    MAX_AUTO_WIDTH,
    RenderConfig,
    StreamConfig,
    get_config_dir,
    get_debug_log_path,
    get_write_log_path,
    resolve_render_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_STYLE, ENV_WIDTH, ENV_DIR, ENV_WRITE_LOG):
        monkeypatch.delenv(name, raising=False)


class TestResolveRenderConfig:
    def test_auto_style_on_tty(self):
        assert resolve_render_config(is_tty=True).style == "dark"

    def test_auto_style_off_tty(self):
        assert resolve_render_config(is_tty=False).style == "notty"

    def test_explicit_style_wins(self, monkeypatch):
        monkeypatch.setenv(ENV_STYLE, "light")
        assert resolve_render_config(style="dark").style == "dark"

    def test_style_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_STYLE, "light")
        assert resolve_render_config().style == "light"

    def test_width_fits_terminal(self):
        assert resolve_render_config(columns=100).width == 100

    def test_auto_width_capped(self):
        assert resolve_render_config(columns=300).width == MAX_AUTO_WIDTH

    def test_zero_width_means_auto(self):
        assert resolve_render_config(width=0, columns=90).width == 90

    def test_unknown_columns_fall_back(self):
        assert resolve_render_config(columns=0).width == 80

    def test_explicit_width_not_capped(self):
        assert resolve_render_config(width=200, columns=80).width == 200

    def test_width_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_WIDTH, "64")
        assert resolve_render_config(columns=100).width == 64

    def test_invalid_env_width(self, monkeypatch):
        monkeypatch.setenv(ENV_WIDTH, "wide")
        with pytest.raises(ValueError, match=ENV_WIDTH):
            resolve_render_config()

    def test_preserve_newlines_passed_through(self):
        assert resolve_render_config(preserve_newlines=True).preserve_newlines


class TestDefaults:
    def test_stream_config_defaults(self):
        config = StreamConfig()
        assert config.render_interval == 0.2
        assert config.min_col_width == 12
        assert config.queue_size == 16

    def test_render_config_is_frozen(self):
        config = RenderConfig()
        with pytest.raises(Exception):
            config.width = 10


class TestPaths:
    def test_config_dir_default(self):
        assert get_config_dir() == os.path.join(os.path.expanduser("~"), ".mdstream")

    def test_config_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv(ENV_DIR, str(tmp_path))
        assert get_debug_log_path() == os.path.join(str(tmp_path), "mdstream-debug.log")

    def test_write_log_disabled_by_default(self):
        assert get_write_log_path() == ""
