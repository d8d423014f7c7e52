"""Tests for winlog.config — three-layer configuration resolution."""

import io
import json

import pytest

from winlog.config import (
    CONFIG_FILENAME, LoggingConfig, configure, find_config_file, load_json,
    resolve_config,
)
from winlog.errors import InvalidConfiguration
from winlog.handler import DEFAULT_FORMAT
from winlog.levels import DEBUG, ERROR, INFO, SPEED


@pytest.fixture
def config_file(tmp_path):
    """Write a winlog.json and return its path."""
    path = tmp_path / CONFIG_FILENAME
    path.write_text(json.dumps({
        "level": "debug",
        "show_thread": True,
        "encoding": "utf-8",
    }), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Config file helpers
# ---------------------------------------------------------------------------
def test_load_json_missing(tmp_path):
    """Missing files load as an empty dict."""
    assert load_json(tmp_path / "nope.json") == {}


def test_load_json_invalid(tmp_path):
    """Invalid JSON loads as an empty dict."""
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_json(path) == {}


def test_load_json_non_object(tmp_path):
    """A JSON document that is not an object is ignored."""
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_json(path) == {}


def test_load_json_undecodable(tmp_path):
    """A file that is not UTF-8 loads as an empty dict."""
    path = tmp_path / "latin.json"
    path.write_bytes(b'{"level": "\xe9"}')
    assert load_json(path) == {}


def test_load_json_directory(tmp_path):
    """A directory path loads as an empty dict."""
    assert load_json(tmp_path) == {}


def test_find_config_file_walks_up(config_file):
    """find_config_file() finds winlog.json in a parent directory."""
    nested = config_file.parent / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == config_file


def test_find_config_file_none(tmp_path):
    """find_config_file() returns None when nothing is found."""
    empty = tmp_path / "empty"
    empty.mkdir()
    assert find_config_file(empty) is None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------
class TestResolveConfig:
    """Layer precedence: overrides > environment > file > defaults."""

    def test_defaults(self, tmp_path):
        """No layers gives LoggingConfig defaults."""
        cfg = resolve_config(environ={}, path=tmp_path / "none.json")
        assert cfg == LoggingConfig()
        assert cfg.level is INFO
        assert cfg.fmt == DEFAULT_FORMAT

    def test_file_layer(self, config_file):
        """Values come from the config file."""
        cfg = resolve_config(environ={}, path=config_file)
        assert cfg.level is DEBUG
        assert cfg.show_thread is True
        assert cfg.encoding == "utf-8"

    def test_env_beats_file(self, config_file):
        """Environment variables override the file."""
        env = {"WINLOG_LEVEL": "error", "WINLOG_SHOW_THREAD": "no"}
        cfg = resolve_config(environ=env, path=config_file)
        assert cfg.level is ERROR
        assert cfg.show_thread is False
        assert cfg.encoding == "utf-8"

    def test_overrides_beat_env(self, config_file):
        """Keyword overrides win over everything."""
        env = {"WINLOG_LEVEL": "error"}
        cfg = resolve_config({"level": 6, "encoding": None}, environ=env,
                             path=config_file)
        assert cfg.level is SPEED
        assert cfg.encoding == "utf-8"

    def test_start_dir_search(self, config_file):
        """Without a path the file is found from start_dir."""
        cfg = resolve_config(environ={}, start_dir=config_file.parent)
        assert cfg.level is DEBUG

    def test_invalid_level(self, tmp_path):
        """Bad level values raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            resolve_config(environ={"WINLOG_LEVEL": "shouty"},
                           path=tmp_path / "none.json")

    def test_invalid_bool(self, tmp_path):
        """Bad boolean values raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            resolve_config(environ={"WINLOG_SHOW_THREAD": "maybe"},
                           path=tmp_path / "none.json")

    def test_unknown_override(self, tmp_path):
        """Unknown override keys are rejected."""
        with pytest.raises(InvalidConfiguration):
            resolve_config({"colour": True}, environ={},
                           path=tmp_path / "none.json")


# ---------------------------------------------------------------------------
# configure()
# ---------------------------------------------------------------------------
class TestConfigure:
    """configure() initializes a LogManager from resolved config."""

    def test_configure_manager(self, manager, config_file):
        """The manager picks up level and thread flag."""
        buf = io.StringIO()
        result = configure(manager, default_stream=buf, environ={},
                           path=config_file, fmt="%(message)s")
        assert result is manager
        assert manager.verbosity is DEBUG
        manager.log_direct_message(DEBUG, None, "hi")
        assert buf.getvalue().endswith("] - hi\n")

    def test_configure_default_manager(self, reset_default_manager, tmp_path):
        """Without a manager the process-wide one is configured."""
        from winlog.manager import get_manager

        buf = io.StringIO()
        mgr = configure(default_stream=buf, environ={"WINLOG_LEVEL": "warning"},
                        path=tmp_path / "none.json")
        assert mgr is get_manager()
        assert mgr.verbosity.name == "WARNING"
