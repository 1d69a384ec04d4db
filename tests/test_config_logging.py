"""
Tests for environment configuration and logging setup.
"""

import logging

import pytest

from sunlark import config
from sunlark.config import MapErrorPolicy, _int_from_env, _policy_from_env
from sunlark.logger import _SunlarkHandler, configure_logging, get_logger


class TestConfig:
    @pytest.mark.parametrize("raw,policy", [
        ("raise", MapErrorPolicy.RAISE),
        ("stop", MapErrorPolicy.STOP),
        (" STOP ", MapErrorPolicy.STOP),
    ])
    def test_policy_from_env(self, raw, policy):
        assert _policy_from_env(raw) is policy

    def test_bad_policy(self):
        with pytest.raises(ValueError, match="SUNLARK_MAP_ERRORS must be one of"):
            _policy_from_env("ignore")

    def test_int_from_env(self, monkeypatch):
        monkeypatch.setenv("SUNLARK_TEST_DEPTH", "42")
        assert _int_from_env("SUNLARK_TEST_DEPTH", 7) == 42

    def test_int_from_env_default(self, monkeypatch):
        monkeypatch.delenv("SUNLARK_TEST_DEPTH", raising=False)
        assert _int_from_env("SUNLARK_TEST_DEPTH", 7) == 7
        monkeypatch.setenv("SUNLARK_TEST_DEPTH", "  ")
        assert _int_from_env("SUNLARK_TEST_DEPTH", 7) == 7

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_int_from_env_rejects(self, monkeypatch, raw):
        monkeypatch.setenv("SUNLARK_TEST_DEPTH", raw)
        with pytest.raises(ValueError, match="SUNLARK_TEST_DEPTH"):
            _int_from_env("SUNLARK_TEST_DEPTH", 7)

    def test_module_defaults_loaded(self):
        assert isinstance(config.MAP_ERROR_POLICY, MapErrorPolicy)
        assert config.MAX_CALL_DEPTH >= 1
        assert isinstance(config.LOG_LEVEL, str)


class TestLogging:
    def test_get_logger_namespaced(self):
        assert get_logger().name == "sunlark"
        assert get_logger("sunlark.map").name == "sunlark.map"
        assert get_logger("tools").name == "sunlark.tools"

    def test_configure_is_idempotent(self):
        root = configure_logging("DEBUG")
        configure_logging("DEBUG")
        handlers = [h for h in root.handlers if isinstance(h, _SunlarkHandler)]
        assert len(handlers) == 1
        assert root.level == logging.DEBUG

    def test_configure_updates_level(self):
        configure_logging("ERROR")
        assert logging.getLogger("sunlark").level == logging.ERROR
