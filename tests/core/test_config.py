"""配置读取测试 -- 数值型环境变量容错"""

import importlib

import pytest
from devtaskflow.core import config
from devtaskflow.core.config import read_number_env


class TestReadNumberEnv:
    def test_unset_returns_default(self, monkeypatch):
        monkeypatch.delenv("DEVTASKFLOW_TEST_NUMBER", raising=False)
        assert read_number_env("DEVTASKFLOW_TEST_NUMBER", 7) == 7

    def test_parses_with_cast(self, monkeypatch):
        monkeypatch.setenv("DEVTASKFLOW_TEST_NUMBER", "2.5")
        assert read_number_env("DEVTASKFLOW_TEST_NUMBER", 1, float) == 2.5

    @pytest.mark.parametrize("raw", ["30m", "1.5", "abc"])
    def test_unparseable_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("DEVTASKFLOW_TEST_NUMBER", raw)
        assert read_number_env("DEVTASKFLOW_TEST_NUMBER", 7) == 7

    def test_below_minimum_falls_back(self, monkeypatch):
        monkeypatch.setenv("DEVTASKFLOW_TEST_NUMBER", "0")
        assert read_number_env("DEVTASKFLOW_TEST_NUMBER", 7, minimum=1) == 7


class TestModuleConstants:
    """模块级常量在 import 时读取，非法值不能让 import 失败"""

    @pytest.mark.parametrize(
        ("env_var", "attr", "default"),
        [
            ("DEVTASKFLOW_SESSION_TTL_S", "SESSION_TTL_SECONDS", 1800),
            ("DEVTASKFLOW_SSE_HEARTBEAT_INTERVAL", "SSE_HEARTBEAT_INTERVAL", 15),
        ],
    )
    def test_invalid_value_falls_back_on_import(self, monkeypatch, env_var, attr, default):
        monkeypatch.setenv(env_var, "30m")
        try:
            reloaded = importlib.reload(config)
            assert getattr(reloaded, attr) == default
        finally:
            monkeypatch.delenv(env_var)
            importlib.reload(config)

    def test_valid_session_ttl_override(self, monkeypatch):
        monkeypatch.setenv("DEVTASKFLOW_SESSION_TTL_S", "60")
        try:
            assert importlib.reload(config).SESSION_TTL_SECONDS == 60
        finally:
            monkeypatch.delenv("DEVTASKFLOW_SESSION_TTL_S")
            importlib.reload(config)
