import subprocess
import sys

import pytest

from jdkswitch.registry import (
    RegistryError,
    UnsupportedPlatformError,
    broadcast_environment_change,
    get_system_env_var,
    set_system_env_var,
)


@pytest.fixture
def non_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")


@pytest.fixture
def windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")


def test_get_unsupported_off_windows(non_windows):
    with pytest.raises(UnsupportedPlatformError, match="只有Windows支持通过注册表获取环境变量"):
        get_system_env_var("Path")


def test_set_unsupported_off_windows(non_windows):
    with pytest.raises(UnsupportedPlatformError, match="只有Windows支持通过注册表设置环境变量"):
        set_system_env_var("JAVA_HOME", "C:\\Test\\JDK8")


def test_broadcast_unsupported_off_windows(non_windows):
    with pytest.raises(UnsupportedPlatformError, match="只有Windows支持广播环境变量更改"):
        broadcast_environment_change()


def test_unsupported_platform_is_registry_error(non_windows):
    with pytest.raises(RegistryError):
        get_system_env_var("CLASSPATH")


def test_broadcast_success_runs_powershell(windows, monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append(args)
        return subprocess.CompletedProcess(args, 0, stdout="SUCCESS: done\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert broadcast_environment_change() is None
    assert len(calls) == 1
    assert calls[0][:2] == ["powershell", "-Command"]
    assert "WM_SETTINGCHANGE" in calls[0][2]


def test_broadcast_reports_error_marker(windows, monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="ERROR: denied\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(RegistryError, match="ERROR: denied"):
        broadcast_environment_change()


def test_broadcast_reports_nonzero_exit(windows, monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 1, stdout="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(RegistryError, match="广播环境变量失败"):
        broadcast_environment_change()


def test_broadcast_reports_missing_shell(windows, monkeypatch):
    def fake_run(args, **kwargs):
        raise FileNotFoundError(2, "not found", "powershell")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(RegistryError, match="广播环境变量失败"):
        broadcast_environment_change()