"""Backing up and rewriting the machine-wide Java environment variables."""

from __future__ import annotations

import ntpath
import os
import sys
import time
from datetime import datetime

from jdkswitch.registry import (
    RegistryError,
    broadcast_environment_change,
    get_system_env_var,
    set_system_env_var,
)

BACKUP_BASE_DIR = "C:\\jdk-switch"
ORACLE_JAVA_PATH = "C:\\Program Files\\Common Files\\Oracle\\Java\\javapath"

_BACKED_UP_VARIABLES = (
    ("Path", "PATH"),
    ("JAVA_HOME", "JAVA_HOME"),
    ("CLASSPATH", "CLASSPATH"),
)


class SwitchError(Exception):
    """Raised when backing up or switching the Java environment fails."""


def _format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.3f}s"
    return f"{seconds * 1000:.3f}ms"


def _write_text(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def backup_environment_variables(base_dir: str = BACKUP_BASE_DIR) -> str:
    """Save PATH, JAVA_HOME and CLASSPATH under ``base_dir/backup/<timestamp>``.

    Returns the directory the backup was written to.
    """
    try:
        os.makedirs(base_dir, exist_ok=True)
    except OSError as exc:
        raise SwitchError(f"创建备份基础目录失败: {exc}") from exc

    backup_base = os.path.join(base_dir, "backup")
    try:
        os.makedirs(backup_base, exist_ok=True)
    except OSError as exc:
        raise SwitchError(f"创建备份子目录失败: {exc}") from exc

    now = datetime.now()
    timestamp = now.strftime("%Y%m%d_%H%M%S")
    backup_dir = os.path.join(backup_base, timestamp)
    try:
        os.makedirs(backup_dir, exist_ok=True)
    except OSError as exc:
        raise SwitchError(f"创建备份时间目录失败: {exc}") from exc

    written: dict[str, str] = {}
    for registry_name, label in _BACKED_UP_VARIABLES:
        try:
            value = get_system_env_var(registry_name)
        except RegistryError as exc:
            raise SwitchError(f"获取系统{label}环境变量失败: {exc}") from exc
        target = os.path.join(backup_dir, f"{label}.txt")
        try:
            _write_text(target, value)
        except OSError as exc:
            raise SwitchError(f"备份{label}环境变量失败: {exc}") from exc
        written[label] = target

    info_lines = [f"备份时间: {now.strftime('%Y-%m-%d %H:%M:%S')}", "备份文件:"]
    info_lines.extend(f"- {label}: {path}" for label, path in written.items())
    info_file = os.path.join(backup_dir, "backup_info.txt")
    try:
        _write_text(info_file, "\n".join(info_lines) + "\n")
    except OSError as exc:
        raise SwitchError(f"创建备份信息文件失败: {exc}") from exc

    print(f"环境变量已备份到 {backup_dir} 目录")
    return backup_dir


def _is_java_entry(entry: str) -> bool:
    lowered = entry.lower()
    return (
        entry == "%JAVA_HOME%\\bin"
        or "\\java\\" in lowered
        or "\\jdk" in lowered
        or "oracle\\java\\javapath" in lowered
    )


def build_new_path(path_value: str, jdk_path: str) -> str:
    """Drop Java-related and empty entries from a PATH value and prepend the JDK's bin."""
    kept = [
        entry
        for entry in (raw.strip() for raw in path_value.split(";"))
        if entry and not _is_java_entry(entry)
    ]
    jdk_bin = ntpath.normpath(ntpath.join(jdk_path, "bin"))
    return ";".join([jdk_bin, *kept])


def build_classpath(jdk_path: str) -> str:
    """Return the CLASSPATH value pointing at the JDK's dt.jar and tools.jar."""
    dt_jar = ntpath.normpath(ntpath.join(jdk_path, "lib", "dt.jar"))
    tools_jar = ntpath.normpath(ntpath.join(jdk_path, "lib", "tools.jar"))
    return f".;{dt_jar};{tools_jar};"


def _set_variable(name: str, value: str, failure: str) -> None:
    try:
        set_system_env_var(name, value)
    except RegistryError as exc:
        raise SwitchError(f"{failure}: {exc}") from exc


def set_java_home(jdk_path: str) -> None:
    """Point JAVA_HOME, PATH and CLASSPATH at ``jdk_path`` system-wide."""
    if sys.platform != "win32":
        raise SwitchError("当前只支持Windows系统")

    if not os.path.exists(jdk_path):
        raise SwitchError(f"JDK路径不存在: {jdk_path}")

    backup_start = time.perf_counter()
    try:
        backup_environment_variables()
    except SwitchError as exc:
        raise SwitchError(f"备份环境变量失败: {exc}") from exc
    backup_duration = time.perf_counter() - backup_start
    print(f"备份环境变量耗时: {_format_duration(backup_duration)}")

    oracle_path_present = check_oracle_java_path()

    read_start = time.perf_counter()
    try:
        path_system = get_system_env_var("Path")
    except RegistryError as exc:
        raise SwitchError(f"获取系统PATH环境变量失败: {exc}") from exc
    read_duration = time.perf_counter() - read_start
    print(f"读取环境变量耗时: {_format_duration(read_duration)}")

    modify_start = time.perf_counter()
    _set_variable("JAVA_HOME", jdk_path, "设置系统JAVA_HOME失败")
    _set_variable("Path", build_new_path(path_system, jdk_path), "更新系统PATH失败")

    warnings = [
        f"警告: 文件不存在 {ntpath.normpath(ntpath.join(jdk_path, 'lib', jar))}"
        for jar in ("dt.jar", "tools.jar")
        if not os.path.exists(os.path.join(jdk_path, "lib", jar))
    ]

    _set_variable("CLASSPATH", build_classpath(jdk_path), "设置系统CLASSPATH失败")
    modify_duration = time.perf_counter() - modify_start
    print(f"修改环境变量耗时: {_format_duration(modify_duration)}")

    broadcast_start = time.perf_counter()
    try:
        broadcast_environment_change()
    except RegistryError as exc:
        print(f"警告: 环境变量可能需要手动刷新 ({exc})")
    else:
        print("\n环境变量已成功通知系统")
    broadcast_duration = time.perf_counter() - broadcast_start
    print(f"广播环境变量变更耗时: {_format_duration(broadcast_duration)}")

    total = backup_duration + read_duration + modify_duration + broadcast_duration
    print(f"\n总耗时: {_format_duration(total)}")

    if warnings:
        print("\n".join(warnings))

    if oracle_path_present:
        print(f"\n警告: 检测到系统中存在Oracle Java路径({ORACLE_JAVA_PATH})")
        print("此路径可能导致java命令始终使用固定版本，而非您切换后的版本。")
        print("建议执行以下操作：")
        print("1. 从环境变量编辑器中手动删除此路径")
        print(f"2. 或临时重命名该目录: {ORACLE_JAVA_PATH}")


def validate_jdk_path(path: str) -> bool:
    """Return True if ``path`` holds bin/java.exe and bin/javac.exe."""
    return all(
        os.path.exists(os.path.join(path, "bin", executable))
        for executable in ("java.exe", "javac.exe")
    )


def check_oracle_java_path() -> bool:
    """Return True if Oracle's javapath shim is installed or listed in the system PATH."""
    if os.path.exists(ORACLE_JAVA_PATH) and os.path.exists(
        os.path.join(ORACLE_JAVA_PATH, "java.exe")
    ):
        return True

    try:
        path_system = get_system_env_var("Path")
    except RegistryError:
        return False

    return any(
        "oracle\\java\\javapath" in entry.strip().lower()
        for entry in path_system.split(";")
    )