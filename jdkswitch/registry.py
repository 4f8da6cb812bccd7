"""Reading and writing machine-wide environment variables in the Windows registry."""

from __future__ import annotations

import subprocess
import sys

ENV_REGISTRY_PATH = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"

_BROADCAST_SCRIPT = r"""
try {
    # Ask Explorer to reload per-user system parameters.
    [void][System.Reflection.Assembly]::LoadWithPartialName('Microsoft.VisualBasic')
    [Microsoft.VisualBasic.Interaction]::Shell("rundll32 user32.dll,UpdatePerUserSystemParameters", 0, $false, 0)

    # Send WM_SETTINGCHANGE to every top-level window.
    $signature = @'
    [DllImport("user32.dll", SetLastError = true, CharSet = CharSet.Auto)]
    public static extern IntPtr SendMessageTimeout(
        IntPtr hWnd,
        uint Msg,
        UIntPtr wParam,
        string lParam,
        uint fuFlags,
        uint uTimeout,
        out UIntPtr lpdwResult);
'@
    $type = Add-Type -MemberDefinition $signature -Name "Win32SendMessage" -Namespace Win32Functions -PassThru
    $HWND_BROADCAST = [IntPtr]0xffff
    $WM_SETTINGCHANGE = 0x001A
    $result = [UIntPtr]::Zero
    [void]$type::SendMessageTimeout($HWND_BROADCAST, $WM_SETTINGCHANGE, [UIntPtr]::Zero, "Environment", 2, 5000, [ref]$result)

    # Rewriting a machine variable through .NET also triggers a broadcast.
    $temp = [System.Environment]::GetEnvironmentVariable("TEMP", "Machine")
    if ($temp) {
        [System.Environment]::SetEnvironmentVariable("TEMP", $temp, "Machine")
    }

    Write-Host "SUCCESS: 环境变量已成功广播到系统"
} catch {
    Write-Host "ERROR: 广播环境变量失败 - $($_.Exception.Message)"
    exit 1
}
"""


class RegistryError(Exception):
    """Raised when a registry or broadcast operation fails."""


class UnsupportedPlatformError(RegistryError):
    """Raised on platforms without a Windows registry."""


def _winreg(unsupported_message: str):
    if sys.platform != "win32":
        raise UnsupportedPlatformError(unsupported_message)
    try:
        import winreg
    except ImportError as exc:
        raise UnsupportedPlatformError(unsupported_message) from exc
    return winreg


def get_system_env_var(name: str) -> str:
    """Return the raw value of a machine-wide variable, or "" if it is not set."""
    winreg = _winreg("不支持的平台: 只有Windows支持通过注册表获取环境变量")
    try:
        key = winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, ENV_REGISTRY_PATH, 0, winreg.KEY_QUERY_VALUE
        )
    except OSError as exc:
        raise RegistryError(f"打开注册表失败: {exc}") from exc

    with key:
        try:
            value, value_type = winreg.QueryValueEx(key, name)
        except FileNotFoundError:
            return ""
        except OSError as exc:
            raise RegistryError(f"读取环境变量值失败: {exc}") from exc

    if value_type not in (winreg.REG_SZ, winreg.REG_EXPAND_SZ):
        raise RegistryError(f"读取环境变量值失败: 值类型不是字符串 ({value_type})")
    return value


def set_system_env_var(name: str, value: str) -> None:
    """Store a machine-wide variable as a plain string value."""
    winreg = _winreg("不支持的平台: 只有Windows支持通过注册表设置环境变量")
    try:
        key = winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, ENV_REGISTRY_PATH, 0, winreg.KEY_SET_VALUE
        )
    except OSError as exc:
        raise RegistryError(f"打开注册表失败: {exc}") from exc

    with key:
        try:
            winreg.SetValueEx(key, name, 0, winreg.REG_SZ, value)
        except OSError as exc:
            raise RegistryError(f"设置环境变量值失败: {exc}") from exc


def broadcast_environment_change() -> None:
    """Notify running programs that the system environment has changed."""
    if sys.platform != "win32":
        raise UnsupportedPlatformError("不支持的平台: 只有Windows支持广播环境变量更改")

    try:
        completed = subprocess.run(
            ["powershell", "-Command", _BROADCAST_SCRIPT],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise RegistryError(f"广播环境变量失败: {exc} - ") from exc

    output = (completed.stdout or "").strip()
    if completed.returncode != 0 or "ERROR:" in output:
        raise RegistryError(
            f"广播环境变量失败: exit status {completed.returncode} - {output}"
        )