# jdkswitch

A small library for switching the system-wide JDK on Windows. It reads and
writes machine environment variables in the registry. Before a switch it backs
up the current `PATH`, `JAVA_HOME` and `CLASSPATH`. It then points all three at
a chosen JDK.

Writing machine environment variables needs an elevated (administrator)
process. Error and status messages are in Chinese.

## Installation

```
pip install .
```

## Modules

### `jdkswitch.registry`

- `get_system_env_var(name)` returns the raw value of a machine-wide variable
  from `HKEY_LOCAL_MACHINE\SYSTEM\CurrentControlSet\Control\Session Manager\Environment`.
  If the variable is not set, it returns `""`. Variable references such as
  `%SystemRoot%` are left unexpanded.
- `set_system_env_var(name, value)` stores a variable as a plain string value.
- `broadcast_environment_change()` runs a PowerShell script. The script tells
  running programs that the environment has changed.

If a registry or broadcast step fails, these functions raise `RegistryError`.
On any platform other than Windows they raise `UnsupportedPlatformError`, which
is a subclass of `RegistryError`.

### `jdkswitch.switch`

- `validate_jdk_path(path)` returns `True` if `path` contains both
  `bin\java.exe` and `bin\javac.exe`.
- `build_new_path(path_value, jdk_path)` prepares a new `PATH` value:
  - It splits `path_value` on `;` and trims each entry.
  - It drops empty entries, `%JAVA_HOME%\bin`, and any entry containing
    `\java\`, `\jdk` or `oracle\java\javapath` (case-insensitive).
  - It puts `<jdk_path>\bin` first.
- `build_classpath(jdk_path)` returns
  `.;<jdk_path>\lib\dt.jar;<jdk_path>\lib\tools.jar;`.
- `backup_environment_variables(base_dir=r"C:\jdk-switch")` writes
  `PATH.txt`, `JAVA_HOME.txt`, `CLASSPATH.txt` and `backup_info.txt` to
  `<base_dir>\backup\YYYYMMDD_HHMMSS\`. It returns that directory.
- `check_oracle_java_path()` returns `True` in either of two cases:
  - `C:\Program Files\Common Files\Oracle\Java\javapath\java.exe` exists;
  - the system `PATH` lists that javapath directory.
- `set_java_home(jdk_path)` makes the switch:
  1. It backs up the current variables.
  2. It sets `JAVA_HOME`, `PATH` and `CLASSPATH` as described above.
  3. It broadcasts the change and prints how long each step took.

  It prints a warning if `dt.jar` or `tools.jar` is missing, or if the Oracle
  javapath shim is present. A failed broadcast is reported as a warning, not
  raised. Other failures raise `SwitchError`. It also raises `SwitchError` on
  any platform other than Windows, or if `jdk_path` does not exist.

## Example

```python
from jdkswitch.switch import build_classpath, build_new_path, set_java_home, validate_jdk_path

jdk = r"C:\Program Files\Java\jdk-17.0.2"
print(build_new_path(r"C:\Windows;C:\Java\jdk8\bin", jdk))
# C:\Program Files\Java\jdk-17.0.2\bin;C:\Windows
print(build_classpath(jdk))

if validate_jdk_path(jdk):
    set_java_home(jdk)
```

After switching, open a new command window or log in again so that the new
Java version takes effect.

## What this package does not do

This package has no command-line program or interactive mode. It also does not
keep a configuration file of installed JDK versions. The caller must provide
the JDK directory to switch to.