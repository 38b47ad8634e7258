"""Device identity used to bind licenses to one machine."""
from __future__ import annotations

import getpass
import os
import socket
import subprocess
import sys
from pathlib import Path
from typing import List, Sequence

import regex

from ..utils.checks import stable_hash

DEVICE_ID_LENGTH = 32

_MACHINE_ID_PATHS = (Path("/etc/machine-id"), Path("/var/lib/dbus/machine-id"))
_HOSTNAME_PATHS = (Path("/etc/hostname"),)
_IOREG_UUID = regex.compile(r'"IOPlatformUUID"\s*=\s*"([^"]+)"')


def derive_device_id(signals: Sequence[str]) -> str:
    """One-way hash of identity signals, truncated to a fixed length."""
    return stable_hash(*(signal.strip() for signal in signals))[:DEVICE_ID_LENGTH]


def current_device_id() -> str:
    return derive_device_id(machine_signals())


def machine_signals() -> List[str]:
    return [
        _machine_id() or "no-machine-id",
        _hostname() or "unknown-host",
        _username() or "unknown-user",
    ]


def _machine_id() -> str | None:
    if sys.platform == "darwin":
        return _darwin_platform_uuid()
    if sys.platform == "win32":
        return _windows_machine_guid()
    return _read_first_existing(_MACHINE_ID_PATHS)


def _hostname() -> str | None:
    return _read_first_existing(_HOSTNAME_PATHS) or os.environ.get("HOSTNAME") or socket.gethostname()


def _username() -> str | None:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.environ.get("USER") or os.environ.get("USERNAME")


def _read_first_existing(paths: Sequence[Path]) -> str | None:
    for path in paths:
        try:
            value = path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            continue
        if value:
            return value
    return None


def _darwin_platform_uuid() -> str | None:
    try:
        completed = subprocess.run(
            ["ioreg", "-rd1", "-c", "IOPlatformExpertDevice"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    match = _IOREG_UUID.search(completed.stdout or "")
    return match.group(1) if match else None


def _windows_machine_guid() -> str | None:
    try:
        import winreg  # type: ignore[import-not-found]

        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, r"SOFTWARE\Microsoft\Cryptography") as key:
            value, _kind = winreg.QueryValueEx(key, "MachineGuid")
    except OSError:
        return None
    return str(value)


__all__ = ["DEVICE_ID_LENGTH", "current_device_id", "derive_device_id", "machine_signals"]
