"""Shared filesystem path helpers for Scrubby."""
from __future__ import annotations

import os
import sys
from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "Scrubby"
_LINUX_APP_NAME = "scrubby"
LICENSE_FILENAME = "license.key"


def runtime_config_dir() -> Path:
    """Return the per-user runtime configuration directory."""
    if sys.platform in ("win32", "darwin"):
        dirs = PlatformDirs(appname=_APP_NAME, appauthor=False, roaming=True)
        return Path(dirs.user_config_path)
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / _LINUX_APP_NAME
    dirs = PlatformDirs(appname=_LINUX_APP_NAME, appauthor=False, roaming=False)
    return Path(dirs.user_config_path)


def default_license_path() -> Path:
    """Return the fixed location of the offline license file."""
    return runtime_config_dir() / LICENSE_FILENAME


def default_config_path() -> Path:
    return runtime_config_dir() / "config.yaml"
