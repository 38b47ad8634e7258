"""System clipboard access through the platform's command-line utilities."""
from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import structlog

from .exceptions import ClipboardError

logger = structlog.get_logger(__name__)

_TIMEOUT = 5.0


class ClipboardBackend(str, Enum):
    PBPASTE = "pbpaste"
    WL_PASTE = "wl-paste"
    XCLIP = "xclip"
    XSEL = "xsel"


@dataclass(frozen=True, slots=True)
class Availability:
    pb: bool = False
    wl: bool = False
    xclip: bool = False
    xsel: bool = False

    @classmethod
    def detect(cls) -> Availability:
        return cls(
            pb=_has_cmd("pbpaste") and _has_cmd("pbcopy"),
            wl=_has_cmd("wl-paste") and _has_cmd("wl-copy"),
            xclip=_has_cmd("xclip"),
            xsel=_has_cmd("xsel"),
        )


def pick_backend(wayland: bool, x11: bool, available: Availability) -> Optional[ClipboardBackend]:
    if available.pb:
        return ClipboardBackend.PBPASTE
    if wayland and available.wl:
        return ClipboardBackend.WL_PASTE
    if x11 and available.xclip:
        return ClipboardBackend.XCLIP
    if x11 and available.xsel:
        return ClipboardBackend.XSEL
    if available.wl:
        return ClipboardBackend.WL_PASTE
    if available.xclip:
        return ClipboardBackend.XCLIP
    if available.xsel:
        return ClipboardBackend.XSEL
    return None


def detect_backend() -> ClipboardBackend:
    backend = pick_backend(
        wayland="WAYLAND_DISPLAY" in os.environ,
        x11="DISPLAY" in os.environ,
        available=Availability.detect(),
    )
    if backend is None:
        raise ClipboardError(
            "No supported clipboard utilities found. Install pbpaste/pbcopy (macOS), "
            "wl-paste/wl-copy (Wayland), or xclip/xsel (X11)."
        )
    return backend


_READ_COMMANDS = {
    ClipboardBackend.PBPASTE: [["pbpaste"]],
    ClipboardBackend.WL_PASTE: [["wl-paste", "--no-newline"]],
    # fall back to the primary selection when the clipboard selection is empty
    ClipboardBackend.XCLIP: [["xclip", "-selection", "clipboard", "-o"], ["xclip", "-selection", "primary", "-o"]],
    ClipboardBackend.XSEL: [["xsel", "--clipboard", "--output"], ["xsel", "--primary", "--output"]],
}

_WRITE_COMMANDS = {
    ClipboardBackend.PBPASTE: ["pbcopy"],
    ClipboardBackend.WL_PASTE: ["wl-copy"],
    ClipboardBackend.XCLIP: ["xclip", "-selection", "clipboard"],
    ClipboardBackend.XSEL: ["xsel", "--clipboard", "--input"],
}


class SystemClipboard:
    """Reads and writes the desktop clipboard; one subprocess per call."""

    def __init__(self, backend: ClipboardBackend | None = None) -> None:
        self.backend = backend or detect_backend()

    def read(self) -> str:
        commands = _READ_COMMANDS[self.backend]
        error: ClipboardError | None = None
        for command in commands:
            try:
                return _run_read(command)
            except ClipboardError as exc:
                error = exc
                logger.debug("clipboard.read_failed", command=command[0], error=str(exc))
        if error is None:
            raise ClipboardError(f"No clipboard read command configured for {self.backend.value}")
        raise error

    def write(self, text: str) -> None:
        _run_write(_WRITE_COMMANDS[self.backend], text)


def _run_read(command: Sequence[str]) -> str:
    try:
        completed = subprocess.run(list(command), capture_output=True, timeout=_TIMEOUT, check=False)
    except (OSError, subprocess.SubprocessError) as exc:
        raise ClipboardError(f"Failed to read clipboard: {exc}") from exc
    if completed.returncode != 0:
        details = completed.stderr.decode("utf-8", errors="replace").strip()
        suffix = f" Details: {details}" if details else ""
        raise ClipboardError(f"Clipboard read command failed.{suffix}")
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ClipboardError(f"Clipboard content not valid UTF-8: {exc}") from exc


def _run_write(command: List[str], text: str) -> None:
    try:
        completed = subprocess.run(
            command,
            input=text.encode("utf-8"),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise ClipboardError(f"Failed to write clipboard: {exc}") from exc
    if completed.returncode != 0:
        raise ClipboardError("Clipboard write command failed.")


def _has_cmd(name: str) -> bool:
    return shutil.which(name) is not None


__all__ = [
    "Availability",
    "ClipboardBackend",
    "SystemClipboard",
    "detect_backend",
    "pick_backend",
]
