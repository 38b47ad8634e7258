import subprocess

import pytest

from scrubby import clipboard
from scrubby.clipboard import Availability, ClipboardBackend, SystemClipboard, detect_backend, pick_backend
from scrubby.exceptions import ClipboardError


@pytest.mark.parametrize(
    ("wayland", "x11", "available", "expected"),
    [
        (False, False, Availability(pb=True, wl=True), ClipboardBackend.PBPASTE),
        (True, True, Availability(wl=True, xclip=True), ClipboardBackend.WL_PASTE),
        (False, True, Availability(wl=True, xclip=True), ClipboardBackend.XCLIP),
        (False, True, Availability(wl=True, xsel=True), ClipboardBackend.XSEL),
        (True, False, Availability(xclip=True), ClipboardBackend.XCLIP),
        (False, False, Availability(xsel=True), ClipboardBackend.XSEL),
        (False, False, Availability(), None),
    ],
)
def test_pick_backend(wayland, x11, available, expected):
    assert pick_backend(wayland, x11, available) is expected


def test_detect_backend_without_tools(monkeypatch):
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
    with pytest.raises(ClipboardError, match="No supported clipboard utilities"):
        detect_backend()


class _FakeRun:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, command, **kwargs):
        self.calls.append((command, kwargs))
        returncode, stdout = self.results.pop(0)
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=b"")


def test_read_falls_back_to_primary_selection(monkeypatch):
    fake = _FakeRun((1, b""), (0, b"from primary"))
    monkeypatch.setattr(clipboard.subprocess, "run", fake)
    assert SystemClipboard(ClipboardBackend.XCLIP).read() == "from primary"
    assert [call[0][-2] for call in fake.calls] == ["clipboard", "primary"]


def test_read_failure_raises(monkeypatch):
    monkeypatch.setattr(clipboard.subprocess, "run", _FakeRun((1, b"")))
    with pytest.raises(ClipboardError):
        SystemClipboard(ClipboardBackend.WL_PASTE).read()


def test_read_without_commands_raises(monkeypatch):
    monkeypatch.setitem(clipboard._READ_COMMANDS, ClipboardBackend.XSEL, [])
    with pytest.raises(ClipboardError, match="xsel"):
        SystemClipboard(ClipboardBackend.XSEL).read()


def test_read_rejects_invalid_utf8(monkeypatch):
    monkeypatch.setattr(clipboard.subprocess, "run", _FakeRun((0, b"\xff")))
    with pytest.raises(ClipboardError, match="UTF-8"):
        SystemClipboard(ClipboardBackend.PBPASTE).read()


def test_write_pipes_text(monkeypatch):
    fake = _FakeRun((0, None))
    monkeypatch.setattr(clipboard.subprocess, "run", fake)
    SystemClipboard(ClipboardBackend.XSEL).write("hello <EMAIL>")
    command, kwargs = fake.calls[0]
    assert command == ["xsel", "--clipboard", "--input"]
    assert kwargs["input"] == b"hello <EMAIL>"


def test_write_failure_raises(monkeypatch):
    monkeypatch.setattr(clipboard.subprocess, "run", _FakeRun((1, None)))
    with pytest.raises(ClipboardError):
        SystemClipboard(ClipboardBackend.PBPASTE).write("x")
