from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from scrubby.cli import main as cli_main
from scrubby.license import LicenseState, VerificationOutcome, current_device_id
from scrubby.version import __version__

runner = CliRunner()

PRO = VerificationOutcome(state=LicenseState.VALID, reason="licensed to dev@example.com")
FREE = VerificationOutcome(state=LicenseState.NO_LICENSE_FILE, reason="no license file")


class FakeClipboard:
    content = ""
    written: list[str] = []

    def __init__(self, backend=None) -> None:
        pass

    def read(self) -> str:
        return type(self).content

    def write(self, text: str) -> None:
        type(self).written.append(text)


@pytest.fixture
def board(monkeypatch):
    FakeClipboard.content = "Contact me at a@b.com from 10.0.0.5"
    FakeClipboard.written = []
    monkeypatch.setattr(cli_main, "SystemClipboard", FakeClipboard)
    return FakeClipboard


def _license(monkeypatch, outcome: VerificationOutcome) -> None:
    monkeypatch.setattr(cli_main, "verify_license", lambda: outcome)


def test_default_command_sanitizes_clipboard(monkeypatch, board):
    _license(monkeypatch, FREE)
    result = runner.invoke(cli_main.app, [])
    assert result.exit_code == 0, result.output
    assert board.written == ["Contact me at <EMAIL> from <IP>"]
    assert "Scrubby cleaned your clipboard:" in result.output
    assert "- Emails: 1" in result.output
    assert "- IPs: 1" in result.output
    assert "Safe to paste." in result.output


def test_paid_flags_rejected_in_free_mode(monkeypatch, board):
    _license(monkeypatch, FREE)
    for flag in ("--stable", "--json"):
        result = runner.invoke(cli_main.app, ["clipboard", flag])
        assert result.exit_code == cli_main.EXIT_LICENSE
        assert "requires a Scrubby Pro license" in result.output
    assert board.written == []


def test_stable_json_with_license(monkeypatch, board):
    _license(monkeypatch, PRO)
    board.content = "a@b.com then A@B.com and c@d.com"
    result = runner.invoke(cli_main.app, ["clipboard", "--stable", "--json"])
    assert result.exit_code == 0, result.output
    assert board.written == ["<EMAIL_1> then <EMAIL_1> and <EMAIL_2>"]
    report = json.loads(result.output.strip().splitlines()[-1])
    assert report == {"emails": 3, "ips": 0, "uuids": 0, "jwts": 0, "tokens": 0, "safe_to_paste": True}


def test_stdin_requires_license(monkeypatch):
    _license(monkeypatch, FREE)
    result = runner.invoke(cli_main.app, ["stdin"], input="a@b.com")
    assert result.exit_code == cli_main.EXIT_LICENSE


def test_stdin_sanitizes_stream(monkeypatch):
    _license(monkeypatch, PRO)
    result = runner.invoke(cli_main.app, ["stdin"], input="Contact me at a@b.com from 10.0.0.5")
    assert result.exit_code == 0, result.output
    assert "Contact me at <EMAIL> from <IP>" in result.output


def test_file_command(monkeypatch, tmp_path: Path):
    _license(monkeypatch, PRO)
    sample = tmp_path / "notes.txt"
    sample.write_text("server ::1 id 123e4567-e89b-42d3-a456-556642440000\n", encoding="utf-8")
    result = runner.invoke(cli_main.app, ["file", str(sample), "--json"])
    assert result.exit_code == 0, result.output
    assert "server <IPV6> id <UUID>" in result.output
    assert '"uuids":1' in result.output


def test_config_rules_applied(monkeypatch, tmp_path: Path):
    _license(monkeypatch, PRO)
    config = tmp_path / "rules.yaml"
    config.write_text("detectors:\n  disabled: [email]\n", encoding="utf-8")
    result = runner.invoke(cli_main.app, ["--config", str(config), "stdin"], input="a@b.com 10.0.0.5")
    assert result.exit_code == 0, result.output
    assert "a@b.com <IP>" in result.output


def test_config_requires_license(monkeypatch, tmp_path: Path):
    _license(monkeypatch, FREE)
    config = tmp_path / "rules.yaml"
    config.write_text("scrub:\n  json_report: true\n", encoding="utf-8")
    result = runner.invoke(cli_main.app, ["--config", str(config), "license"])
    assert result.exit_code == cli_main.EXIT_LICENSE


def test_invalid_config_is_usage_error(monkeypatch, tmp_path: Path):
    _license(monkeypatch, PRO)
    config = tmp_path / "rules.yaml"
    config.write_text("scrub:\n  interval_ms: 5\n", encoding="utf-8")
    result = runner.invoke(cli_main.app, ["--config", str(config), "license"])
    assert result.exit_code == cli_main.EXIT_USAGE
    assert "Invalid configuration" in result.output


def test_clipboard_read_failure(monkeypatch):
    from scrubby.exceptions import ClipboardError

    class Broken(FakeClipboard):
        def read(self) -> str:
            raise ClipboardError("no display")

    _license(monkeypatch, FREE)
    monkeypatch.setattr(cli_main, "SystemClipboard", Broken)
    result = runner.invoke(cli_main.app, ["clipboard"])
    assert result.exit_code == cli_main.EXIT_READ
    assert "no display" in result.output


def test_device_id_command(monkeypatch):
    _license(monkeypatch, FREE)
    result = runner.invoke(cli_main.app, ["device-id"])
    assert result.exit_code == 0
    assert result.output.strip() == current_device_id()


def test_license_command_reports_plan(monkeypatch):
    _license(monkeypatch, PRO)
    result = runner.invoke(cli_main.app, ["license"])
    assert "Plan: pro" in result.output
    assert "stable_placeholders" in result.output


def test_corrupted_license_falls_back_to_free(tmp_path: Path, board, mint):
    license_path = tmp_path / "config" / "scrubby" / "license.key"
    license_path.parent.mkdir(parents=True)
    license_path.write_text(mint().replace("signature:", "signature:AAAA"), encoding="ascii")
    status = runner.invoke(cli_main.app, ["license"])
    assert "Plan: free" in status.output
    assert "signature" in status.output
    result = runner.invoke(cli_main.app, ["clipboard"])
    assert result.exit_code == 0, result.output
    assert board.written == ["Contact me at <EMAIL> from <IP>"]


def test_version_command(monkeypatch):
    _license(monkeypatch, FREE)
    result = runner.invoke(cli_main.app, ["version"])
    assert result.output.strip() == __version__
