from pathlib import Path

import pytest

from scrubby.config import AppConfig, dump_default_config, load_config
from scrubby.exceptions import ConfigError
from scrubby.models import DetectorKind
from scrubby.paths import default_config_path, default_license_path
from scrubby.scanner import Scanner

SAMPLE = """
logging:
  level: debug
scrub:
  stable_placeholders: true
  interval_ms: 250
detectors:
  disabled: [email, ipv6]
  token:
    min_length: 24
    allow_list: [kubernetes]
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "scrubby.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_path():
    config = load_config()
    assert config == AppConfig()
    assert config.scrub.interval_ms == 750
    assert config.logging.normalized_level() == "WARNING"


def test_load_config_from_yaml(tmp_path):
    config = load_config(_write(tmp_path, SAMPLE))
    assert config.logging.normalized_level() == "DEBUG"
    assert config.scrub.stable_placeholders is True
    assert config.scrub.interval_ms == 250
    scanner_config = config.detectors.scanner_config()
    assert scanner_config.disabled == (DetectorKind.EMAIL, DetectorKind.IPV6)
    assert scanner_config.min_token_length == 24
    assert scanner_config.allow_list == ("kubernetes",)


def test_config_drives_scanner(tmp_path):
    config = load_config(_write(tmp_path, SAMPLE))
    scanner = Scanner(config=config.detectors.scanner_config())
    assert [det.kind for det in scanner.scan("a@b.com 10.0.0.5")] == [DetectorKind.IPV4]


@pytest.mark.parametrize(
    "content",
    [
        "scrub:\n  interval_ms: 50\n",
        "logging:\n  level: chatty\n",
        "detectors:\n  disabled: [phone]\n",
        "detectors:\n  token:\n    min_length: 2\n",
        "scrub: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, content):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, content))


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_empty_file_means_defaults(tmp_path):
    assert load_config(_write(tmp_path, "")) == AppConfig()


def test_dump_default_config_round_trips(tmp_path):
    target = tmp_path / "nested" / "config.yaml"
    dump_default_config(target)
    assert load_config(target) == AppConfig()


def test_paths_follow_xdg(tmp_path):
    assert default_license_path() == tmp_path / "config" / "scrubby" / "license.key"
    assert default_config_path() == tmp_path / "config" / "scrubby" / "config.yaml"
