import logging

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("SCRUBBY_LICENSE", raising=False)
    monkeypatch.delenv("SCRUBBY_LOG_LEVEL", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    yield
    # the CLI points log handlers at the runner's streams, which close after each invoke
    logging.basicConfig(force=True, handlers=[logging.NullHandler()])
