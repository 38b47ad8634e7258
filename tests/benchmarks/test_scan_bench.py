import string

import pytest

from scrubby.redactor import sanitize
from scrubby.scanner import scan_text

TOKEN = "".join(string.ascii_letters[i] + string.digits[i % 10] for i in range(20))
LINE = f"alice@example.com 10.0.0.5 fe80::1 123e4567-e89b-42d3-a456-556642440000 {TOKEN} plain words here"


@pytest.mark.bench
def test_scan_throughput(benchmark):
    text = "\n".join([LINE] * 100)
    benchmark(lambda: scan_text(text))


@pytest.mark.bench
def test_sanitize_throughput(benchmark):
    text = "\n".join([LINE] * 100)
    result = benchmark(lambda: sanitize(text, stable=True))
    assert result.summary().emails == 100
