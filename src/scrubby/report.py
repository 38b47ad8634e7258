"""Human and JSON renderings of a redaction summary."""
from __future__ import annotations

import json
from dataclasses import asdict

from .models import Summary


def format_summary(summary: Summary) -> str:
    lines = [
        "Scrubby cleaned your clipboard:",
        f"- Emails: {summary.emails}",
        f"- IPs: {summary.ips}",
        f"- UUIDs: {summary.uuids}",
        f"- JWTs: {summary.jwts}",
        f"- Tokens: {summary.tokens}",
        "Safe to paste.",
    ]
    return "\n".join(lines)


def json_report(summary: Summary) -> str:
    payload = asdict(summary)
    payload["safe_to_paste"] = True
    return json.dumps(payload, separators=(",", ":"))


__all__ = ["format_summary", "json_report"]
