"""Utility validation helpers."""
from __future__ import annotations

import hashlib
import secrets


def stable_hash(*parts: str, separator: str = "|") -> str:
    digest = hashlib.sha256()
    digest.update(separator.join(parts).encode("utf-8", errors="ignore"))
    return digest.hexdigest()


def constant_time_compare(lhs: bytes | str, rhs: bytes | str) -> bool:
    """Compare two byte sequences without leaking timing information"""
    if isinstance(lhs, str):
        lhs = lhs.encode("utf-8")
    if isinstance(rhs, str):
        rhs = rhs.encode("utf-8")
    return secrets.compare_digest(lhs, rhs)


__all__ = ["stable_hash", "constant_time_compare"]
