"""Text normalization helpers shared across modules."""
from __future__ import annotations


def to_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="surrogateescape")
    return data


def to_bytes(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


__all__ = ["to_text", "to_bytes"]
