"""Utility exports."""
from .checks import constant_time_compare, stable_hash
from .text import to_bytes, to_text

__all__ = [
    "constant_time_compare",
    "stable_hash",
    "to_bytes",
    "to_text",
]
