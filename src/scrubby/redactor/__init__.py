"""Redaction package exports."""
from .engines import RedactionEngine, sanitize
from .placeholders import EphemeralAllocator, PlaceholderAllocator, StableAllocator, allocator_for

__all__ = [
    "RedactionEngine",
    "sanitize",
    "PlaceholderAllocator",
    "EphemeralAllocator",
    "StableAllocator",
    "allocator_for",
]
