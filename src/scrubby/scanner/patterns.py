"""Built-in detector patterns for Scrubby."""
from __future__ import annotations

import ipaddress
from typing import AbstractSet

import regex

from ..models import DetectorKind
from .entropy import DEFAULT_ENTROPY_THRESHOLD, DEFAULT_MIN_LENGTH, build_allow_list
from .registry import DetectorRegistry, EntropyDetector

EMAIL_PATTERN = r"(?<![\w+.-])[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}(?!\w)(?![.-][A-Za-z0-9])"
IPV4_PATTERN = r"(?<![\d.])(?:(?:25[0-5]|2[0-4]\d|1?\d?\d)\.){3}(?:25[0-5]|2[0-4]\d|1?\d?\d)(?!\.?\d)"
IPV6_PATTERN = r"(?<![\w:.])(?:[0-9A-Fa-f]{0,4}:){2,7}[0-9A-Fa-f]{0,4}(?![\w:])"
UUID_PATTERN = r"(?<![\w-])[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}(?![\w-])"
JWT_PATTERN = r"(?<![\w-])eyJ[A-Za-z0-9_-]{5,}\.[A-Za-z0-9_-]{5,}\.[A-Za-z0-9_-]*(?![\w-])"


def ipv6_valid(value: str) -> bool:
    """Accept real IPv6 literals, rejecting C++/Rust style ``a::`` paths."""
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    groups = [group for group in value.split(":") if group]
    return len(groups) >= 2 or (value.startswith("::") and bool(groups))


def load_builtin_detectors(
    registry: DetectorRegistry,
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    entropy_threshold: float = DEFAULT_ENTROPY_THRESHOLD,
    allow_list: AbstractSet[str] | None = None,
) -> DetectorRegistry:
    registry.register_regex(DetectorKind.EMAIL, EMAIL_PATTERN)
    registry.register_regex(DetectorKind.IPV4, IPV4_PATTERN)
    registry.register_regex(DetectorKind.IPV6, IPV6_PATTERN, validator=ipv6_valid)
    registry.register_regex(DetectorKind.UUID, UUID_PATTERN)
    registry.register_regex(DetectorKind.JWT, JWT_PATTERN)
    registry.register(
        EntropyDetector(
            min_length=min_length,
            threshold=entropy_threshold,
            allow_list=allow_list if allow_list is not None else build_allow_list(),
        )
    )
    return registry


__all__ = ["load_builtin_detectors", "ipv6_valid"]
