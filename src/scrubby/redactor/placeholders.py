"""Placeholder allocation for redacted spans.

Two allocators are provided. :class:`EphemeralAllocator` collapses every
value of a kind to one generic label such as ``<EMAIL>``. :class:`StableAllocator`
numbers values by first appearance (``<EMAIL_1>``, ``<EMAIL_2>``) and hands the
same label back whenever a value repeats. Its mapping lives only as long as
the allocator instance and is never written anywhere.

Labels are wrapped in angle brackets and contain only upper-case letters,
digits and underscores so that none of the detectors can match them again.
"""
from __future__ import annotations

import ipaddress
from typing import Dict, Tuple

from ..models import DetectorKind, PlaceholderAssignment

LABELS: Dict[DetectorKind, str] = {
    DetectorKind.EMAIL: "EMAIL",
    DetectorKind.IPV4: "IP",
    DetectorKind.IPV6: "IPV6",
    DetectorKind.UUID: "UUID",
    DetectorKind.JWT: "JWT",
    DetectorKind.TOKEN: "TOKEN",
}


def normalize_value(kind: DetectorKind, value: str) -> str:
    if kind is DetectorKind.EMAIL:
        return value.casefold()
    if kind is DetectorKind.IPV6:
        try:
            return ipaddress.IPv6Address(value).compressed
        except ValueError:
            return value.lower()
    if kind is DetectorKind.UUID:
        return value.lower()
    return value


def render(assignment: PlaceholderAssignment) -> str:
    label = LABELS[assignment.kind]
    if assignment.index is None:
        return f"<{label}>"
    return f"<{label}_{assignment.index}>"


class PlaceholderAllocator:
    """Base allocator; subclasses decide how values map to indices."""

    stable: bool = False

    def assign(self, kind: DetectorKind, value: str) -> PlaceholderAssignment:  # pragma: no cover - protocol
        raise NotImplementedError

    def placeholder(self, kind: DetectorKind, value: str) -> Tuple[str, PlaceholderAssignment]:
        assignment = self.assign(kind, value)
        return render(assignment), assignment


class EphemeralAllocator(PlaceholderAllocator):
    def assign(self, kind: DetectorKind, value: str) -> PlaceholderAssignment:
        return PlaceholderAssignment(kind=kind)


class StableAllocator(PlaceholderAllocator):
    """Session-scoped mapping of normalized values to per-kind indices."""

    stable = True

    def __init__(self) -> None:
        self._indices: Dict[Tuple[DetectorKind, str], int] = {}
        self._counters: Dict[DetectorKind, int] = {kind: 0 for kind in DetectorKind}

    def assign(self, kind: DetectorKind, value: str) -> PlaceholderAssignment:
        key = normalize_value(kind, value)
        index = self._indices.get((kind, key))
        if index is None:
            self._counters[kind] += 1
            index = self._counters[kind]
            self._indices[(kind, key)] = index
        return PlaceholderAssignment(kind=kind, index=index, stable_key=key)

    @property
    def size(self) -> int:
        return len(self._indices)

    def clear(self) -> None:
        self._indices.clear()
        self._counters = {kind: 0 for kind in DetectorKind}


def allocator_for(stable: bool) -> PlaceholderAllocator:
    return StableAllocator() if stable else EphemeralAllocator()


__all__ = [
    "LABELS",
    "PlaceholderAllocator",
    "EphemeralAllocator",
    "StableAllocator",
    "allocator_for",
    "normalize_value",
    "render",
]
