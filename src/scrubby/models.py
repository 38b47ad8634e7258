"""Shared domain models used across Scrubby."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class DetectorKind(str, Enum):
    """Closed set of detector kinds, declared in priority order."""

    EMAIL = "email"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    UUID = "uuid"
    JWT = "jwt"
    TOKEN = "token"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    @property
    def structural(self) -> bool:
        return self is not DetectorKind.TOKEN


_PRIORITY: Dict[DetectorKind, int] = {kind: index for index, kind in enumerate(DetectorKind)}


@dataclass(slots=True)
class Span:
    start: int
    end: int

    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(slots=True)
class Detection:
    kind: DetectorKind
    span: Span
    value: str


@dataclass(frozen=True, slots=True)
class PlaceholderAssignment:
    kind: DetectorKind
    index: Optional[int] = None
    stable_key: Optional[str] = None


@dataclass(slots=True)
class RedactedSegment:
    span: Span
    kind: DetectorKind
    replacement: str
    assignment: PlaceholderAssignment


@dataclass(slots=True)
class RedactionResult:
    text: str | bytes
    counts: Dict[DetectorKind, int] = field(default_factory=lambda: {kind: 0 for kind in DetectorKind})
    segments: List[RedactedSegment] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def summary(self) -> "Summary":
        return Summary(
            emails=self.counts[DetectorKind.EMAIL],
            ips=self.counts[DetectorKind.IPV4] + self.counts[DetectorKind.IPV6],
            uuids=self.counts[DetectorKind.UUID],
            jwts=self.counts[DetectorKind.JWT],
            tokens=self.counts[DetectorKind.TOKEN],
        )


@dataclass(frozen=True, slots=True)
class Summary:
    emails: int = 0
    ips: int = 0
    uuids: int = 0
    jwts: int = 0
    tokens: int = 0

    def total(self) -> int:
        return self.emails + self.ips + self.uuids + self.jwts + self.tokens
