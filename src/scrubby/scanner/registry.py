"""Detector registry and helpers for scanners."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Callable, Dict, Iterable, Iterator, Mapping, Sequence

import regex

from ..models import Detection, DetectorKind, Span
from .entropy import (
    DEFAULT_ENTROPY_THRESHOLD,
    DEFAULT_MIN_LENGTH,
    TOKEN_RUN_PATTERN,
    build_allow_list,
    is_allow_listed,
    shannon_entropy,
)


class Detector:
    """Protocol-like base class for detectors."""

    kind: DetectorKind

    def detect(self, text: str) -> Iterable[Detection]:  # pragma: no cover - protocol
        raise NotImplementedError


@dataclass(slots=True)
class RegexDetector(Detector):
    """Detector backed by a compiled regular expression."""

    kind: DetectorKind
    pattern: regex.Pattern[str]
    validator: Callable[[str], bool] | None = None

    def detect(self, text: str) -> Iterable[Detection]:
        for match in self.pattern.finditer(text):
            value = match.group()
            if self.validator and not self.validator(value):
                continue
            yield _to_detection(self.kind, match)


@dataclass(slots=True)
class EntropyDetector(Detector):
    """Flags long runs of token characters whose entropy looks random."""

    kind: DetectorKind = DetectorKind.TOKEN
    min_length: int = DEFAULT_MIN_LENGTH
    threshold: float = DEFAULT_ENTROPY_THRESHOLD
    allow_list: AbstractSet[str] = field(default_factory=build_allow_list)
    pattern: regex.Pattern[str] = field(init=False)

    def __post_init__(self) -> None:
        if self.min_length < 1:
            raise ValueError("min_length must be positive")
        self.pattern = regex.compile(TOKEN_RUN_PATTERN % self.min_length)

    def detect(self, text: str) -> Iterable[Detection]:
        for match in self.pattern.finditer(text):
            value = match.group()
            if shannon_entropy(value) < self.threshold:
                continue
            if is_allow_listed(value, self.allow_list):
                continue
            yield _to_detection(self.kind, match)


def _to_detection(kind: DetectorKind, match: regex.Match[str]) -> Detection:
    start, end = match.span()
    return Detection(kind=kind, span=Span(start=start, end=end), value=match.group())


class DetectorRegistry:
    """One detector per kind, iterated in the fixed kind priority order."""

    def __init__(self) -> None:
        self._detectors: Dict[DetectorKind, Detector] = {}

    def register(self, detector: Detector, override: bool = False) -> None:
        if not override and detector.kind in self._detectors:
            raise ValueError(f"Detector already registered: {detector.kind.value}")
        self._detectors[detector.kind] = detector

    def register_regex(
        self,
        kind: DetectorKind,
        pattern: str,
        *,
        flags: regex.RegexFlag | int = regex.UNICODE,
        override: bool = False,
        validator: Callable[[str], bool] | None = None,
    ) -> None:
        compiled = regex.compile(pattern, flags)
        self.register(RegexDetector(kind=kind, pattern=compiled, validator=validator), override=override)

    def unregister(self, kind: DetectorKind) -> None:
        self._detectors.pop(kind, None)

    def get(self, kind: DetectorKind) -> Detector:
        try:
            return self._detectors[kind]
        except KeyError as exc:
            raise KeyError(f"Unknown detector: {kind.value}") from exc

    def all(self) -> Mapping[DetectorKind, Detector]:
        return {kind: self._detectors[kind] for kind in DetectorKind if kind in self._detectors}

    def iter_enabled(self, disabled: Sequence[DetectorKind] = ()) -> Iterator[Detector]:
        skipped = set(disabled)
        for kind, detector in self.all().items():
            if kind not in skipped:
                yield detector

    def clear(self) -> None:
        self._detectors.clear()


__all__ = ["Detector", "RegexDetector", "EntropyDetector", "DetectorRegistry"]
