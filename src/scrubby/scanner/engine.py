"""Scanner orchestration logic."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import structlog

from ..models import Detection, DetectorKind
from ..utils.text import to_text
from .entropy import DEFAULT_ENTROPY_THRESHOLD, DEFAULT_MIN_LENGTH, build_allow_list
from .patterns import load_builtin_detectors
from .registry import Detector, DetectorRegistry

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ScannerConfig:
    disabled: Sequence[DetectorKind] = field(default_factory=tuple)
    min_token_length: int = DEFAULT_MIN_LENGTH
    entropy_threshold: float = DEFAULT_ENTROPY_THRESHOLD
    allow_list: Sequence[str] = field(default_factory=tuple)


class Scanner:
    """Run registered detectors against input data."""

    def __init__(self, registry: DetectorRegistry | None = None, config: ScannerConfig | None = None) -> None:
        self.config = config or ScannerConfig()
        self.registry = registry or DetectorRegistry()
        if not self.registry.all():
            load_builtin_detectors(
                self.registry,
                min_length=self.config.min_token_length,
                entropy_threshold=self.config.entropy_threshold,
                allow_list=build_allow_list(self.config.allow_list),
            )

    def scan(self, data: str | bytes) -> List[Detection]:
        text = to_text(data)
        detections: List[Detection] = []
        for detector in self._resolve_detectors():
            detections.extend(detector.detect(text))
        resolved = resolve_overlaps(detections)
        logger.debug("scan.complete", candidates=len(detections), resolved=len(resolved))
        return resolved

    def _resolve_detectors(self) -> Iterable[Detector]:
        return self.registry.iter_enabled(self.config.disabled)


def scan_text(
    data: str | bytes,
    *,
    scanner: Scanner | None = None,
    config: ScannerConfig | None = None,
) -> List[Detection]:
    runner = scanner or Scanner(config=config)
    return runner.scan(data)


def resolve_overlaps(detections: Sequence[Detection]) -> List[Detection]:
    """Pick a non-overlapping subset of ``detections`` ordered by start offset.

    Structural kinds beat the entropy token detector. Within the same class
    the longer match wins, then the earlier start, then the kind priority.
    """
    ranked = sorted(
        detections,
        key=lambda det: (
            0 if det.kind.structural else 1,
            -det.span.length(),
            det.span.start,
            det.kind.priority,
        ),
    )
    taken: List[Detection] = []
    for candidate in ranked:
        if candidate.span.length() <= 0:
            continue
        if any(candidate.span.overlaps(kept.span) for kept in taken):
            continue
        taken.append(candidate)
    return sorted(taken, key=lambda det: det.span.start)


__all__ = ["Scanner", "ScannerConfig", "scan_text", "resolve_overlaps"]
