"""Redaction engine that swaps detections for placeholders."""
from __future__ import annotations

from typing import List, Sequence

import structlog

from ..models import Detection, RedactedSegment, RedactionResult
from ..scanner import Scanner, resolve_overlaps
from ..utils.text import to_bytes, to_text
from .placeholders import EphemeralAllocator, PlaceholderAllocator, allocator_for

logger = structlog.get_logger(__name__)


class RedactionEngine:
    def __init__(self, allocator: PlaceholderAllocator | None = None) -> None:
        self.allocator = allocator or EphemeralAllocator()

    def redact(self, data: str | bytes, detections: Sequence[Detection]) -> RedactionResult:
        decoded = to_text(data)
        output, result = self._redact_string(decoded, detections)
        result.text = to_bytes(output) if isinstance(data, bytes) else output
        return result

    def _redact_string(self, text: str, detections: Sequence[Detection]) -> tuple[str, RedactionResult]:
        result = RedactionResult(text=text)
        if not detections:
            return text, result
        # input may be raw detector output
        spans = resolve_overlaps(detections)
        parts: List[str] = []
        cursor = 0
        for detection in spans:
            start, end = detection.span.start, detection.span.end
            if start < cursor or end > len(text):
                continue
            replacement, assignment = self.allocator.placeholder(detection.kind, detection.value)
            parts.append(text[cursor:start])
            parts.append(replacement)
            cursor = end
            result.counts[detection.kind] += 1
            result.segments.append(
                RedactedSegment(
                    span=detection.span,
                    kind=detection.kind,
                    replacement=replacement,
                    assignment=assignment,
                )
            )
        parts.append(text[cursor:])
        return "".join(parts), result


def sanitize(
    data: str | bytes,
    *,
    stable: bool = False,
    scanner: Scanner | None = None,
    allocator: PlaceholderAllocator | None = None,
) -> RedactionResult:
    """Scan ``data`` and replace every detection with a placeholder.

    ``allocator`` overrides the one picked from ``stable``; by default a fresh
    allocator is built per call so no mapping outlives it.
    """
    runner = scanner or Scanner()
    detections = runner.scan(data)
    engine = RedactionEngine(allocator or allocator_for(stable))
    result = engine.redact(data, detections)
    logger.debug("redact.complete", replaced=result.total, stable=engine.allocator.stable)
    return result


__all__ = ["RedactionEngine", "sanitize"]
