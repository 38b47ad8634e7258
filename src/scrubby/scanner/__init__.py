"""Scanner package exports."""
from .engine import Scanner, ScannerConfig, resolve_overlaps, scan_text
from .entropy import shannon_entropy
from .registry import DetectorRegistry

__all__ = ["Scanner", "ScannerConfig", "scan_text", "resolve_overlaps", "shannon_entropy", "DetectorRegistry"]
