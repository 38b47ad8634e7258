"""Scrubby: offline clipboard sanitizer for AI assistants."""
from .features import Feature, FeatureSet, features_for
from .license import LicenseVerifier, TrustConfig, VerificationOutcome, current_device_id, verify_license
from .models import DetectorKind, RedactionResult, Summary
from .redactor import sanitize
from .report import format_summary, json_report
from .scanner import Scanner, ScannerConfig, scan_text
from .version import __version__

__all__ = [
    "DetectorKind",
    "Feature",
    "FeatureSet",
    "LicenseVerifier",
    "RedactionResult",
    "Scanner",
    "ScannerConfig",
    "Summary",
    "TrustConfig",
    "VerificationOutcome",
    "__version__",
    "current_device_id",
    "features_for",
    "format_summary",
    "json_report",
    "sanitize",
    "scan_text",
    "verify_license",
]
