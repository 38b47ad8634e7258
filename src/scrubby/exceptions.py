"""Exception hierarchy shared by the scanner, license and CLI layers."""
from __future__ import annotations

from enum import Enum


class ScrubbyError(Exception):
    """Base exception for all failures"""


class LicenseErrorKind(str, Enum):
    MISSING = "missing"
    PARSE = "parse"
    SIGNATURE_INVALID = "signature_invalid"
    DEVICE_MISMATCH = "device_mismatch"
    EXPIRED = "expired"


class LicenseError(ScrubbyError):
    """Raised when a license file cannot be trusted"""

    def __init__(self, kind: LicenseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class CryptoError(ScrubbyError):
    """Raised for key material misuse or signature failures"""


class ClipboardError(ScrubbyError):
    """Raised when the clipboard cannot be read or written"""


class ConfigError(ScrubbyError):
    """Raised when a configuration file is unreadable or invalid"""


class FeatureUnavailable(ScrubbyError):
    """Raised when a paid capability is requested without a valid license"""

    def __init__(self, feature: str, reason: str) -> None:
        super().__init__(f"{feature} requires a Scrubby Pro license ({reason})")
        self.feature = feature
        self.reason = reason


__all__ = [
    "ScrubbyError",
    "LicenseErrorKind",
    "LicenseError",
    "CryptoError",
    "ClipboardError",
    "ConfigError",
    "FeatureUnavailable",
]
