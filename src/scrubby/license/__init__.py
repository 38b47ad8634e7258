"""License package exports."""
from .device import current_device_id, derive_device_id
from .document import License, parse_claims, parse_envelope
from .verifier import LicenseState, LicenseVerifier, TrustConfig, VerificationOutcome, verify_license

__all__ = [
    "License",
    "LicenseState",
    "LicenseVerifier",
    "TrustConfig",
    "VerificationOutcome",
    "current_device_id",
    "derive_device_id",
    "parse_claims",
    "parse_envelope",
    "verify_license",
]
