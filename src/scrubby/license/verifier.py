"""Offline license verification.

Verification walks a fixed sequence of checks and stops at the first
failure::

    no file                  -> NO_LICENSE_FILE (free mode, not an error)
    malformed envelope       -> INVALID(PARSE)
    bad signature / no key   -> INVALID(SIGNATURE_INVALID)
    malformed signed claims  -> INVALID(PARSE)
    other device             -> INVALID(DEVICE_MISMATCH)
    past expiry              -> INVALID(EXPIRED)
    otherwise                -> VALID

No claim is read before the signature over the payload bytes has been
verified. Every failure is converted into a :class:`VerificationOutcome`;
callers never see an exception and the tool keeps running in free mode.

Debug builds may additionally report ``DEV_OVERRIDE`` through
:mod:`scrubby.license.devoverride`. That module is excluded from release
wheels, and it is only looked up when ``_buildinfo.DEV_BUILD`` is set and
``__debug__`` is true. Release builds are written with ``DEV_BUILD = False``,
so a module dropped into a release install under that name is never imported.
"""
from __future__ import annotations

import importlib
import importlib.util
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, FrozenSet, Optional

import structlog

from .. import _buildinfo
from ..exceptions import CryptoError, LicenseError, LicenseErrorKind
from ..paths import default_license_path
from ..utils.checks import constant_time_compare
from .device import current_device_id
from .document import License, parse_claims, parse_envelope
from .signing import Ed25519Signer, b64d

logger = structlog.get_logger(__name__)

_DEV_OVERRIDE_MODULE = "scrubby.license.devoverride"
DEFAULT_PLANS: FrozenSet[str] = frozenset({"pro"})


class LicenseState(str, Enum):
    NO_LICENSE_FILE = "no_license_file"
    PRESENT_UNVERIFIED = "present_unverified"
    VALID = "valid"
    INVALID = "invalid"
    DEV_OVERRIDE = "dev_override"


@dataclass(frozen=True, slots=True)
class TrustConfig:
    """Immutable verification inputs fixed at process start."""

    public_key: bytes
    accepted_plans: FrozenSet[str] = field(default=DEFAULT_PLANS)

    @classmethod
    def from_b64(cls, value: str, *, accepted_plans: FrozenSet[str] = DEFAULT_PLANS) -> TrustConfig:
        return cls(public_key=b64d(value.strip()) if value.strip() else b"", accepted_plans=accepted_plans)

    @classmethod
    def embedded(cls) -> TrustConfig:
        try:
            return cls.from_b64(_buildinfo.PUBLIC_KEY_B64)
        except CryptoError:
            logger.error("license.embedded_key_invalid")
            return cls(public_key=b"")


@dataclass(frozen=True, slots=True)
class VerificationOutcome:
    state: LicenseState
    license: Optional[License] = None
    error: Optional[LicenseErrorKind] = None
    reason: str = ""

    @property
    def valid(self) -> bool:
        return self.state in (LicenseState.VALID, LicenseState.DEV_OVERRIDE)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LicenseVerifier:
    def __init__(
        self,
        trust: TrustConfig,
        *,
        device_id: Callable[[], str] = current_device_id,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.trust = trust
        self._device_id = device_id
        self._clock = clock

    def verify_path(self, path: Path | None = None) -> VerificationOutcome:
        if __debug__ and _buildinfo.DEV_BUILD:
            override = _dev_override()
            if override is not None:
                return override
        target = path or default_license_path()
        try:
            data = target.read_bytes()
        except FileNotFoundError:
            logger.info("license.missing", path=str(target))
            return VerificationOutcome(
                state=LicenseState.NO_LICENSE_FILE,
                error=LicenseErrorKind.MISSING,
                reason=f"no license file at {target}",
            )
        except OSError as exc:
            logger.warning("license.unreadable", path=str(target), error=str(exc))
            return VerificationOutcome(
                state=LicenseState.INVALID,
                error=LicenseErrorKind.PARSE,
                reason=f"license file unreadable: {exc.strerror or exc}",
            )
        return self.verify_bytes(data)

    def verify_bytes(self, data: bytes | str) -> VerificationOutcome:
        try:
            license = self.check(data)
        except LicenseError as exc:
            logger.warning("license.invalid", error=exc.kind.value, reason=exc.message)
            return VerificationOutcome(state=LicenseState.INVALID, error=exc.kind, reason=exc.message)
        except Exception as exc:
            # a license that cannot be evaluated must never stop sanitizing
            logger.error("license.unexpected_error", error_type=type(exc).__name__, exc_info=True)
            return VerificationOutcome(
                state=LicenseState.INVALID,
                error=LicenseErrorKind.PARSE,
                reason=f"license could not be evaluated ({type(exc).__name__})",
            )
        logger.info("license.verified", plan=license.plan)
        return VerificationOutcome(state=LicenseState.VALID, license=license, reason=f"licensed to {license.email}")

    def check(self, data: bytes | str) -> License:
        """Run every check in order and return the trusted license or raise."""
        envelope = parse_envelope(data)
        try:
            verifier = Ed25519Signer.from_public_bytes(self.trust.public_key)
            verifier.verify(message=envelope.payload, signature=envelope.signature)
        except CryptoError as exc:
            raise LicenseError(LicenseErrorKind.SIGNATURE_INVALID, f"license signature check failed: {exc}") from exc
        license = parse_claims(envelope)
        if license.plan not in self.trust.accepted_plans:
            raise LicenseError(LicenseErrorKind.PARSE, f"unsupported license plan '{license.plan}'")
        if not constant_time_compare(license.device_id, self._device_id()):
            raise LicenseError(LicenseErrorKind.DEVICE_MISMATCH, "license is not valid for this device")
        if license.is_expired(self._clock()):
            raise LicenseError(LicenseErrorKind.EXPIRED, f"license expired on {license.expires.isoformat()}")
        return license


def verify_license(path: Path | None = None, *, trust: TrustConfig | None = None) -> VerificationOutcome:
    """Verify the license at ``path`` (default location) with the embedded key."""
    return LicenseVerifier(trust or TrustConfig.embedded()).verify_path(path)


def _dev_override() -> Optional[VerificationOutcome]:
    if importlib.util.find_spec(_DEV_OVERRIDE_MODULE) is None:
        return None
    module = importlib.import_module(_DEV_OVERRIDE_MODULE)
    return module.override_outcome()


__all__ = [
    "LicenseState",
    "LicenseVerifier",
    "TrustConfig",
    "VerificationOutcome",
    "verify_license",
]
