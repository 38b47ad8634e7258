"""Offline license file format.

A license file is three lines of ASCII::

    SCRUBBY-LICENSE-1
    payload:<base64 payload>
    signature:<base64 Ed25519 signature over the payload bytes>

The payload is UTF-8 ``key=value`` lines in a fixed order: ``email``,
``plan``, ``device_id``, ``issued_at`` and, when the license expires,
``expires``. ``issued_at`` is a UTC timestamp (``2026-01-31T09:30:00Z``) and
``expires`` a calendar date (``2027-01-31``) that stays valid through the end
of that day in UTC. Payloads that are not byte-for-byte canonical are
rejected even when correctly signed, so exactly one encoding exists for any
set of claims.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..exceptions import CryptoError, LicenseError, LicenseErrorKind
from .signing import b64d, b64e

LICENSE_HEADER = "SCRUBBY-LICENSE-1"
PAYLOAD_PREFIX = "payload:"
SIGNATURE_PREFIX = "signature:"

FIELD_ORDER: Tuple[str, ...] = ("email", "plan", "device_id", "issued_at", "expires")
_REQUIRED = FIELD_ORDER[:-1]
_ISSUED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_EXPIRES_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True, slots=True)
class LicenseEnvelope:
    payload: bytes
    signature: bytes


@dataclass(frozen=True, slots=True)
class License:
    email: str
    plan: str
    device_id: str
    issued_at: datetime
    expires: Optional[date]
    signature: bytes = b""

    def canonical_payload(self) -> bytes:
        return canonical_payload(
            email=self.email,
            plan=self.plan,
            device_id=self.device_id,
            issued_at=self.issued_at,
            expires=self.expires,
        )

    def is_expired(self, now: datetime) -> bool:
        """Expired once the UTC calendar date is past ``expires``."""
        if self.expires is None:
            return False
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date() > self.expires


def canonical_payload(
    *,
    email: str,
    plan: str,
    device_id: str,
    issued_at: datetime,
    expires: Optional[date] = None,
) -> bytes:
    values: Dict[str, str] = {
        "email": email,
        "plan": plan,
        "device_id": device_id,
        "issued_at": _format_issued(issued_at),
    }
    if expires is not None:
        values["expires"] = expires.strftime(_EXPIRES_FORMAT)
    lines: List[str] = []
    for key in FIELD_ORDER:
        if key not in values:
            continue
        value = values[key]
        if not value or value != value.strip() or "\n" in value or "\r" in value:
            raise ValueError(f"Invalid value for license field '{key}'")
        lines.append(f"{key}={value}\n")
    return "".join(lines).encode("utf-8")


def parse_envelope(data: bytes | str) -> LicenseEnvelope:
    """Split a license file into payload and signature without trusting either."""
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _parse_error("license file is not valid UTF-8") from exc
    lines = [line.strip() for line in data.splitlines() if line.strip()]
    if not lines:
        raise _parse_error("license file is empty")
    if lines[0] != LICENSE_HEADER:
        raise _parse_error("invalid license file header")
    if len(lines) != 3:
        raise _parse_error("license file must contain a payload and a signature line")
    payload_line, signature_line = lines[1], lines[2]
    if not payload_line.startswith(PAYLOAD_PREFIX):
        raise _parse_error("missing payload prefix")
    if not signature_line.startswith(SIGNATURE_PREFIX):
        raise _parse_error("missing signature prefix")
    try:
        payload = b64d(payload_line[len(PAYLOAD_PREFIX):])
    except CryptoError as exc:
        raise _parse_error("invalid license payload encoding") from exc
    try:
        signature = b64d(signature_line[len(SIGNATURE_PREFIX):])
    except CryptoError as exc:
        raise _parse_error("invalid license signature encoding") from exc
    return LicenseEnvelope(payload=payload, signature=signature)


def parse_claims(envelope: LicenseEnvelope) -> License:
    """Decode the claims of an envelope whose signature was already verified."""
    try:
        text = envelope.payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise _parse_error("license payload is not valid UTF-8") from exc
    values: Dict[str, str] = {}
    for line in text.split("\n"):
        if not line:
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise _parse_error(f"malformed payload line '{key}'")
        if key not in FIELD_ORDER:
            raise _parse_error(f"unknown license field '{key}'")
        if key in values:
            raise _parse_error(f"duplicate license field '{key}'")
        values[key] = value
    missing = [key for key in _REQUIRED if not values.get(key)]
    if missing:
        raise _parse_error(f"missing license fields: {', '.join(missing)}")
    try:
        issued_at = datetime.strptime(values["issued_at"], _ISSUED_FORMAT).replace(tzinfo=timezone.utc)
        expires = (
            datetime.strptime(values["expires"], _EXPIRES_FORMAT).date() if "expires" in values else None
        )
    except ValueError as exc:
        raise _parse_error("invalid license date") from exc
    license = License(
        email=values["email"],
        plan=values["plan"],
        device_id=values["device_id"],
        issued_at=issued_at,
        expires=expires,
        signature=envelope.signature,
    )
    try:
        canonical = license.canonical_payload()
    except ValueError as exc:
        raise _parse_error(str(exc)) from exc
    if canonical != envelope.payload:
        raise _parse_error("license payload is not in canonical form")
    return license


def encode_license(payload: bytes, signature: bytes) -> str:
    return (
        f"{LICENSE_HEADER}\n"
        f"{PAYLOAD_PREFIX}{b64e(payload)}\n"
        f"{SIGNATURE_PREFIX}{b64e(signature)}\n"
    )


def _format_issued(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0).strftime(_ISSUED_FORMAT)


def _parse_error(message: str) -> LicenseError:
    return LicenseError(LicenseErrorKind.PARSE, message)


__all__ = [
    "FIELD_ORDER",
    "LICENSE_HEADER",
    "License",
    "LicenseEnvelope",
    "canonical_payload",
    "encode_license",
    "parse_claims",
    "parse_envelope",
]
