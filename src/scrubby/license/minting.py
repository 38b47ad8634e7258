# Issue signed license files; used by the signing tool, never by the scrubber itself.
from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from .document import canonical_payload, encode_license
from .signing import Ed25519Signer, b64e


def generate_keypair() -> Tuple[str, str]:
    """Return ``(private_b64, public_b64)`` for a fresh Ed25519 key pair."""
    signer = Ed25519Signer.generate()
    return b64e(signer.private_bytes()), b64e(signer.public_bytes())


def mint_license(
    private_key: bytes,
    *,
    email: str,
    device_id: str,
    plan: str = "pro",
    issued_at: Optional[datetime] = None,
    expires: Optional[date] = None,
) -> str:
    signer = Ed25519Signer.from_private_bytes(private_key)
    payload = canonical_payload(
        email=email,
        plan=plan,
        device_id=device_id,
        issued_at=issued_at or datetime.now(timezone.utc),
        expires=expires,
    )
    return encode_license(payload, signer.sign(message=payload))


def write_license(target: Path, content: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="ascii")


__all__ = ["generate_keypair", "mint_license", "write_license"]
