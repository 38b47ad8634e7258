
from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey
)

from scrubby.exceptions import CryptoError

SIGNATURE_LENGTH = 64
KEY_LENGTH = 32


class Ed25519Signer:
    """Thin wrapper around Ed25519 that normalizes error handling"""

    def __init__(self, *, private_key: Ed25519PrivateKey | None = None, public_key: Ed25519PublicKey | None = None) -> None:
        if not private_key and not public_key:
            raise CryptoError("At least one of private_key or public_key is required")
        self._private_key = private_key
        self._public_key = public_key or private_key.public_key()  # type: ignore[union-attr]

    @classmethod
    def generate(cls) -> Ed25519Signer:
        return cls(private_key=Ed25519PrivateKey.generate())

    @classmethod
    def from_private_bytes(cls, data: bytes) -> Ed25519Signer:
        if len(data) != KEY_LENGTH:
            raise CryptoError("Invalid private key length")
        return cls(private_key=Ed25519PrivateKey.from_private_bytes(data))

    @classmethod
    def from_public_bytes(cls, data: bytes) -> Ed25519Signer:
        if not data:
            raise CryptoError("Public key not configured")
        if len(data) != KEY_LENGTH:
            raise CryptoError("Invalid public key length")
        try:
            return cls(public_key=Ed25519PublicKey.from_public_bytes(data))
        except ValueError as exc:
            raise CryptoError("Invalid public key") from exc

    def private_bytes(self) -> bytes:
        if not self._private_key:
            raise CryptoError("No private key material loaded")
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_bytes(self) -> bytes:
        return self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def sign(self, *, message: bytes) -> bytes:
        if not self._private_key:
            raise CryptoError("Signing requested without private key material")
        return self._private_key.sign(message)

    def verify(self, *, message: bytes, signature: bytes) -> None:
        if len(signature) != SIGNATURE_LENGTH:
            raise CryptoError("Invalid signature length")
        try:
            self._public_key.verify(signature, message)
        except InvalidSignature as exc:
            raise CryptoError("Signature verification failed") from exc


def b64e(data: bytes) -> str:
    """Standard base64 encode with padding"""
    return base64.b64encode(data).decode("ascii")


def b64d(value: str) -> bytes:
    """Strict standard base64 decode; rejects characters outside the alphabet"""
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise CryptoError("Invalid base64 encoding") from exc


__all__ = ["Ed25519Signer", "b64e", "b64d", "SIGNATURE_LENGTH", "KEY_LENGTH"]
