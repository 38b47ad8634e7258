from datetime import datetime, timezone

from hypothesis import given, strategies as st

from scrubby.exceptions import LicenseErrorKind
from scrubby.license import LicenseState, LicenseVerifier, TrustConfig, parse_envelope
from scrubby.license.document import encode_license
from scrubby.license.minting import mint_license
from scrubby.license.signing import Ed25519Signer

_DEVICE = "0123456789abcdef0123456789abcdef"
_signer = Ed25519Signer.generate()
_verifier = LicenseVerifier(
    TrustConfig(public_key=_signer.public_bytes()),
    device_id=lambda: _DEVICE,
    clock=lambda: datetime(2026, 6, 1, tzinfo=timezone.utc),
)
_envelope = parse_envelope(
    mint_license(
        _signer.private_bytes(),
        email="dev@example.com",
        device_id=_DEVICE,
        issued_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
)


def _flip(data: bytes, bit: int) -> bytes:
    mutated = bytearray(data)
    mutated[bit // 8] ^= 1 << (bit % 8)
    return bytes(mutated)


def test_untampered_license_is_valid():
    assert _verifier.verify_bytes(encode_license(_envelope.payload, _envelope.signature)).state is LicenseState.VALID


@given(st.integers(min_value=0, max_value=64 * 8 - 1))
def test_any_signature_bit_flip_rejected(bit):
    tampered = encode_license(_envelope.payload, _flip(_envelope.signature, bit))
    assert _verifier.verify_bytes(tampered).error is LicenseErrorKind.SIGNATURE_INVALID


@given(st.data())
def test_any_payload_bit_flip_rejected(data):
    bit = data.draw(st.integers(min_value=0, max_value=len(_envelope.payload) * 8 - 1))
    tampered = encode_license(_flip(_envelope.payload, bit), _envelope.signature)
    assert _verifier.verify_bytes(tampered).error is LicenseErrorKind.SIGNATURE_INVALID
