from __future__ import annotations

import pytest

from scrubby.license.minting import mint_license
from scrubby.license.signing import Ed25519Signer
from scrubby.license.verifier import TrustConfig

DEVICE_A = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def signer() -> Ed25519Signer:
    return Ed25519Signer.generate()


@pytest.fixture
def trust(signer: Ed25519Signer) -> TrustConfig:
    return TrustConfig(public_key=signer.public_bytes())


@pytest.fixture
def device_a() -> str:
    return DEVICE_A


@pytest.fixture
def mint(signer: Ed25519Signer):
    def _mint(**overrides) -> str:
        params = {"email": "dev@example.com", "device_id": DEVICE_A, "plan": "pro"}
        params.update(overrides)
        return mint_license(signer.private_bytes(), **params)

    return _mint
