"""Developer license override for local debug builds.

This file is excluded from wheels and sdists (see ``pyproject.toml``), so
released installs cannot reach it. Setting ``SCRUBBY_LICENSE=DEV`` in a
source checkout unlocks paid features without a signed license.
"""
from __future__ import annotations

import os
from typing import Optional

import structlog

from .verifier import LicenseState, VerificationOutcome

ENV_VAR = "SCRUBBY_LICENSE"
_TRIGGER = "DEV"

logger = structlog.get_logger(__name__)


def override_outcome() -> Optional[VerificationOutcome]:
    if os.environ.get(ENV_VAR, "").strip() != _TRIGGER:
        return None
    logger.warning("license.dev_override", env=ENV_VAR)
    return VerificationOutcome(
        state=LicenseState.DEV_OVERRIDE,
        reason=f"developer override ({ENV_VAR}={_TRIGGER})",
    )


__all__ = ["ENV_VAR", "override_outcome"]
