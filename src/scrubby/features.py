"""Feature gate: license outcome to capability set."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto
from typing import Optional

from .exceptions import FeatureUnavailable
from .license.verifier import VerificationOutcome


class Feature(Flag):
    CLIPBOARD = auto()
    WATCH = auto()
    TEXT_SUMMARY = auto()
    DEVICE_ID = auto()
    STABLE_PLACEHOLDERS = auto()
    JSON_REPORT = auto()
    CONFIG_RULES = auto()
    FILE_INPUT = auto()


FREE_FEATURES = Feature.CLIPBOARD | Feature.WATCH | Feature.TEXT_SUMMARY | Feature.DEVICE_ID
PAID_FEATURES = Feature.STABLE_PLACEHOLDERS | Feature.JSON_REPORT | Feature.CONFIG_RULES | Feature.FILE_INPUT

FEATURE_NAMES = {
    Feature.STABLE_PLACEHOLDERS: "--stable",
    Feature.JSON_REPORT: "--json",
    Feature.CONFIG_RULES: "--config",
    Feature.FILE_INPUT: "file/stdin input",
}


@dataclass(frozen=True, slots=True)
class FeatureSet:
    flags: Feature
    reason: str = ""
    licensed_to: Optional[str] = None

    @property
    def paid(self) -> bool:
        return PAID_FEATURES in self.flags

    def allows(self, feature: Feature) -> bool:
        return feature in self.flags

    def require(self, feature: Feature) -> None:
        if not self.allows(feature):
            raise FeatureUnavailable(FEATURE_NAMES.get(feature, feature.name or str(feature)), self.reason)


def features_for(outcome: VerificationOutcome) -> FeatureSet:
    if outcome.valid:
        email = outcome.license.email if outcome.license else None
        return FeatureSet(flags=FREE_FEATURES | PAID_FEATURES, reason=outcome.reason, licensed_to=email)
    return FeatureSet(flags=FREE_FEATURES, reason=outcome.reason)


FREE_ONLY = FeatureSet(flags=FREE_FEATURES, reason="free mode")

__all__ = ["Feature", "FeatureSet", "FREE_FEATURES", "PAID_FEATURES", "FREE_ONLY", "features_for"]
