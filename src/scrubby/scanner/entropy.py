"""Entropy heuristics for the high-entropy token detector.

A candidate is a maximal run of token characters. It is reported as a secret
when it is at least ``DEFAULT_MIN_LENGTH`` characters long and its Shannon
entropy, measured in bits per character over the run's own character
distribution, reaches ``DEFAULT_ENTROPY_THRESHOLD``.

Runs made entirely of allow-listed words (``get_user_profile_settings``,
``content-security-policy``) are kept even when their entropy is high. The
comparison is case-insensitive and a run qualifies either as a whole or when
every alphabetic component between separators and digits is listed.
"""
from __future__ import annotations

import math
from collections import Counter
from typing import AbstractSet, FrozenSet, Iterable

import regex

DEFAULT_MIN_LENGTH = 32
DEFAULT_ENTROPY_THRESHOLD = 3.5

TOKEN_RUN_PATTERN = r"(?<![A-Za-z0-9+/=_\-])[A-Za-z0-9+/=_\-]{%d,}(?![A-Za-z0-9+/=_\-])"

_COMPONENT_SPLIT = regex.compile(r"[^a-z]+")

DEFAULT_ALLOW_LIST: FrozenSet[str] = frozenset(
    """
    about access account accounts action add address admin after all allow
    and api app application apply array async attribute auth authentication
    authorization available await back base before bearer body boolean buffer
    build bundle by cache call callback case change check child class clear
    client close code column command commit common component config
    configuration connection console const constructor container content
    context control controller copy count create current custom data database
    date debug default define delete dependency description detail details
    dev development device dialog dict directory disable display document
    domain download each edit element else email enable end entity entry env
    environment error event example exception export extension factory false
    feature fetch field file filter first flag for form format from function
    generate get global group handle handler has header height helper hidden
    history home host http https id image import index info init initial input
    insert instance int interface internal is item items json key keys label
    language last layout length level library limit line link list listener
    load loader local location lock log logger login logout main manager map
    max media message meta method middleware min mode model module name
    navigation network new next node none not null number object of on open
    option options order output owner package page panel param parameter
    parent parse password path pattern payload permission permissions policy
    port post prefix preview primary private process product production
    profile project property provider proxy public query queue read record
    redirect reference refresh register release remote remove render request
    required reset resource response result return role root route router
    rule run runtime save schema scope screen script search section security
    select selector server service session set settings setup shared show
    size source start state static status storage store string style submit
    success support sync system tab table target task template test text the
    theme time timeout title to token total transform true type update upload
    url user username util utils validate validation value values variable
    version view visible width window with worker wrapper write
    """.split()
)


def shannon_entropy(value: str) -> float:
    """Return the entropy of ``value`` in bits per character."""
    if not value:
        return 0.0
    length = len(value)
    entropy = 0.0
    for count in Counter(value).values():
        probability = count / length
        entropy -= probability * math.log2(probability)
    return entropy


def build_allow_list(extra: Iterable[str] = (), *, include_defaults: bool = True) -> FrozenSet[str]:
    words = {word.casefold() for word in extra if word}
    if include_defaults:
        words |= DEFAULT_ALLOW_LIST
    return frozenset(words)


def is_allow_listed(value: str, allow_list: AbstractSet[str]) -> bool:
    folded = value.casefold()
    if folded in allow_list:
        return True
    components = [part for part in _COMPONENT_SPLIT.split(folded) if part]
    return bool(components) and all(len(part) > 1 and part in allow_list for part in components)


__all__ = [
    "DEFAULT_ALLOW_LIST",
    "DEFAULT_ENTROPY_THRESHOLD",
    "DEFAULT_MIN_LENGTH",
    "TOKEN_RUN_PATTERN",
    "build_allow_list",
    "is_allow_listed",
    "shannon_entropy",
]
