"""Replacement policies — turn a (category, canonical value) pair into a placeholder.

Static:      every value of a category becomes the same constant.
Consistent:  every distinct value gets ``x-<category>-NNNNNNNNNN-x``, numbered
             in first-seen order by a ConsistentTracker.
"""

from __future__ import annotations
from typing import Mapping, Protocol

from .tracker import ConsistentTracker
from .types import DOMAIN, IPV4, IPV6, KEYWORD, MAC, ReplacementType

STATIC_PLACEHOLDERS: dict[str, str] = {
    IPV4: "xxx.xxx.xxx.xxx",
    IPV6: "xxxx:xxxx:xxxx:xxxx:xxxx:xxxx:xxxx:xxxx",
    MAC: "xx:xx:xx:xx:xx:xx",
    DOMAIN: "obfuscated.domain",
    KEYWORD: "xxxxxxxxxx",
}

_CONSISTENT_FMT = "x-{category}-{seq:010d}-x"


class ReplacementPolicy(Protocol):
    replacement_type: ReplacementType

    def placeholder(self, category: str, canonical: str) -> str:
        ...


class StaticPolicy:
    """Fixed, irreversible placeholder per category. Keeps no state."""

    replacement_type = ReplacementType.STATIC

    def placeholder(self, category: str, canonical: str) -> str:
        return STATIC_PLACEHOLDERS[category]


class ConsistentPolicy:
    """Stable numbered placeholder per distinct value, backed by a tracker."""

    replacement_type = ReplacementType.CONSISTENT

    def __init__(self, tracker: ConsistentTracker | None = None) -> None:
        self.tracker = tracker if tracker is not None else ConsistentTracker()

    def placeholder(self, category: str, canonical: str) -> str:
        seq = self.tracker.assign(category, canonical)
        return _CONSISTENT_FMT.format(category=category, seq=seq)


class KeywordPolicy:
    """Explicit per-keyword replacements, falling back to another policy."""

    def __init__(self, replacements: Mapping[str, str], fallback: ReplacementPolicy) -> None:
        self.replacements = {k: v for k, v in replacements.items() if v}
        self.fallback = fallback

    @property
    def replacement_type(self) -> ReplacementType:
        return self.fallback.replacement_type

    def placeholder(self, category: str, canonical: str) -> str:
        explicit = self.replacements.get(canonical)
        if explicit:
            return explicit
        return self.fallback.placeholder(category, canonical)


def create_policy(
    replacement_type: str | ReplacementType,
    tracker: ConsistentTracker | None = None,
) -> ReplacementPolicy:
    """Build the policy for a replacement type. Raises ConfigurationError if unknown."""
    rtype = ReplacementType.parse(replacement_type)
    if rtype is ReplacementType.CONSISTENT:
        return ConsistentPolicy(tracker)
    return StaticPolicy()
