"""Matchers — locate address-like substrings and compute their canonical form.

Every matcher exposes ``find(text) -> list[Match]``.  Matchers keep no state
between calls; the same text always yields the same matches.
"""

from __future__ import annotations
import bisect
import ipaddress
import re
from typing import Iterable, Protocol

from .errors import ConfigurationError
from .types import DOMAIN, IPV4, IPV6, KEYWORD, MAC, Match


class Matcher(Protocol):
    category: str

    def find(self, text: str) -> list[Match]:
        ...


# ── IPv4 ─────────────────────────────────────────────────────────────

# 0–255, no leading zeros
_OCTET = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"


def _ipv4_pattern(separators: str) -> re.Pattern[str]:
    # One alternative per separator so a candidate never mixes them
    alternatives = [
        _OCTET + (re.escape(sep) + _OCTET) * 3
        for sep in separators
    ]
    return re.compile("(?:" + "|".join(alternatives) + r")\b")


class IPv4Matcher:
    """IPv4 addresses written with one uniform separator (``.`` or ``-``).

    The dash form catches addresses embedded in host names such as
    ``ip-10-0-187-218.ec2.internal``.  Both forms canonicalize to dotted
    decimal.

    Only the end of a candidate is anchored.  A digit run that is itself
    invalid, like ``910.218.98.1``, still yields the valid tail
    ``10.218.98.1`` and the leading ``9`` stays in the output.
    """

    category = IPV4
    excluded = frozenset({"0.0.0.0"})

    def __init__(self, separators: str = ".-") -> None:
        if not separators:
            raise ConfigurationError("IPv4 matcher needs at least one separator")
        self.separators = separators
        self._pattern = _ipv4_pattern(separators)

    def find(self, text: str) -> list[Match]:
        matches: list[Match] = []
        for m in self._pattern.finditer(text):
            raw = m.group()
            canonical = raw
            for sep in self.separators:
                canonical = canonical.replace(sep, ".")
            if canonical in self.excluded:
                continue
            matches.append(Match(IPV4, m.start(), m.end(), raw, canonical))
        return matches


# ── IPv6 ─────────────────────────────────────────────────────────────

_HEX = "[0-9A-Fa-f]"

# Colon-hex groups with optional "::" compression and an optional dotted
# IPv4 tail; candidates are validated afterwards.
_IPV6_CANDIDATE = re.compile(
    r"(?<![\w:])"
    rf"(?:{_HEX}{{0,4}}:){{2,8}}"
    rf"(?:(?:\d{{1,3}}\.){{3}}\d{{1,3}}|{_HEX}{{1,4}})?"
    r"(?![\w:])"
)

_LOOPBACK_V6 = "::1"


class IPv6Matcher:
    """IPv6 addresses, canonicalized as the literal text (no zero-compression normalization)."""

    category = IPV6
    excluded = frozenset({"::"})

    def find(self, text: str) -> list[Match]:
        matches: list[Match] = []
        for m in _IPV6_CANDIDATE.finditer(text):
            raw = m.group()
            # a trailing separator colon ("peer 2001:db8::1: refused") is not part of the address
            if not _valid_ipv6(raw) and raw.endswith(":"):
                raw = raw[:-1]
            if raw in self.excluded or not _valid_ipv6(raw):
                continue
            end = m.start() + len(raw)
            if raw == _LOOPBACK_V6 and _bracketed(text, m.start(), end):
                continue
            matches.append(Match(IPV6, m.start(), end, raw, raw))
        return matches


def _valid_ipv6(candidate: str) -> bool:
    try:
        ipaddress.IPv6Address(candidate)
    except ValueError:
        return False
    return True


def _bracketed(text: str, start: int, end: int) -> bool:
    """True for host:port literals such as ``[::1]:8080``."""
    return text[start - 1:start] == "[" and text[end:end + 1] == "]"


# ── MAC ──────────────────────────────────────────────────────────────

_BYTE = "[0-9A-Fa-f]{2}"


class MacMatcher:
    """MAC addresses with a uniform ``:`` or ``-`` separator; canonical is upper-case, colon-separated."""

    category = MAC

    def __init__(self, separators: str = ":-") -> None:
        if not separators:
            raise ConfigurationError("MAC matcher needs at least one separator")
        self.separators = separators
        alternatives = [_BYTE + (re.escape(sep) + _BYTE) * 5 for sep in separators]
        self._pattern = re.compile(r"\b(?:" + "|".join(alternatives) + r")\b")

    def find(self, text: str) -> list[Match]:
        matches: list[Match] = []
        for m in self._pattern.finditer(text):
            raw = m.group()
            canonical = raw.upper()
            for sep in self.separators:
                canonical = canonical.replace(sep, ":")
            matches.append(Match(MAC, m.start(), m.end(), raw, canonical))
        return matches


# ── Domain ───────────────────────────────────────────────────────────

class DomainMatcher:
    """Configured domain names and any of their subdomains, case-insensitive."""

    category = DOMAIN

    def __init__(self, domains: Iterable[str]) -> None:
        names = {d.strip().strip(".").lower() for d in domains if d and d.strip().strip(".")}
        if not names:
            raise ConfigurationError("domain matcher needs at least one domain name")
        self.domains = tuple(sorted(names, key=len, reverse=True))
        self._pattern = re.compile(
            r"(?<![\w.-])(?:[A-Za-z0-9-]+\.)*"
            r"(?:" + "|".join(re.escape(d) for d in self.domains) + r")"
            r"(?![\w-])",
            re.IGNORECASE,
        )

    def find(self, text: str) -> list[Match]:
        return [
            Match(DOMAIN, m.start(), m.end(), m.group(), m.group().lower())
            for m in self._pattern.finditer(text)
        ]


# ── Keyword ──────────────────────────────────────────────────────────

class KeywordMatcher:
    """Literal keywords; longer keywords win over their prefixes."""

    category = KEYWORD

    def __init__(self, keywords: Iterable[str]) -> None:
        words = {k for k in keywords if k}
        if not words:
            raise ConfigurationError("keyword matcher needs at least one keyword")
        self.keywords = tuple(sorted(words, key=len, reverse=True))
        self._pattern = re.compile("|".join(re.escape(k) for k in self.keywords))

    def find(self, text: str) -> list[Match]:
        return [
            Match(KEYWORD, m.start(), m.end(), m.group(), m.group())
            for m in self._pattern.finditer(text)
        ]


def scan(text: str, matchers: Iterable[Matcher]) -> list[Match]:
    """Run all matchers against text. Returns non-overlapping matches, left to right."""
    matches: list[Match] = []
    for matcher in matchers:
        matches.extend(matcher.find(text))
    return _deduplicate(matches)


def _deduplicate(matches: list[Match]) -> list[Match]:
    """Remove overlapping matches, keeping longer ones."""
    if not matches:
        return matches
    ordered = sorted(matches, key=lambda m: m.start)
    if all(a.end <= b.start for a, b in zip(ordered, ordered[1:])):
        return ordered

    # Accepted spans stay sorted by start; only the neighbours can overlap
    ranked = sorted(matches, key=lambda m: (-(m.end - m.start), m.start))
    taken: list[Match] = []
    starts: list[int] = []
    for m in ranked:
        i = bisect.bisect_right(starts, m.start)
        if i > 0 and taken[i - 1].end > m.start:
            continue
        if i < len(taken) and taken[i].start < m.end:
            continue
        taken.insert(i, m)
        starts.insert(i, m.start)
    return taken
