"""Obfuscator — the per-category API.

Usage:
    from bundle_redactor import create_ip_obfuscator

    ip = create_ip_obfuscator("consistent")     # one per category per run

    ip.path("pods/etcd-ip-10-0-187-218.ec2.internal/current.log")
    # "pods/etcd-ip-x-ipv4-0000000001-x.ec2.internal/current.log"

    ip.contents("node 10.0.187.218 is ready")
    # "node x-ipv4-0000000001-x is ready"

    ip.report()
    # {"10-0-187-218": "x-ipv4-0000000001-x", "10.0.187.218": "x-ipv4-0000000001-x"}
"""

from __future__ import annotations
import logging
from typing import Iterable, Mapping, Sequence

from .patterns import (
    DomainMatcher,
    IPv4Matcher,
    IPv6Matcher,
    KeywordMatcher,
    MacMatcher,
    Matcher,
    scan,
)
from .policy import KeywordPolicy, ReplacementPolicy, create_policy
from .report import Report
from .tracker import ConsistentTracker
from .types import Match, ReplacementType, Target

logger = logging.getLogger(__name__)


class Obfuscator:
    """Matchers + replacement policy + report behind ``contents``/``path``/``report``.

    An instance is one run's accumulator: its tracker and report live exactly
    as long as it does.  Sharing one instance across threads keeps a single
    numbering sequence; tracker and report serialize their own updates.
    """

    def __init__(
        self,
        name: str,
        matchers: Sequence[Matcher],
        policy: ReplacementPolicy,
        *,
        target: str | Target = Target.ALL,
    ) -> None:
        self.name = name
        self.matchers = tuple(matchers)
        self.policy = policy
        self.target = Target.parse(target)
        self._report = Report()

    @property
    def replacement_type(self) -> ReplacementType:
        return self.policy.replacement_type

    def find(self, text: str) -> list[Match]:
        """Locate matches without replacing or recording anything."""
        return scan(text, self.matchers)

    def contents(self, text: str) -> str:
        """Redact every match in a text buffer."""
        return self._obfuscate(text, "contents")

    def path(self, path: str) -> str:
        """Redact every match in a file or directory path."""
        return self._obfuscate(path, "path")

    def report(self) -> dict[str, str]:
        """Return a snapshot of ``raw matched text → placeholder``."""
        return self._report.snapshot()

    def _obfuscate(self, text: str, kind: str) -> str:
        matches = self.find(text)
        if not matches:
            return text

        # Left to right so consistent numbering follows first-seen order
        parts: list[str] = []
        pos = 0
        for match in matches:
            placeholder = self.policy.placeholder(match.category, match.canonical)
            self._report.record(match.text, placeholder)
            if match.canonical != match.text:
                self._report.record(match.canonical, placeholder)
            parts.append(text[pos:match.start])
            parts.append(placeholder)
            pos = match.end
        parts.append(text[pos:])

        logger.debug("%s: replaced %d match(es) in %s", self.name, len(matches), kind)
        return "".join(parts)


# ----------------------------------------------------------------------
# Factories
# ----------------------------------------------------------------------

def create_ip_obfuscator(
    replacement_type: str | ReplacementType = ReplacementType.STATIC,
    *,
    target: str | Target = Target.ALL,
    tracker: ConsistentTracker | None = None,
    separators: str = ".-",
) -> Obfuscator:
    """IPv4 and IPv6 addresses; the two families keep independent counters."""
    return Obfuscator(
        "ip",
        [IPv4Matcher(separators), IPv6Matcher()],
        create_policy(replacement_type, tracker),
        target=target,
    )


def create_mac_obfuscator(
    replacement_type: str | ReplacementType = ReplacementType.STATIC,
    *,
    target: str | Target = Target.ALL,
    tracker: ConsistentTracker | None = None,
) -> Obfuscator:
    return Obfuscator(
        "mac",
        [MacMatcher()],
        create_policy(replacement_type, tracker),
        target=target,
    )


def create_domain_obfuscator(
    domains: Iterable[str],
    replacement_type: str | ReplacementType = ReplacementType.STATIC,
    *,
    target: str | Target = Target.ALL,
    tracker: ConsistentTracker | None = None,
) -> Obfuscator:
    return Obfuscator(
        "domain",
        [DomainMatcher(domains)],
        create_policy(replacement_type, tracker),
        target=target,
    )


def create_keyword_obfuscator(
    replacements: Mapping[str, str] | Iterable[str],
    replacement_type: str | ReplacementType = ReplacementType.STATIC,
    *,
    target: str | Target = Target.ALL,
    tracker: ConsistentTracker | None = None,
) -> Obfuscator:
    """Literal keywords.

    ``replacements`` maps each keyword to a fixed replacement; an empty
    replacement (or a plain list of keywords) falls back to the policy.
    """
    if not isinstance(replacements, Mapping):
        replacements = {k: "" for k in replacements}
    return Obfuscator(
        "keyword",
        [KeywordMatcher(replacements)],
        KeywordPolicy(replacements, create_policy(replacement_type, tracker)),
        target=target,
    )
