"""ConsistentTracker — run-scoped registry of sequence numbers per canonical value.

Design goals:
  - Idempotent: the same (category, value) pair always gets the same number
  - Injective: per-category counters start at 1 and never reuse a number
  - Safe to share between threads: lookup-or-assign is a single locked step
"""

from __future__ import annotations
import logging
import threading
from collections import defaultdict

logger = logging.getLogger(__name__)


class ConsistentTracker:
    """Assigns first-seen sequence numbers, independently for each category."""

    __slots__ = ("_assigned", "_counters", "_lock")

    def __init__(self) -> None:
        self._assigned: dict[tuple[str, str], int] = {}   # ("ipv4", "10.0.0.1") → 1
        self._counters: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def assign(self, category: str, canonical: str) -> int:
        """Return the existing number for this value or allocate the next one."""
        key = (category, canonical)
        with self._lock:
            seq = self._assigned.get(key)
            if seq is not None:
                return seq
            self._counters[category] += 1
            seq = self._counters[category]
            self._assigned[key] = seq
        logger.debug("assigned %s sequence number %d", category, seq)
        return seq

    def lookup(self, category: str, canonical: str) -> int | None:
        """Look up the number for a value without assigning one."""
        with self._lock:
            return self._assigned.get((category, canonical))

    def counter(self, category: str) -> int:
        """Highest number handed out so far for a category (0 if none)."""
        with self._lock:
            return self._counters.get(category, 0)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._assigned)

    def dump(self) -> dict[str, dict[str, int]]:
        """Return a copy of the registry grouped by category (for debugging)."""
        out: dict[str, dict[str, int]] = {}
        with self._lock:
            for (category, canonical), seq in self._assigned.items():
                out.setdefault(category, {})[canonical] = seq
        return out
