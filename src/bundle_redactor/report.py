"""Report — audit mapping from every raw matched string to its placeholder."""

from __future__ import annotations
import threading
from pathlib import Path
from typing import Mapping

import yaml


class Report:
    """Accumulates ``raw text → placeholder`` entries. Grows, never shrinks."""

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def record(self, original: str, placeholder: str) -> None:
        with self._lock:
            self._entries[original] = placeholder

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the mapping; later calls do not affect it."""
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, original: object) -> bool:
        with self._lock:
            return original in self._entries


def dump_report(mapping: Mapping[str, str], path: str | Path) -> None:
    """Write a report mapping as YAML under a ``replacements`` key."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            {"replacements": dict(sorted(mapping.items()))},
            f,
            default_flow_style=False,
            allow_unicode=True,
        )
