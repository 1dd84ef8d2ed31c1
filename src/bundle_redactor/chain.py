"""ObfuscatorChain — runs several obfuscators over the same input feed.

Usage:

    chain = ObfuscatorChain([
        create_ip_obfuscator("consistent"),
        create_mac_obfuscator("consistent", target="contents"),
    ])

    for path, text in bundle:
        new_path = chain.path(path)
        new_text = chain.contents(text)

    audit = chain.report()
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .obfuscator import Obfuscator


@dataclass
class ObfuscatorChain:
    """Applies obfuscators in order, each only to the inputs its target covers."""

    obfuscators: list[Obfuscator] = field(default_factory=list)

    def contents(self, text: str) -> str:
        for obfuscator in self.obfuscators:
            if obfuscator.target.contents:
                text = obfuscator.contents(text)
        return text

    def path(self, path: str) -> str:
        for obfuscator in self.obfuscators:
            if obfuscator.target.path:
                path = obfuscator.path(path)
        return path

    def report(self) -> dict[str, str]:
        """Merged ``raw text → placeholder`` mapping of every obfuscator."""
        merged: dict[str, str] = {}
        for obfuscator in self.obfuscators:
            merged.update(obfuscator.report())
        return merged

    @property
    def stats(self) -> dict[str, int]:
        return {o.name: len(o.report()) for o in self.obfuscators}
