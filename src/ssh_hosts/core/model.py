from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .entry import EntryKey
from .pattern import PatternMatcher, compile_pattern

Entries = Dict[EntryKey, str]

# Structural keywords consumed by the builder, never stored on a block.
STRUCTURAL_KEYS = frozenset({EntryKey.HOST, EntryKey.INCLUDE})


def fill_missing(receiver: Mapping[EntryKey, str], donor: Mapping[EntryKey, str]) -> Entries:
    """Return ``receiver`` with every key it lacks filled in from ``donor``.

    Keys already present in ``receiver`` always win. Neither argument is
    modified.
    """
    merged = dict(receiver)
    for key, value in donor.items():
        if key not in merged:
            merged[key] = value
    return merged


@dataclass
class HostBlock:
    """One ``Host`` section, or the implicit global section (no patterns)."""

    patterns: List[str] = field(default_factory=list)
    entries: Entries = field(default_factory=dict)

    def update(self, key: EntryKey, value: str) -> None:
        if key in STRUCTURAL_KEYS:
            raise ValueError(f"{key} cannot be stored on a host block")
        self.entries[key] = value

    def get(self, key: EntryKey) -> Optional[str]:
        return self.entries.get(key)

    def is_empty(self) -> bool:
        return not self.entries

    @property
    def name(self) -> str:
        return self.patterns[0] if self.patterns else ""

    def fill_from(self, donor: Mapping[EntryKey, str]) -> None:
        self.entries = fill_missing(self.entries, donor)

    def copy(self) -> "HostBlock":
        return HostBlock(patterns=list(self.patterns), entries=dict(self.entries))

    def with_pattern(self, pattern: str) -> "HostBlock":
        return HostBlock(patterns=[pattern], entries=dict(self.entries))

    def matchers(self) -> List[PatternMatcher]:
        """Compiled matchers for the wildcard patterns of this block."""
        compiled = (compile_pattern(p) for p in self.patterns)
        return [m for m in compiled if m is not None]

    def is_pattern(self) -> bool:
        return bool(self.matchers())


__all__ = ["Entries", "HostBlock", "STRUCTURAL_KEYS", "fill_missing"]
