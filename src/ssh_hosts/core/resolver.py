"""Post-parse transformations turning host blocks into display rows.

Every step takes a list of blocks and returns a new list; the input blocks
are never modified.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from .entry import EntryKey
from .model import HostBlock, fill_missing

logger = logging.getLogger(__name__)


def spread(blocks: Sequence[HostBlock]) -> List[HostBlock]:
    """Split multi-pattern blocks into one single-pattern block per pattern."""
    result: List[HostBlock] = []
    for block in blocks:
        if not block.patterns:
            result.append(block.copy())
            continue
        result.extend(block.with_pattern(pattern) for pattern in block.patterns)
    return result


def apply_patterns(blocks: Sequence[HostBlock]) -> List[HostBlock]:
    """Fill literal hosts from every wildcard block that applies to them.

    Wildcard blocks are applied in file order, so the first block to set a
    key wins. Wildcard blocks are dropped from the result.
    """
    spread_blocks = spread(blocks)
    pattern_blocks = [b for b in spread_blocks if b.is_pattern()]
    literal_blocks = [b for b in spread_blocks if not b.is_pattern()]

    for literal in literal_blocks:
        for pattern_block in pattern_blocks:
            if any(m.applies_to(literal.name) for m in pattern_block.matchers()):
                literal.entries = fill_missing(literal.entries, pattern_block.entries)

    logger.debug(
        "Applied %d pattern blocks to %d hosts", len(pattern_blocks), len(literal_blocks)
    )
    return literal_blocks


def apply_name_to_empty_hostname(blocks: Sequence[HostBlock]) -> List[HostBlock]:
    result: List[HostBlock] = []
    for block in blocks:
        block = block.copy()
        if block.get(EntryKey.HOSTNAME) is None and block.patterns:
            block.update(EntryKey.HOSTNAME, block.patterns[0])
        result.append(block)
    return result


def merge_same_hosts(blocks: Sequence[HostBlock]) -> List[HostBlock]:
    """Collapse blocks with identical entries into the earliest of them.

    The surviving block lists the patterns of every merged block in their
    original order.
    """
    kept: List[HostBlock] = []
    for block in blocks:
        for target in kept:
            if target.entries == block.entries:
                target.patterns.extend(block.patterns)
                break
        else:
            kept.append(block.copy())
    return kept


def resolve(blocks: Sequence[HostBlock]) -> List[HostBlock]:
    """Run the full pipeline: spread, patterns, default hostnames, merge."""
    resolved = merge_same_hosts(apply_name_to_empty_hostname(apply_patterns(blocks)))
    logger.debug("Resolved %d blocks into %d hosts", len(blocks), len(resolved))
    return resolved


__all__ = ["apply_name_to_empty_hostname", "apply_patterns", "merge_same_hosts", "resolve", "spread"]
