from __future__ import annotations

from typing import Iterable, List

from .hosts import Host


def fuzzy_match(text: str, query: str) -> bool:
    """True when every character of ``query`` appears in ``text`` in order."""
    if not query:
        return True
    it = iter(text.lower())
    return all(ch in it for ch in query.lower())


def filter_hosts(hosts: Iterable[Host], query: str) -> List[Host]:
    if not query:
        return list(hosts)
    return [
        h for h in hosts
        if fuzzy_match(h.name, query) or fuzzy_match(h.destination, query) or fuzzy_match(h.aliases, query)
    ]


def sort_hosts(hosts: Iterable[Host]) -> List[Host]:
    return sorted(hosts, key=lambda h: h.name.lower())


__all__ = ["filter_hosts", "fuzzy_match", "sort_hosts"]
