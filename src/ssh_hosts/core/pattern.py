from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Pattern

WILDCARD_CHARS = ("*", "?", "!")


def is_wildcard(pattern: str) -> bool:
    return any(ch in pattern for ch in WILDCARD_CHARS)


@dataclass(frozen=True)
class PatternMatcher:
    """A compiled ``Host`` pattern such as ``*.corp`` or ``!bastion``."""

    source: str
    regex: Pattern[str]
    negated: bool

    def matches(self, name: str) -> bool:
        return self.regex.match(name) is not None

    def applies_to(self, name: str) -> bool:
        # A block applies unless the match result equals the negation flag:
        # plain patterns apply on a match, negated ones on a miss.
        return self.matches(name) != self.negated


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Optional[PatternMatcher]:
    """Compile a wildcard pattern; literal patterns return ``None``.

    ``*`` matches any sequence, ``?`` a single character and a leading ``!``
    negates the rest of the pattern. Everything else matches literally.
    """
    if not is_wildcard(pattern):
        return None
    body = pattern
    negated = body.startswith("!")
    if negated:
        body = body[1:]
    parts: List[str] = []
    for ch in body:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    regex = re.compile("^" + "".join(parts) + "$", re.DOTALL)
    return PatternMatcher(source=pattern, regex=regex, negated=negated)


def split_patterns(value: str) -> List[str]:
    """Tokenize a ``Host`` value into patterns.

    Unquoted whitespace separates patterns; double-quoted spans may contain
    whitespace and always end the current pattern.
    """
    patterns: List[str] = []
    current: List[str] = []
    in_quotes = False
    for ch in value:
        if ch == '"':
            if in_quotes:
                token = "".join(current).strip()
                if token:
                    patterns.append(token)
                current = []
            in_quotes = not in_quotes
        elif ch.isspace() and not in_quotes:
            if current:
                patterns.append("".join(current).strip())
                current = []
        else:
            current.append(ch)
    token = "".join(current).strip()
    if token:
        patterns.append(token)
    return patterns


__all__ = ["PatternMatcher", "WILDCARD_CHARS", "compile_pattern", "is_wildcard", "split_patterns"]
