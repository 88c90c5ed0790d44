from __future__ import annotations

import glob
import logging
import os
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from .entry import EntryKey, UnknownKey, classify_line
from .errors import (
    ConfigIOError,
    InvalidIncludeError,
    UnknownEntryError,
    UnparseableLineError,
)
from .model import HostBlock
from .pattern import split_patterns
from .util import PathLike, canonical_path, expand_path

logger = logging.getLogger(__name__)

GLOB_MAGIC_RE = re.compile(r"[*?[]")

Parsed = Tuple[HostBlock, List[HostBlock]]


def strip_comment(line: str) -> str:
    """Drop a trailing ``#comment`` that is not inside double quotes."""
    in_quotes = False
    for idx, ch in enumerate(line):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "#" and not in_quotes:
            return line[:idx]
    return line


def merge_global(global_block: HostBlock, blocks: List[HostBlock]) -> List[HostBlock]:
    """Fill every block with the global settings it does not set itself."""
    if global_block.is_empty():
        return blocks
    for block in blocks:
        block.fill_from(global_block.entries)
    return blocks


class ConfigParser:
    """Build host blocks out of an ssh_config file and everything it includes.

    With ``strict=True`` an unrecognized directive raises
    :class:`UnknownEntryError` instead of being ignored.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse_file(self, path: PathLike) -> List[HostBlock]:
        global_block, blocks = self.parse_raw_file(os.path.expanduser(os.fspath(path)))
        return merge_global(global_block, blocks)

    def parse_text(self, text: str, source: str = "<string>") -> List[HostBlock]:
        global_block, blocks = self.parse_raw(text.splitlines(), source)
        return merge_global(global_block, blocks)

    def parse_raw_file(self, path: PathLike, _stack: Sequence[str] = ()) -> Parsed:
        """Parse one file without applying the global block to its hosts."""
        real = canonical_path(path)
        logger.debug("Parsing %s", real)
        try:
            with open(real, "r", encoding="utf-8") as handle:
                return self.parse_raw(handle, real, _stack=(*_stack, real))
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigIOError(exc, path=os.fspath(path)) from exc

    def parse_raw(self, lines: Iterable[str], source: str = "<string>", _stack: Sequence[str] = ()) -> Parsed:
        global_block = HostBlock()
        blocks: List[HostBlock] = []
        current: Optional[HostBlock] = None

        for number, raw in enumerate(lines, start=1):
            line = strip_comment(raw).strip()
            if not line:
                continue
            try:
                key, value = classify_line(line)
            except UnparseableLineError:
                raise UnparseableLineError(line, path=source, line_number=number) from None

            if isinstance(key, UnknownKey):
                if self.strict:
                    raise UnknownEntryError(key.raw, line, path=source, line_number=number)
                logger.debug("%s:%d: ignoring unknown entry %s", source, number, key.raw)
                continue

            if key is EntryKey.HOST:
                patterns = split_patterns(value)
                if not patterns:
                    raise UnparseableLineError(line, path=source, line_number=number)
                current = HostBlock(patterns=patterns)
                blocks.append(current)
                continue

            if key is EntryKey.INCLUDE:
                included_global, included_blocks = self._include(value, line, source, number, _stack)
                if current is not None:
                    if included_blocks:
                        raise InvalidIncludeError(
                            line, "hosts inside a host block", path=source, line_number=number
                        )
                    current.fill_from(included_global.entries)
                else:
                    global_block.entries.update(included_global.entries)
                    blocks.extend(included_blocks)
                continue

            (current if current is not None else global_block).update(key, value)

        return global_block, blocks

    def _include(self, value: str, line: str, source: str, number: int, stack: Sequence[str]) -> Parsed:
        merged = HostBlock()
        blocks: List[HostBlock] = []
        for path in self._include_paths(value, line, source, number):
            if canonical_path(path) in stack:
                raise InvalidIncludeError(line, f"include cycle via {path}", path=source, line_number=number)
            try:
                included_global, included_blocks = self.parse_raw_file(path, _stack=stack)
            except ConfigIOError as exc:
                if exc.line_number is not None:
                    raise
                # the included file itself is unreadable: blame the Include line
                raise ConfigIOError(exc.error, path=source, line_number=number, target=path) from exc.error
            merged.entries.update(included_global.entries)
            blocks.extend(included_blocks)
        return merged, blocks

    def _include_paths(self, value: str, line: str, source: str, number: int) -> List[str]:
        tokens = split_patterns(value)
        if not tokens:
            raise UnparseableLineError(line, path=source, line_number=number)
        paths: List[str] = []
        for token in tokens:
            pattern = expand_path(token)
            if not GLOB_MAGIC_RE.search(pattern):
                # plain paths must exist; parse_raw_file reports them missing
                paths.append(pattern)
                continue
            try:
                matches = sorted(glob.glob(pattern))
            except (OSError, ValueError) as exc:
                raise InvalidIncludeError(line, str(exc), path=source, line_number=number) from exc
            if not matches:
                logger.debug("%s:%d: include %s matched no files", source, number, pattern)
            paths.extend(m for m in matches if os.path.isfile(m))
        logger.debug("%s:%d: including %s", source, number, paths)
        return paths


def parse_file(path: PathLike, strict: bool = False) -> List[HostBlock]:
    return ConfigParser(strict=strict).parse_file(path)


def parse_text(text: str, strict: bool = False) -> List[HostBlock]:
    return ConfigParser(strict=strict).parse_text(text)


__all__ = ["ConfigParser", "merge_global", "parse_file", "parse_text", "strip_comment"]
