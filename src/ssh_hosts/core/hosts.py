from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .entry import EntryKey
from .errors import ConfigIOError
from .model import HostBlock
from .parser import ConfigParser
from .resolver import resolve
from .util import DEFAULT_CONFIGS, SYSTEM_CONFIG, PathLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Host:
    name: str
    aliases: str
    destination: str
    user: Optional[str] = None
    port: Optional[str] = None
    proxy_command: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)

    @classmethod
    def from_block(cls, block: HostBlock) -> "Host":
        name = block.patterns[0] if block.patterns else ""
        return cls(
            name=name,
            aliases=", ".join(block.patterns[1:]),
            destination=block.get(EntryKey.HOSTNAME) or name,
            user=block.get(EntryKey.USER),
            port=block.get(EntryKey.PORT),
            proxy_command=block.get(EntryKey.PROXY_COMMAND),
        )


def project(blocks: Iterable[HostBlock]) -> List[Host]:
    return [Host.from_block(block) for block in blocks]


def parse_config(path: PathLike, strict: bool = False) -> List[Host]:
    """Parse, resolve and project one config file (and its includes)."""
    blocks = ConfigParser(strict=strict).parse_file(path)
    return project(resolve(blocks))


def load_hosts(paths: Sequence[PathLike] = DEFAULT_CONFIGS, strict: bool = False) -> List[Host]:
    """Parse each path independently and concatenate the results.

    A missing system-wide config is skipped; every other error propagates.
    """
    hosts: List[Host] = []
    for path in paths:
        try:
            hosts.extend(parse_config(path, strict=strict))
        except ConfigIOError as exc:
            if str(path) == SYSTEM_CONFIG and exc.not_found:
                logger.debug("Skipping missing %s", SYSTEM_CONFIG)
                continue
            raise
    return hosts


__all__ = ["Host", "load_hosts", "parse_config", "project"]
