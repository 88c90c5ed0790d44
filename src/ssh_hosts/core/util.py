from __future__ import annotations

import os
from pathlib import Path
from typing import Union

SYSTEM_CONFIG = "/etc/ssh/ssh_config"
USER_CONFIG = "~/.ssh/config"
DEFAULT_CONFIGS = (SYSTEM_CONFIG, USER_CONFIG)

PathLike = Union[str, "os.PathLike[str]"]


def ssh_dir() -> Path:
    """The per-user SSH directory; relative ``Include`` paths resolve here."""
    return Path.home() / ".ssh"


def expand_path(path: PathLike) -> str:
    """Tilde-expand ``path`` and anchor it in :func:`ssh_dir` when relative."""
    expanded = os.path.expanduser(os.fspath(path))
    if not os.path.isabs(expanded):
        expanded = os.path.join(str(ssh_dir()), expanded)
    return expanded


def canonical_path(path: PathLike) -> str:
    return os.path.realpath(os.fspath(path))


__all__ = ["SYSTEM_CONFIG", "USER_CONFIG", "DEFAULT_CONFIGS", "ssh_dir", "expand_path", "canonical_path"]
