from .errors import (
    ConfigError,
    ConfigIOError,
    InvalidIncludeError,
    UnknownEntryError,
    UnparseableLineError,
)
from .hosts import Host, load_hosts, parse_config

__all__ = [
    "ConfigError",
    "ConfigIOError",
    "Host",
    "InvalidIncludeError",
    "UnknownEntryError",
    "UnparseableLineError",
    "load_hosts",
    "parse_config",
]
