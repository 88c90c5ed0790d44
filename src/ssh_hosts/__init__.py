"""Browse the hosts defined in your OpenSSH client configuration."""

__version__ = "0.3.0"
