from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Optional

from jinja2 import Environment, StrictUndefined

from .hosts import Host

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = 'ssh "{{ name }}"'

_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=False)


def render_command(template: str, host: Host) -> str:
    """Render a Jinja2 command template with the host's fields."""
    return _env.from_string(template).render(**host.as_dict())


def run_command(template: str, host: Host) -> int:
    """Render ``template`` for ``host``, run it and return the exit status."""
    rendered = render_command(template, host)
    args = shlex.split(rendered)
    if not args:
        raise ValueError(f"Empty command rendered from template {template!r}")
    logger.info("Running command: %s", rendered)
    return subprocess.run(args).returncode


def run_session(
    host: Host,
    template: str = DEFAULT_TEMPLATE,
    on_start: Optional[str] = None,
    on_end: Optional[str] = None,
) -> int:
    """Run the optional start hook, the session command and the end hook.

    The end hook runs even when the session command fails; the session's
    exit status is returned.
    """
    if on_start:
        run_command(on_start, host)
    try:
        return run_command(template, host)
    finally:
        if on_end:
            run_command(on_end, host)


__all__ = ["DEFAULT_TEMPLATE", "render_command", "run_command", "run_session"]
