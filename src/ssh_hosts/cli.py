from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import click

from .core import ConfigError, load_hosts
from .core.command import DEFAULT_TEMPLATE
from .core.hosts import Host
from .core.search import filter_hosts, sort_hosts
from .core.util import DEFAULT_CONFIGS
from . import __version__


@dataclass
class AppConfig:
    config_paths: List[str] = field(default_factory=lambda: list(DEFAULT_CONFIGS))
    strict: bool = False
    search_filter: Optional[str] = None
    sort_by_name: bool = True
    show_proxy_command: bool = False
    command_template: str = DEFAULT_TEMPLATE
    command_template_on_session_start: Optional[str] = None
    command_template_on_session_end: Optional[str] = None
    exit_after_ssh_session_ends: bool = False


def load(config: AppConfig) -> List[Host]:
    """Load hosts from every configured path, sorted if requested."""
    try:
        hosts = load_hosts(config.config_paths, strict=config.strict)
    except ConfigError as exc:
        raise click.ClickException(f"Failed to parse SSH configuration file: {exc}")
    if config.sort_by_name:
        hosts = sort_hosts(hosts)
    return hosts


def config_options(func):
    func = click.option("--show-proxy-command", is_flag=True, help="Show the ProxyCommand column")(func)
    func = click.option("--sort/--no-sort", default=True, help="Sort hosts by name")(func)
    func = click.option("-s", "--search", default=None, help="Host search filter")(func)
    func = click.option("--strict", is_flag=True, help="Fail on unknown configuration entries")(func)
    func = click.option(
        "-c", "--config", "config_paths", multiple=True, default=DEFAULT_CONFIGS, show_default=True,
        help="Path to an SSH configuration file (repeatable)",
    )(func)
    return func


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log parsing details to stderr")
def main(verbose: bool) -> None:
    """ssh-hosts: list and connect to the hosts in your SSH config."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command(name="list")
@config_options
@click.option("--json", "as_json", is_flag=True, help="Output JSON for scripting")
def list_hosts(
    config_paths: Tuple[str, ...], strict: bool, search: Optional[str], sort: bool,
    show_proxy_command: bool, as_json: bool,
) -> None:
    """Print the resolved hosts."""
    config = AppConfig(
        config_paths=list(config_paths),
        strict=strict,
        search_filter=search,
        sort_by_name=sort,
        show_proxy_command=show_proxy_command,
    )
    hosts = filter_hosts(load(config), search or "")
    if as_json:
        click.echo(json.dumps([h.as_dict() for h in hosts], indent=2))
        return

    for h in hosts:
        target = f"{h.user}@{h.destination}" if h.user else h.destination
        if h.port:
            target += f":{h.port}"
        line = f"{h.name}\t{target}"
        if h.aliases:
            line += f"\t({h.aliases})"
        if show_proxy_command and h.proxy_command:
            line += f"\t[{h.proxy_command}]"
        click.echo(line)
    if not hosts:
        click.echo("No hosts found", err=True)


@main.command()
@config_options
@click.option("-t", "--template", default=DEFAULT_TEMPLATE, show_default=True, help="Jinja2 template of the command to execute")
@click.option("--on-session-start-template", metavar="TEMPLATE", help="Command to run when a session starts")
@click.option("--on-session-end-template", metavar="TEMPLATE", help="Command to run when a session ends")
@click.option("-e", "--exit", "exit_after", is_flag=True, help="Exit after ending the SSH session")
def browse(
    config_paths: Tuple[str, ...], strict: bool, search: Optional[str], sort: bool,
    show_proxy_command: bool, template: str, on_session_start_template: Optional[str],
    on_session_end_template: Optional[str], exit_after: bool,
) -> None:
    """Launch the Textual host browser."""
    config = AppConfig(
        config_paths=list(config_paths),
        strict=strict,
        search_filter=search,
        sort_by_name=sort,
        show_proxy_command=show_proxy_command,
        command_template=template,
        command_template_on_session_start=on_session_start_template,
        command_template_on_session_end=on_session_end_template,
        exit_after_ssh_session_ends=exit_after,
    )
    hosts = load(config)
    try:
        from .tui.app import HostBrowserApp
    except Exception as exc:  # broad for user friendliness
        raise SystemExit(f"TUI not available: {exc}")
    sys.exit(HostBrowserApp(config, hosts).run() or 0)
