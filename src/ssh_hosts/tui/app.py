from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import DataTable, Footer, Header, Input, Static

from ..core.command import run_session
from ..core.hosts import Host
from ..core.search import filter_hosts

if TYPE_CHECKING:  # pragma: no cover
    from ..cli import AppConfig


class HostTable(DataTable):  # pragma: no cover - thin widget wrapper
    pass


class HostBrowserApp(App):
    BINDINGS = [
        ("escape", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
        ("down", "cursor_down", "Down"),
        ("up", "cursor_up", "Up"),
    ]

    def __init__(self, config: "AppConfig", hosts: List[Host]):
        super().__init__()
        self.config = config
        self.hosts = hosts
        self.visible: List[Host] = []

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Header(show_clock=True)
        self.search = Input(value=self.config.search_filter or "", placeholder="Search", id="search")
        self.table = HostTable(id="hosts", cursor_type="row", zebra_stripes=True)
        self.status = Static(id="status")
        yield Vertical(self.search, self.table, self.status, id="main")
        yield Footer()

    def on_mount(self) -> None:  # pragma: no cover - simple load
        columns = ["Name", "Aliases", "User", "Destination", "Port"]
        if self.config.show_proxy_command:
            columns.append("Proxy")
        self.table.add_columns(*columns)
        self.refresh_hosts()
        self.search.focus()

    def refresh_hosts(self) -> None:
        self.table.clear()
        self.visible = filter_hosts(self.hosts, self.search.value)
        for idx, h in enumerate(self.visible):
            row = [h.name, h.aliases, h.user or "", h.destination, h.port or ""]
            if self.config.show_proxy_command:
                row.append(h.proxy_command or "")
            self.table.add_row(*row, key=str(idx))
        self.status.update(f"{len(self.visible)}/{len(self.hosts)} hosts")

    def selected(self) -> Optional[Host]:
        if not self.visible:
            return None
        row = self.table.cursor_row
        if row is None or not 0 <= row < len(self.visible):
            return None
        return self.visible[row]

    def on_input_changed(self, message: Input.Changed) -> None:  # pragma: no cover - UI event
        self.refresh_hosts()

    def on_input_submitted(self, message: Input.Submitted) -> None:  # pragma: no cover - UI event
        self.action_connect()

    def on_data_table_row_selected(self, message: DataTable.RowSelected) -> None:  # pragma: no cover - UI event
        self.action_connect()

    def action_cursor_down(self) -> None:
        self.table.action_cursor_down()

    def action_cursor_up(self) -> None:
        self.table.action_cursor_up()

    def action_connect(self) -> None:
        host = self.selected()
        if host is None:
            return
        try:
            with self.suspend():
                status = run_session(
                    host,
                    self.config.command_template,
                    on_start=self.config.command_template_on_session_start,
                    on_end=self.config.command_template_on_session_end,
                )
        except Exception as exc:  # pragma: no cover - subprocess error visual only
            self.status.update(f"[red]Command failed: {exc}")
            return
        if self.config.exit_after_ssh_session_ends:
            self.exit(status)
            return
        self.status.update(f"{host.name}: exited with status {status}")


__all__ = ["HostBrowserApp"]
