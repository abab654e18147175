from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from duru.models.files import FileList
from duru.models.scan import ScanSnapshot
from duru.services.formatting import format_bytes, name_lines, path_lines


def render_report(console: Console, files: FileList, full_path: bool = False) -> None:
    lines = path_lines(files) if full_path else name_lines(files)
    for line in lines:
        # Written as-is: console rendering would expand tabs and drop control
        # characters in file names, shifting the size column.
        console.file.write(line + "\n")


def _summary_panel(snapshot: ScanSnapshot, files: FileList) -> Panel:
    stats = snapshot.stats
    body = (
        f"Root: [bold]{escape(snapshot.root.path)}[/bold]\n"
        f"Files: [bold]{stats.files}[/bold]\n"
        f"Directories: [bold]{stats.directories}[/bold]\n"
        f"Total Size: [bold]{format_bytes(files.total_size)}[/bold]\n"
        f"Access Errors: [bold]{stats.access_errors}[/bold]"
    )
    return Panel(body, title="Scan Summary", border_style="blue")


def render_summary(console: Console, snapshot: ScanSnapshot, files: FileList) -> None:
    console.print(_summary_panel(snapshot, files))
