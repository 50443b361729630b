"""Console UI for terminal output using Rich."""

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pubtrack.models.paper import PaperRecord, Researcher
from pubtrack.services.status_style import StatusStyle, resolve_status_style


def status_text(status: str, style: StatusStyle) -> Text:
    """Status label in its badge text color, bold when glowing."""
    rich_style = f"bold {style.color}" if style.glow else style.color
    return Text(status, style=rich_style)


class ConsoleUI:
    """Rich-based console UI for paper display and notifications."""

    def __init__(self):
        """Initialize console."""
        self._console = Console()

    @property
    def console(self) -> Console:
        return self._console

    def info(self, message: str) -> None:
        """Print an info message."""
        self._console.print(message)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        self._console.print(f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Print an error message in red."""
        self._console.print(f"[red]Error:[/red] {message}")

    def researcher(self, researcher: Researcher) -> None:
        """Print the sheet's header block."""
        self._console.print(
            f"[bold cyan]{researcher.name}[/bold cyan] {researcher.credentials}"
        )
        guide = f"{researcher.guide} {researcher.guide_credentials}".strip()
        self._console.print(f"Guided by [bold]{guide}[/bold]")

    def imported(self, count: int) -> None:
        self._console.print(f"[green]Imported[/green]: {count} papers from the workbook")

    def exported(self, count: int) -> None:
        self._console.print(f"[green]Exported[/green]: {count} papers to the workbook")

    def display_papers(self, papers: Sequence[PaperRecord], title: str = "Papers") -> None:
        """Display papers in a formatted table.

        Args:
            papers: Papers to display
            title: Table title
        """
        table = Table(title=title)
        table.add_column("ID", justify="right")
        table.add_column("Title", overflow="fold")
        table.add_column("Status", overflow="fold")
        table.add_column("", width=1)

        for paper in papers:
            style = resolve_status_style(paper.status, paper.color, paper.font_color)
            table.add_row(
                str(paper.id),
                paper.title,
                status_text(paper.status, style),
                "[green]●[/green]" if paper.highlight else "",
            )

        self._console.print(table)

        if not papers:
            self._console.print("No papers found.")

    def display_style(self, status: str, style: StatusStyle) -> None:
        """Display a resolved badge style and a preview of it."""
        table = Table(title=f"Style for {status!r}", show_header=False)
        table.add_column("Property")
        table.add_column("Value")
        for name, value in style.as_dict().items():
            table.add_row(name, value)
        table.add_row("glow", "yes" if style.glow else "no")
        table.add_row("preview", status_text(status or "(empty)", style))
        self._console.print(table)
