"""
Console output formatting using Rich.
"""

from datetime import date
from typing import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from business_day_calculator.data.schemas import BusinessDayResult

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Console = None):
        """Initialize the console formatter."""
        self.console = console or Console()

    def print_result(self, result: BusinessDayResult) -> None:
        """
        Print a business day calculation result.

        Args:
            result: BusinessDayResult to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Business Day Calculation[/bold blue]")
        self.console.print()

        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=20)
        table.add_column("Value", style="white")

        table.add_row("Start Date:", self._describe(result.start_date))
        table.add_row("Business Days:", str(result.business_days))
        table.add_row("Holiday Years:", ", ".join(str(y) for y in result.years_considered))
        table.add_row("Holidays Skipped:", str(len(result.holidays_skipped)))
        table.add_row("", "─" * 15)
        table.add_row(
            Text("End Date:", style="bold green"),
            Text(self._describe(result.end_date), style="bold green"),
        )

        self.console.print(Panel(table, title="[bold]Result[/bold]"))

        if result.holidays_skipped:
            self.print_holidays(result.holidays_skipped, title="Holidays Skipped")

        if result.warnings:
            self.console.print()
            for warning in result.warnings:
                self.console.print(f"[yellow]Warning:[/yellow] {warning}")

        self.console.print()

    def print_holidays(self, holidays: Iterable[date], title: str = "Holidays") -> None:
        """
        Print a table of holiday dates.

        Args:
            holidays: Holiday dates to display.
            title: Table title.
        """
        holiday_table = Table(title=f"[bold]{title}[/bold]")
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Day", style="dim", width=12)

        for holiday in sorted(holidays):
            holiday_table.add_row(holiday.isoformat(), WEEKDAY_NAMES[holiday.weekday()])

        self.console.print(holiday_table)

    def print_holidays_for_year(self, year: int, holidays: Iterable[date]) -> None:
        """
        Print all holidays for a year.

        Args:
            year: Year.
            holidays: Holiday dates.
        """
        holidays = sorted(holidays)
        self.console.print()
        self.console.rule(f"[bold blue]Holidays {year}[/bold blue]")
        self.console.print()

        if holidays:
            self.print_holidays(holidays)
        else:
            self.console.print("[dim]No holidays found for this year.[/dim]")

        self.console.print()

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[bold green]Success:[/bold green] {message}")

    def _describe(self, value: date) -> str:
        return f"{value.isoformat()} ({WEEKDAY_NAMES[value.weekday()]})"
