"""
fzn2lp - Translation Report

Terminal summary of a translation run, written to stderr so it never mixes
with the facts on stdout.
"""

from typing import List, Optional, Tuple
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box

from ..runtime import TranslationResult


class TranslationReport:
    def __init__(
        self,
        console: Optional[Console] = None,
        width: int = 92,
        max_value_len: int = 80,
        max_items: int = 20,
    ):
        self.console = console or Console(stderr=True)
        self.width = width
        self.max_value_len = max_value_len
        self.max_items = max_items

    def render(self, result: TranslationResult, title: str = "fzn2lp", error: Optional[str] = None):
        self.console.print()

        # --- Header status ---
        if error:
            header_style, status_text, border_style = "bold red", "TRANSLATION FAILED", "red"
        elif result.warnings:
            header_style, status_text, border_style = "bold yellow", "TRANSLATED WITH WARNINGS", "yellow"
        else:
            header_style, status_text, border_style = "bold green", "TRANSLATED", "green"

        self.console.print(
            Panel(
                Text(status_text, justify="center", style=header_style),
                title=f"[white]{title}[/]",
                border_style=border_style,
                width=self.width,
            )
        )

        # --- Counters ---
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan", width=self.width)
        table.add_column("Metric", style="cyan", width=26)
        table.add_column("Value", style="white")
        for label, value in self._rows(result):
            table.add_row(label, value)
        self.console.print(table)

        # --- Error ---
        if error:
            err_table = Table(title="Fatal Error", box=box.ROUNDED, style="red", width=self.width)
            err_table.add_column("Error", style="red")
            err_table.add_row(self._format_value(error))
            self.console.print(err_table)

        # --- Warnings ---
        if result.warnings:
            self.console.print()
            warn_table = Table(title="Warnings (Non-Fatal)", box=box.ROUNDED, style="yellow", width=self.width)
            warn_table.add_column("#", style="dim", width=4)
            warn_table.add_column("Warning", style="yellow")
            for i, msg in enumerate(result.warnings[: self.max_items], 1):
                warn_table.add_row(str(i), self._format_value(msg))
            if len(result.warnings) > self.max_items:
                warn_table.add_row("…", f"(truncated after {self.max_items} warnings)")
            self.console.print(warn_table)

        # --- Footer ---
        self.console.print()
        footer = Text.assemble(
            ("Latency: ", "dim"),
            (f"{result.latency_ms:.3f}ms", "bold white"),
        )
        self.console.print(footer, justify="right", width=self.width)
        self.console.print()

    def _rows(self, result: TranslationResult) -> List[Tuple[str, str]]:
        return [
            ("Statements", str(result.statements)),
            ("Facts", str(result.facts)),
            ("Comments", str(result.comments)),
            ("Constraints", str(result.constraints)),
            ("Solve goal", result.solve_goal or "-"),
            ("Warnings", str(len(result.warnings))),
        ]

    def _format_value(self, v) -> str:
        s = str(v)
        if len(s) > self.max_value_len:
            s = s[: self.max_value_len - 3] + "..."
        return s
