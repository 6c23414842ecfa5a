from rich.panel import Panel
from rich.table import Column, Table

from roo_init.materializer import MaterializeResult
from roo_init.tui.enums import PROVENANCE_STYLE, UIStyle
from roo_init.utils import compact_home_path


class DefinitionsTable:
    @staticmethod
    def definitions_table(rows: list[dict[str, str]]) -> Table:
        table = Table(
            Column(header="Slug", width=24, overflow="fold"),
            Column(header="Name", width=24, overflow="ellipsis"),
            Column(header="Description", overflow="ellipsis"),
            Column(header="Source", width=26),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            style = PROVENANCE_STYLE.get(row["source"], UIStyle.WHITE.value)
            table.add_row(
                row["slug"],
                row["name"],
                row["description"],
                f"[{style}]{row['source']}[/{style}]",
            )
        return table


class InitTable:
    @staticmethod
    def summary_block(target: str, modes: list[str], force: bool) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Target", compact_home_path(target))
        table.add_row("Modes", ", ".join(modes) if modes else "none")
        table.add_row("Overwrite", "yes" if force else "no")
        return table

    @staticmethod
    def stats_panel(result: MaterializeResult) -> Panel:
        stats: dict[str, str] = {
            "modes": str(result.mode_count),
            ".roomodes": "written" if result.descriptor_written else "skipped",
            "rules copied": str(result.rules.copied),
            "rules skipped": str(len(result.rules.skipped)),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title="init",
            border_style=UIStyle.GREEN.value
            if not result.skipped
            else UIStyle.YELLOW.value,
        )
