from typing import Optional

from rich.console import Console

from roo_init.materializer import MaterializeResult
from roo_init.tui.enums import UIStyle
from roo_init.tui.sections import UISection
from roo_init.tui.tables import DefinitionsTable, InitTable
from roo_init.utils import compact_home_path


class RooConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def info(self, message: str, title: Optional[str] = None) -> None:
        self.console.print(UISection.note(title or "info", message, UIStyle.BLUE.value))

    def success(self, message: str, title: Optional[str] = None) -> None:
        self.console.print(
            UISection.note(title or "success", message, UIStyle.GREEN.value)
        )

    def warning(self, message: str, title: Optional[str] = None) -> None:
        self.console.print(
            UISection.note(title or "warning", message, UIStyle.YELLOW.value)
        )

    def error(self, message: str, title: Optional[str] = None) -> None:
        self.console.print(UISection.note(title or "error", message, UIStyle.RED.value))

    def render_definitions(
        self, rows: list[dict[str, str]], entity_plural: str, source: str
    ) -> None:
        if not rows:
            self.console.print(
                UISection.note(
                    entity_plural,
                    f"No {source} {entity_plural} found.",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                f"{entity_plural} ({source})",
                DefinitionsTable.definitions_table(rows),
                style=UIStyle.BLUE.value,
            )
        )

    def render_init_plan(self, target: str, modes: list[str], force: bool) -> None:
        self.console.print(
            UISection.wrap(
                "init overview",
                InitTable.summary_block(target, modes, force),
                style=UIStyle.BLUE.value,
            )
        )

    def render_init_result(self, result: MaterializeResult) -> None:
        self.console.print(InitTable.stats_panel(result))
        if result.skipped:
            self.console.print(
                UISection.bullets(
                    "skipped (use --force to overwrite)",
                    result.skipped,
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_definition_saved(self, entity: str, slug: str, path: str) -> None:
        self.console.print(
            UISection.note(
                entity,
                f"Custom {entity} added: [bold]{slug}[/bold]\n"
                f"{compact_home_path(path)}",
                style=UIStyle.GREEN.value,
            )
        )
