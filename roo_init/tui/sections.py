from typing import Iterable, Optional

from rich.console import RenderableType
from rich.panel import Panel

from roo_init.tui.enums import UIStyle
from roo_init.utils import compact_home_paths_in_text


class UISection:
    @staticmethod
    def wrap(
        title: str,
        body: RenderableType,
        style: str = UIStyle.BLUE.value,
        subtitle: Optional[str] = None,
    ) -> Panel:
        return Panel(
            body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1)
        )

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        """Text panel; paths under the home directory are shown with ``~``."""
        return Panel(
            compact_home_paths_in_text(body),
            title=title,
            border_style=style,
            padding=(0, 1),
        )

    @staticmethod
    def bullets(title: str, items: Iterable[object], style: str) -> Panel:
        return UISection.note(title, "\n".join(f"- {item}" for item in items), style)
