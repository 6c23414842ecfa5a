from typing import Optional

import click

from roo_init.interfaces import Choice
from roo_init.tui.selectors import ChoiceCheckboxApp, ChoiceListApp


class TerminalPrompter:
    def prompt_list(self, message: str, choices: list[Choice]) -> Optional[str]:
        if not choices:
            return None
        return ChoiceListApp(message, choices).run()

    def prompt_checkbox(
        self, message: str, choices: list[Choice]
    ) -> Optional[list[str]]:
        if not choices:
            return []
        return ChoiceCheckboxApp(message, choices).run()

    def prompt_confirm(self, message: str, default: bool = False) -> Optional[bool]:
        try:
            return click.confirm(message, default=default)
        except click.Abort:
            return None
