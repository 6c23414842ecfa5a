"""Interactive Textual-based pickers for category and mode selection."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, OptionList, SelectionList, Static
from textual.widgets.option_list import Option
from textual.widgets.selection_list import Selection

from roo_init.interfaces import Choice

_PICKER_CSS = """
Screen {
    layout: vertical;
}
#info {
    height: 3;
    content-align: center middle;
    background: $primary-darken-2;
    color: $text;
    padding: 0 1;
}
OptionList, SelectionList {
    height: 1fr;
}
"""


class ChoiceListApp(App[str | None]):
    """Single-choice picker; exits with the chosen value or None."""

    TITLE = "roo-init"
    CSS = _PICKER_CSS

    BINDINGS = [
        Binding("q", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, message: str, choices: list[Choice]) -> None:
        super().__init__()
        self._message = message
        self._choices = choices

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"{self._message} | enter: choose, q: cancel",
            id="info",
        )
        yield OptionList(
            *[Option(choice.label, id=choice.value) for choice in self._choices]
        )
        yield Footer()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(event.option_id)

    def action_cancel(self) -> None:
        self.exit(None)


class ChoiceCheckboxApp(App[list[str] | None]):
    """Multi-select picker; exits with the checked values or None."""

    TITLE = "roo-init"
    CSS = _PICKER_CSS

    BINDINGS = [
        Binding("a", "select_all", "Select All"),
        Binding("n", "select_none", "Select None"),
        # The focused SelectionList binds enter to toggle; confirm must win.
        Binding("enter", "confirm", "Confirm", priority=True),
        Binding("q", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, message: str, choices: list[Choice]) -> None:
        super().__init__()
        self._message = message
        self._choices = choices

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"{self._message} | space: toggle, a: all, n: none, "
            "enter: confirm, q: cancel",
            id="info",
        )
        selections = [
            Selection(choice.label, choice.value, False) for choice in self._choices
        ]
        yield SelectionList[str](*selections)
        yield Footer()

    def action_select_all(self) -> None:
        self.query_one(SelectionList).select_all()

    def action_select_none(self) -> None:
        self.query_one(SelectionList).deselect_all()

    def action_confirm(self) -> None:
        selected = set(self.query_one(SelectionList).selected)
        self.exit(
            [choice.value for choice in self._choices if choice.value in selected]
        )

    def action_cancel(self) -> None:
        self.exit(None)
