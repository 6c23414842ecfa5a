from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class Choice:
    label: str
    value: str


class IDisplay(Protocol):
    def info(self, message: str, title: Optional[str] = None) -> None: ...

    def success(self, message: str, title: Optional[str] = None) -> None: ...

    def warning(self, message: str, title: Optional[str] = None) -> None: ...

    def error(self, message: str, title: Optional[str] = None) -> None: ...


class IPrompter(Protocol):
    def prompt_list(self, message: str, choices: list[Choice]) -> Optional[str]:
        """Return the chosen value, or None when the user cancels."""
        ...

    def prompt_checkbox(
        self, message: str, choices: list[Choice]
    ) -> Optional[list[str]]:
        """Return the checked values, or None when the user cancels."""
        ...

    def prompt_confirm(self, message: str, default: bool = False) -> Optional[bool]:
        """Return the answer, or None when the user cancels."""
        ...
