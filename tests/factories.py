from typing import Any, Optional

from roo_init.interfaces import Choice


class RecordingUI:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def _record(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def info(self, message: str, title: Optional[str] = None) -> None:
        self._record("info", message)

    def success(self, message: str, title: Optional[str] = None) -> None:
        self._record("success", message)

    def warning(self, message: str, title: Optional[str] = None) -> None:
        self._record("warning", message)

    def error(self, message: str, title: Optional[str] = None) -> None:
        self._record("error", message)

    def of(self, level: str) -> list[str]:
        return [message for kind, message in self.messages if kind == level]


class ScriptedPrompter:
    """Replays queued answers; records every prompt it was shown."""

    def __init__(
        self,
        lists: Optional[list[Optional[str]]] = None,
        checkboxes: Optional[list[Optional[list[str]]]] = None,
        confirms: Optional[list[Optional[bool]]] = None,
    ) -> None:
        self.lists = list(lists or [])
        self.checkboxes = list(checkboxes or [])
        self.confirms = list(confirms or [])
        self.calls: list[tuple[str, str, list[Choice]]] = []

    def prompt_list(self, message: str, choices: list[Choice]) -> Optional[str]:
        self.calls.append(("list", message, choices))
        return self.lists.pop(0)

    def prompt_checkbox(
        self, message: str, choices: list[Choice]
    ) -> Optional[list[str]]:
        self.calls.append(("checkbox", message, choices))
        return self.checkboxes.pop(0)

    def prompt_confirm(self, message: str, default: bool = False) -> Optional[bool]:
        self.calls.append(("confirm", message, []))
        return self.confirms.pop(0)

    def kinds(self) -> list[str]:
        return [kind for kind, _, _ in self.calls]


def rule_payload(rule_id: str, source_path: str, is_generic: bool = False) -> dict:
    return {
        "id": rule_id,
        "name": rule_id.replace("-", " ").title(),
        "description": f"{rule_id} rule",
        "sourcePath": source_path,
        "isGeneric": is_generic,
    }


def mode_payload(
    slug: str, categories: list[str], rules: Optional[list[dict]] = None, **extra: Any
) -> dict:
    payload = {
        "slug": slug,
        "name": slug.replace("-", " ").title(),
        "description": f"{slug} role",
        "categorySlugs": categories,
        "associatedRuleFiles": rules or [],
    }
    payload.update(extra)
    return payload


def category_payload(slug: str, description: Optional[str] = None) -> dict:
    payload = {"slug": slug, "name": slug.replace("-", " ").title()}
    if description is not None:
        payload["description"] = description
    return payload


