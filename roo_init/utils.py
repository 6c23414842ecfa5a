import json
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def read_json_safe(path: Path) -> tuple[Any | None, str | None]:
    """Read an optional JSON file.

    Returns ``(payload, None)`` on success, ``(None, None)`` when the file is
    missing or blank, and ``(None, reason)`` when it cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None, None
    except (OSError, UnicodeDecodeError) as exc:
        return None, str(exc)
    if not text.strip():
        return None, None
    try:
        return json.loads(text), None
    except json.JSONDecodeError as exc:
        return None, str(exc)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home or text.startswith(f"{home}/"):
        return "~" + text[len(home) :]
    return text


def compact_home_paths_in_text(text: str) -> str:
    return text.replace(f"{Path.home()}/", "~/")


def display_path(path: Path, cwd: Path | None = None) -> str:
    """Show ``path`` relative to ``cwd`` when it lies inside it."""
    base = (cwd or Path.cwd()).resolve()
    try:
        relative = path.resolve().relative_to(base)
    except ValueError:
        return compact_home_path(path)
    return str(relative)
