import sys
import json
from pathlib import Path
from typing import Any, Optional

from click.testing import CliRunner
import pytest

from tests.factories import (
    RecordingUI,
    category_payload,
    mode_payload,
    rule_payload,
)


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.delenv("ROO_INIT_DEFINITIONS", raising=False)
    monkeypatch.delenv("ROO_INIT_CONFIG_DIR", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    return tmp_path / "definitions"


@pytest.fixture
def user_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "roo-init"


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def make_system_catalog(system_root: Path, write_json):
    def _make(
        categories: list[dict],
        modes: list[dict],
        rule_files: Optional[dict[str, str]] = None,
    ) -> Path:
        write_json(system_root / "categories.json", categories)
        write_json(system_root / "modes.json", modes)
        for relative, content in (rule_files or {}).items():
            path = system_root / "rules" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return system_root

    return _make


@pytest.fixture
def make_user_overlay(user_root: Path, write_json):
    def _make(
        payload: Any, rule_files: Optional[dict[str, str]] = None
    ) -> Path:
        write_json(user_root / "user-definitions.json", payload)
        for relative, content in (rule_files or {}).items():
            path = user_root / "rules" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return user_root

    return _make


@pytest.fixture
def minimal_catalog(make_system_catalog) -> Path:
    return make_system_catalog(
        categories=[category_payload("code", "Coding modes")],
        modes=[mode_payload("m1", ["code"])],
    )


@pytest.fixture
def sample_catalog(make_system_catalog) -> Path:
    return make_system_catalog(
        categories=[
            category_payload("code", "Coding modes"),
            category_payload("qa", "Quality modes"),
            category_payload("empty", "Nothing here"),
        ],
        modes=[
            mode_payload(
                "architect",
                ["code"],
                [rule_payload("plan", "architect/plan.md")],
                customInstructions="Plan first.",
                groups=["read", ["edit", {"fileRegex": "\\.md$"}]],
            ),
            mode_payload("coder", ["code"], [rule_payload("style", "coder/style.md")]),
            mode_payload(
                "tester", ["qa", "code"], [rule_payload("tdd", "tester/tdd.md")]
            ),
        ],
        rule_files={
            "architect/plan.md": "# plan\n",
            "coder/style.md": "# style\n",
            "tester/tdd.md": "# tdd\n",
            "generic/00-shared.md": "# shared\n",
        },
    )


@pytest.fixture
def recording_ui() -> RecordingUI:
    return RecordingUI()


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
