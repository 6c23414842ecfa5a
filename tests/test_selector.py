from pathlib import Path

import pytest

from roo_init.definitions import (
    DefinitionLoader,
    SystemDefinitionsRepository,
    UserDefinitionsRepository,
)
from roo_init.models import DefinitionCatalog
from roo_init.selector import (
    CONTINUE_PROMPT,
    ModeSelector,
    category_choice,
    mode_choice,
)

from tests.factories import ScriptedPrompter


@pytest.fixture
def catalog(sample_catalog: Path, user_root: Path, recording_ui) -> DefinitionCatalog:
    return DefinitionLoader(
        system=SystemDefinitionsRepository(sample_catalog),
        user=UserDefinitionsRepository(user_root),
        ui=recording_ui,
    ).load_definitions()


@pytest.fixture
def single_category_catalog(minimal_catalog: Path, user_root: Path, recording_ui):
    return DefinitionLoader(
        system=SystemDefinitionsRepository(minimal_catalog),
        user=UserDefinitionsRepository(user_root),
        ui=recording_ui,
    ).load_definitions()


def test_non_interactive_unions_modes_and_categories(catalog, recording_ui) -> None:
    selector = ModeSelector(catalog, recording_ui)

    selection = selector.select_modes_non_interactively(modes="tester", category="code")

    assert selection.selected_modes == ["tester", "architect", "coder"]
    assert selection.invalid_items == []


def test_non_interactive_dedupes_and_trims(catalog, recording_ui) -> None:
    selector = ModeSelector(catalog, recording_ui)

    selection = selector.select_modes_non_interactively(
        modes=" coder , coder,,architect ", category=None
    )

    assert selection.selected_modes == ["coder", "architect"]


def test_non_interactive_collects_invalid_slugs(catalog, recording_ui) -> None:
    selector = ModeSelector(catalog, recording_ui)

    selection = selector.select_modes_non_interactively(
        modes="coder,ghost", category="qa,nowhere"
    )

    assert selection.selected_modes == ["coder", "tester"]
    assert selection.invalid_mode_slugs == ["ghost"]
    assert selection.invalid_category_slugs == ["nowhere"]
    assert selection.invalid_items == ["mode: ghost", "category: nowhere"]


def test_non_interactive_with_nothing_selects_nothing(catalog, recording_ui) -> None:
    selection = ModeSelector(catalog, recording_ui).select_modes_non_interactively()

    assert selection.selected_modes == []
    assert selection.invalid_items == []


def test_choice_labels(catalog) -> None:
    assert category_choice(catalog.get_category("qa")).label == "Qa - Quality modes"
    assert mode_choice(catalog.get_mode("coder")).label == "Coder (coder) - coder role"
    assert mode_choice(catalog.get_mode("coder")).value == "coder"


def test_interactive_requires_a_prompter(catalog, recording_ui) -> None:
    with pytest.raises(RuntimeError):
        ModeSelector(catalog, recording_ui).select_modes_interactively()


def test_interactive_single_category_skips_continue_prompt(
    single_category_catalog, recording_ui
) -> None:
    prompter = ScriptedPrompter(lists=["code"], checkboxes=[["m1"]])

    selected = ModeSelector(
        single_category_catalog, recording_ui, prompter
    ).select_modes_interactively()

    assert selected == ["m1"]
    assert prompter.kinds() == ["list", "checkbox"]


def test_interactive_loops_until_declined(catalog, recording_ui) -> None:
    prompter = ScriptedPrompter(
        lists=["code", "qa"],
        checkboxes=[["coder", "tester"], ["tester"]],
        confirms=[True, False],
    )

    selector = ModeSelector(catalog, recording_ui, prompter)
    selected = selector.select_modes_interactively()

    assert selected == ["coder", "tester"]
    assert prompter.kinds() == [
        "list", "checkbox", "confirm", "list", "checkbox", "confirm"
    ]
    assert prompter.calls[2][1] == CONTINUE_PROMPT
    category_labels = [choice.value for choice in prompter.calls[0][2]]
    assert category_labels == ["code", "qa", "empty"]


def test_interactive_category_cancel_discards_selection(catalog, recording_ui) -> None:
    prompter = ScriptedPrompter(
        lists=["code", None], checkboxes=[["coder"]], confirms=[True]
    )

    selector = ModeSelector(catalog, recording_ui, prompter)
    selected = selector.select_modes_interactively()

    assert selected == []
    assert recording_ui.of("info") == ["Category selection cancelled."]


def test_interactive_empty_category_warns_and_continues(catalog, recording_ui) -> None:
    prompter = ScriptedPrompter(
        lists=["empty", "qa"], checkboxes=[["tester"]], confirms=[True, False]
    )

    selector = ModeSelector(catalog, recording_ui, prompter)
    selected = selector.select_modes_interactively()

    assert selected == ["tester"]
    assert recording_ui.of("warning") == ["No modes available in category: Empty"]
    assert prompter.kinds() == ["list", "confirm", "list", "checkbox", "confirm"]


def test_interactive_checkbox_cancel_adds_nothing(catalog, recording_ui) -> None:
    prompter = ScriptedPrompter(
        lists=["code", "qa"], checkboxes=[None, ["tester"]], confirms=[True, None]
    )

    selector = ModeSelector(catalog, recording_ui, prompter)
    selected = selector.select_modes_interactively()

    assert selected == ["tester"]
    assert recording_ui.of("info") == ["Mode selection from category Code cancelled."]


def test_interactive_without_categories_warns(recording_ui) -> None:
    prompter = ScriptedPrompter()

    selected = ModeSelector(
        DefinitionCatalog(), recording_ui, prompter
    ).select_modes_interactively()

    assert selected == []
    assert prompter.calls == []
    assert recording_ui.of("warning") == ["No categories available for selection."]
