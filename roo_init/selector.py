from dataclasses import dataclass, field
from typing import Optional

from roo_init.interfaces import Choice, IDisplay, IPrompter
from roo_init.models import CategoryDefinition, DefinitionCatalog, ModeDefinition
from roo_init.utils import split_csv

CONTINUE_PROMPT = "Do you want to select modes from another category?"


@dataclass(frozen=True)
class NonInteractiveSelection:
    selected_modes: list[str] = field(default_factory=list)
    invalid_mode_slugs: list[str] = field(default_factory=list)
    invalid_category_slugs: list[str] = field(default_factory=list)

    @property
    def invalid_items(self) -> list[str]:
        return [f"mode: {slug}" for slug in self.invalid_mode_slugs] + [
            f"category: {slug}" for slug in self.invalid_category_slugs
        ]


def category_choice(category: CategoryDefinition) -> Choice:
    label = category.name
    if category.description:
        label = f"{category.name} - {category.description}"
    return Choice(label=label, value=category.slug)


def mode_choice(mode: ModeDefinition) -> Choice:
    return Choice(
        label=f"{mode.name} ({mode.slug}) - {mode.description}", value=mode.slug
    )


class ModeSelector:
    def __init__(
        self,
        catalog: DefinitionCatalog,
        ui: IDisplay,
        prompter: Optional[IPrompter] = None,
    ) -> None:
        self.catalog = catalog
        self.ui = ui
        self.prompter = prompter

    def select_modes_non_interactively(
        self, modes: Optional[str] = None, category: Optional[str] = None
    ) -> NonInteractiveSelection:
        selected: dict[str, None] = {}
        invalid_modes: list[str] = []
        invalid_categories: list[str] = []

        for slug in split_csv(modes):
            if self.catalog.has_mode(slug):
                selected.setdefault(slug)
            else:
                invalid_modes.append(slug)

        for category_slug in split_csv(category):
            if not self.catalog.has_category(category_slug):
                invalid_categories.append(category_slug)
                continue
            for mode in self.catalog.modes_in_category(category_slug):
                selected.setdefault(mode.slug)

        return NonInteractiveSelection(
            selected_modes=list(selected),
            invalid_mode_slugs=invalid_modes,
            invalid_category_slugs=invalid_categories,
        )

    def select_modes_interactively(self) -> list[str]:
        prompter = self.prompter
        if prompter is None:
            raise RuntimeError("Interactive selection requires a prompter")

        categories = self.catalog.category_definitions
        if not categories:
            self.ui.warning("No categories available for selection.")
            return []

        selected: dict[str, None] = {}
        while True:
            category = self._prompt_for_category(prompter, categories)
            if category is None:
                self.ui.info("Category selection cancelled.")
                return []

            for slug in self._prompt_for_modes(prompter, category):
                selected.setdefault(slug)

            if len(categories) == 1:
                break
            if not prompter.prompt_confirm(CONTINUE_PROMPT, default=False):
                break

        return list(selected)

    def _prompt_for_category(
        self, prompter: IPrompter, categories: list[CategoryDefinition]
    ) -> Optional[CategoryDefinition]:
        slug = prompter.prompt_list(
            "Select a category:", [category_choice(item) for item in categories]
        )
        if slug is None:
            return None
        return self.catalog.get_category(slug)

    def _prompt_for_modes(
        self, prompter: IPrompter, category: CategoryDefinition
    ) -> list[str]:
        modes = self.catalog.modes_in_category(category.slug)
        if not modes:
            self.ui.warning(f"No modes available in category: {category.name}")
            return []

        slugs = prompter.prompt_checkbox(
            f"Select modes from {category.name}:", [mode_choice(mode) for mode in modes]
        )
        if slugs is None:
            self.ui.info(f"Mode selection from category {category.name} cancelled.")
            return []
        return [slug for slug in slugs if self.catalog.has_mode(slug)]
