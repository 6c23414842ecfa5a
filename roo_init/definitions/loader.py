"""Load, validate and merge the system catalog with the user overlay."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable, Optional

from roo_init.definitions.repository import (
    SystemDefinitionsRepository,
    UserDefinitionsRepository,
)
from roo_init.definitions.schema import (
    validate_categories,
    validate_modes,
    validate_user_definitions,
)
from roo_init.errors import (
    InvalidDefinitionSchemaError,
    MissingRuleFileError,
    RulePathOutsideRootError,
    UnknownCategoryReferenceError,
)
from roo_init.interfaces import IDisplay
from roo_init.models import (
    CategoryDefinition,
    DefinitionCatalog,
    MergedEntry,
    ModeDefinition,
    Origin,
    Provenance,
    SourceFilter,
    T,
    UserDefinitions,
)
from roo_init.utils import compact_home_path


def duplicate_slugs(items: Iterable[T]) -> list[str]:
    counts = Counter(item.slug for item in items)
    return [slug for slug, count in counts.items() if count > 1]


def merge_by_slug(system: Iterable[T], user: Iterable[T]) -> list[MergedEntry[T]]:
    """Overlay user entries onto system entries by slug.

    System order is kept; an override replaces its system entry in place and
    new user slugs are appended in the order they appear.
    """
    merged: dict[str, MergedEntry[T]] = {}
    for item in system:
        merged[item.slug] = MergedEntry(definition=item, provenance=Provenance.SYSTEM)
    system_slugs = set(merged)

    for item in user:
        provenance = (
            Provenance.CUSTOM_OVERRIDES_SYSTEM
            if item.slug in system_slugs
            else Provenance.CUSTOM
        )
        merged[item.slug] = MergedEntry(definition=item, provenance=provenance)
    return list(merged.values())


class DefinitionLoader:
    def __init__(
        self,
        system: SystemDefinitionsRepository,
        user: UserDefinitionsRepository,
        ui: IDisplay,
    ) -> None:
        self.system = system
        self.user = user
        self.ui = ui

    def rules_root(self, origin: Origin) -> Path:
        if origin == Origin.USER:
            return self.user.rules_dir
        return self.system.rules_dir

    def load_definitions(self) -> DefinitionCatalog:
        system_modes = self.load_system_modes()
        system_categories = self.load_system_categories()
        overlay = self.load_user_definitions()

        categories = merge_by_slug(system_categories, overlay.custom_categories)
        modes = merge_by_slug(system_modes, overlay.custom_modes)
        catalog = DefinitionCatalog(modes=tuple(modes), categories=tuple(categories))

        self.validate_category_references(catalog)
        self.validate_rule_paths(catalog)
        return catalog

    def load_system_modes(self) -> list[ModeDefinition]:
        payload = self.system.load_modes_payload()
        result = validate_modes(payload, Origin.SYSTEM)
        if not result.ok or result.value is None:
            raise InvalidDefinitionSchemaError(
                self.system.modes_path, result.messages()
            )
        _reject_duplicates(result.value, self.system.modes_path)
        return result.value

    def load_system_categories(self) -> list[CategoryDefinition]:
        payload = self.system.load_categories_payload()
        result = validate_categories(payload, Origin.SYSTEM)
        if not result.ok or result.value is None:
            raise InvalidDefinitionSchemaError(
                self.system.categories_path, result.messages()
            )
        _reject_duplicates(result.value, self.system.categories_path)
        return result.value

    def load_user_definitions(self) -> UserDefinitions:
        path = compact_home_path(self.user.definitions_path)
        payload, error = self.user.load_payload()
        if error is not None:
            self.ui.warning(
                f"Could not read user definitions at {path}: {error}. "
                "Proceeding without user definitions.",
                title="user definitions",
            )
            return UserDefinitions()
        if payload is None and not self.user.has_document():
            return UserDefinitions()

        result = validate_user_definitions(payload)
        if not result.ok or result.value is None:
            details = "\n".join(f"- {message}" for message in result.messages())
            self.ui.warning(
                f"Invalid structure in user definitions at {path}:\n{details}\n"
                "Proceeding without user definitions.",
                title="user definitions",
            )
            return UserDefinitions()
        self._warn_duplicates(result.value.custom_modes, "mode", path)
        self._warn_duplicates(result.value.custom_categories, "category", path)
        return result.value

    def validate_category_references(self, catalog: DefinitionCatalog) -> None:
        for mode in catalog.mode_definitions:
            for category_slug in mode.category_slugs:
                if not catalog.has_category(category_slug):
                    raise UnknownCategoryReferenceError(mode.slug, category_slug)

    def validate_rule_paths(self, catalog: DefinitionCatalog) -> None:
        for mode in catalog.mode_definitions:
            rules_root = self.rules_root(mode.origin)
            for rule in mode.associated_rule_files:
                rule_path = rule.resolve_source(rules_root)
                if not rule_path.is_relative_to(rules_root.resolve()):
                    raise RulePathOutsideRootError(mode.slug, rule.id, rule_path)
                if not rule_path.is_file():
                    raise MissingRuleFileError(mode.slug, rule.id, rule_path)

    def system_modes(self) -> list[MergedEntry[ModeDefinition]]:
        return [
            MergedEntry(definition=mode, provenance=Provenance.SYSTEM)
            for mode in self.load_system_modes()
        ]

    def system_categories(self) -> list[MergedEntry[CategoryDefinition]]:
        return [
            MergedEntry(definition=category, provenance=Provenance.SYSTEM)
            for category in self.load_system_categories()
        ]

    def merged_modes(self) -> list[MergedEntry[ModeDefinition]]:
        overlay = self.load_user_definitions()
        return merge_by_slug(self.load_system_modes(), overlay.custom_modes)

    def merged_categories(self) -> list[MergedEntry[CategoryDefinition]]:
        overlay = self.load_user_definitions()
        return merge_by_slug(self.load_system_categories(), overlay.custom_categories)

    def list_modes(
        self, source: SourceFilter = SourceFilter.CUSTOM
    ) -> list[MergedEntry[ModeDefinition]]:
        if source == SourceFilter.SYSTEM:
            return self.system_modes()
        return _filter_source(self.merged_modes(), source)

    def list_categories(
        self, source: SourceFilter = SourceFilter.CUSTOM
    ) -> list[MergedEntry[CategoryDefinition]]:
        if source == SourceFilter.SYSTEM:
            return self.system_categories()
        return _filter_source(self.merged_categories(), source)

    def _warn_duplicates(self, items: Iterable[T], entity: str, path: str) -> None:
        duplicates = duplicate_slugs(items)
        if duplicates:
            self.ui.warning(
                f"Duplicate custom {entity} slug(s) in {path}: "
                f"{', '.join(duplicates)}. The later entry wins.",
                title="user definitions",
            )


def _filter_source(
    entries: list[MergedEntry[T]], source: Optional[SourceFilter]
) -> list[MergedEntry[T]]:
    if source == SourceFilter.CUSTOM:
        return [entry for entry in entries if entry.provenance != Provenance.SYSTEM]
    return entries


def _reject_duplicates(items: Iterable[T], path: Path) -> None:
    duplicates = duplicate_slugs(items)
    if duplicates:
        raise InvalidDefinitionSchemaError(
            path, [f'duplicate slug "{slug}"' for slug in duplicates]
        )
