from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar


class Origin(str, Enum):
    SYSTEM = "system"
    USER = "user"


class Provenance(str, Enum):
    SYSTEM = "system"
    CUSTOM = "custom"
    CUSTOM_OVERRIDES_SYSTEM = "custom (overrides system)"


class SourceFilter(str, Enum):
    CUSTOM = "custom"
    SYSTEM = "system"
    ALL = "all"


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    description: str
    source_path: str
    is_generic: bool = False

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Rule":
        return cls(
            id=payload["id"],
            name=payload["name"],
            description=payload["description"],
            source_path=payload["sourcePath"],
            is_generic=payload["isGeneric"],
        )

    def resolve_source(self, rules_root: Path) -> Path:
        return (rules_root / self.source_path).resolve()

    def as_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "sourcePath": self.source_path,
            "isGeneric": self.is_generic,
        }


@dataclass(frozen=True)
class CategoryDefinition:
    slug: str
    name: str
    origin: Origin
    description: Optional[str] = None

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], origin: Origin
    ) -> "CategoryDefinition":
        return cls(
            slug=payload["slug"],
            name=payload["name"],
            origin=origin,
            description=payload.get("description"),
        )

    def as_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"slug": self.slug, "name": self.name}
        if self.description is not None:
            out["description"] = self.description
        return out


@dataclass(frozen=True)
class ModeDefinition:
    slug: str
    name: str
    description: str
    category_slugs: tuple[str, ...]
    associated_rule_files: tuple[Rule, ...]
    origin: Origin
    custom_instructions: Optional[str] = None
    groups: Optional[list[Any]] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any], origin: Origin) -> "ModeDefinition":
        return cls(
            slug=payload["slug"],
            name=payload["name"],
            description=payload["description"],
            category_slugs=tuple(payload["categorySlugs"]),
            associated_rule_files=tuple(
                Rule.from_payload(item) for item in payload["associatedRuleFiles"]
            ),
            origin=origin,
            custom_instructions=payload.get("customInstructions"),
            groups=payload.get("groups"),
        )

    def as_payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
        }
        if self.custom_instructions is not None:
            out["customInstructions"] = self.custom_instructions
        if self.groups is not None:
            out["groups"] = self.groups
        out["categorySlugs"] = list(self.category_slugs)
        out["associatedRuleFiles"] = [
            rule.as_payload() for rule in self.associated_rule_files
        ]
        return out

    def as_roomodes_entry(self) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "slug": self.slug,
            "name": self.name,
            "roleDefinition": self.description,
        }
        if self.custom_instructions is not None:
            entry["customInstructions"] = self.custom_instructions
        if self.groups is not None:
            entry["groups"] = self.groups
        entry["source"] = self.origin.value
        return entry


@dataclass(frozen=True)
class UserDefinitions:
    custom_modes: tuple[ModeDefinition, ...] = ()
    custom_categories: tuple[CategoryDefinition, ...] = ()

    def is_empty(self) -> bool:
        return not self.custom_modes and not self.custom_categories

    def as_payload(self) -> dict[str, Any]:
        return {
            "customModes": [mode.as_payload() for mode in self.custom_modes],
            "customCategories": [
                category.as_payload() for category in self.custom_categories
            ],
        }


T = TypeVar("T", ModeDefinition, CategoryDefinition)


@dataclass(frozen=True)
class MergedEntry(Generic[T]):
    definition: T
    provenance: Provenance

    @property
    def slug(self) -> str:
        return self.definition.slug

    def as_row(self) -> dict[str, str]:
        return {
            "slug": self.definition.slug,
            "name": self.definition.name,
            "description": self.definition.description or "-",
            "source": self.provenance.value,
        }


@dataclass(frozen=True)
class DefinitionCatalog:
    modes: tuple[MergedEntry[ModeDefinition], ...] = ()
    categories: tuple[MergedEntry[CategoryDefinition], ...] = ()
    _mode_index: dict[str, ModeDefinition] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _category_index: dict[str, CategoryDefinition] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._mode_index.update({entry.slug: entry.definition for entry in self.modes})
        self._category_index.update(
            {entry.slug: entry.definition for entry in self.categories}
        )

    @property
    def mode_definitions(self) -> list[ModeDefinition]:
        return [entry.definition for entry in self.modes]

    @property
    def category_definitions(self) -> list[CategoryDefinition]:
        return [entry.definition for entry in self.categories]

    def has_mode(self, slug: str) -> bool:
        return slug in self._mode_index

    def has_category(self, slug: str) -> bool:
        return slug in self._category_index

    def get_mode(self, slug: str) -> Optional[ModeDefinition]:
        return self._mode_index.get(slug)

    def get_category(self, slug: str) -> Optional[CategoryDefinition]:
        return self._category_index.get(slug)

    def modes_in_category(self, category_slug: str) -> list[ModeDefinition]:
        return [
            mode
            for mode in self.mode_definitions
            if category_slug in mode.category_slugs
        ]

    def resolve_modes(self, slugs: list[str]) -> list[ModeDefinition]:
        return [self._mode_index[slug] for slug in slugs if slug in self._mode_index]
