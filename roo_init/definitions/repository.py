"""Locations and raw I/O for the system catalog and the user overlay."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Optional

from roo_init.constants import (
    APP_NAME,
    CATEGORIES_FILENAME,
    GENERIC_RULES_DIRNAME,
    MODES_FILENAME,
    RULES_DIRNAME,
    USER_DEFINITIONS_FILENAME,
)
from roo_init.errors import InvalidJsonFormatError, MissingDefinitionFileError
from roo_init.models import UserDefinitions
from roo_init.utils import read_json, read_json_safe, write_json

BUNDLED_CATALOG_DIR = Path(__file__).resolve().parent / "catalog"


class SystemDefinitionsRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or BUNDLED_CATALOG_DIR

    @property
    def root(self) -> Path:
        return self._root

    @property
    def modes_path(self) -> Path:
        return self.root / MODES_FILENAME

    @property
    def categories_path(self) -> Path:
        return self.root / CATEGORIES_FILENAME

    @property
    def rules_dir(self) -> Path:
        return self.root / RULES_DIRNAME

    @property
    def generic_rules_dir(self) -> Path:
        return self.rules_dir / GENERIC_RULES_DIRNAME

    def load_modes_payload(self) -> Any:
        return self._load_required(self.modes_path)

    def load_categories_payload(self) -> Any:
        return self._load_required(self.categories_path)

    @staticmethod
    def _load_required(path: Path) -> Any:
        if not path.is_file():
            raise MissingDefinitionFileError(path)
        try:
            return read_json(path)
        except (OSError, ValueError) as exc:
            raise InvalidJsonFormatError(path, str(exc)) from exc


class UserDefinitionsRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or (Path.home() / ".config" / APP_NAME)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def definitions_path(self) -> Path:
        return self.root / USER_DEFINITIONS_FILENAME

    @property
    def rules_dir(self) -> Path:
        return self.root / RULES_DIRNAME

    def has_document(self) -> bool:
        """True when the overlay file exists and is not blank."""
        path = self.definitions_path
        return path.is_file() and bool(path.read_text(encoding="utf-8").strip())

    def load_payload(self) -> tuple[Any | None, str | None]:
        return read_json_safe(self.definitions_path)

    def save(self, definitions: UserDefinitions) -> None:
        write_json(self.definitions_path, definitions.as_payload())

    def install_rule_file(self, source: Path, relative_path: str) -> Path:
        target = self.rules_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        return target
