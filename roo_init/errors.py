from pathlib import Path
from typing import Optional, Sequence


class RooInitError(Exception):
    """Base user-facing application error."""


class DefinitionLoadError(RooInitError):
    """Definitions are unavailable; the run cannot continue."""


class DefinitionFileError(DefinitionLoadError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingDefinitionFileError(DefinitionFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing required definitions file")


class InvalidJsonFormatError(DefinitionFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidDefinitionSchemaError(DefinitionFileError):
    def __init__(self, path: Path, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        detail = "; ".join(self.violations)
        super().__init__(path=path, message=f"Invalid definitions schema ({detail})")


class DefinitionIntegrityError(DefinitionLoadError):
    pass


class UnknownCategoryReferenceError(DefinitionIntegrityError):
    def __init__(self, mode_slug: str, category_slug: str) -> None:
        self.mode_slug = mode_slug
        self.category_slug = category_slug
        super().__init__(
            f'Mode "{mode_slug}" references non-existent category slug '
            f'"{category_slug}"'
        )


class MissingRuleFileError(DefinitionIntegrityError):
    def __init__(self, mode_slug: str, rule_id: str, path: Path) -> None:
        self.mode_slug = mode_slug
        self.rule_id = rule_id
        self.path = path
        super().__init__(
            f'Rule file not found for mode "{mode_slug}", rule "{rule_id}": {path}'
        )


class RulePathOutsideRootError(DefinitionIntegrityError):
    def __init__(self, mode_slug: str, rule_id: str, path: Path) -> None:
        self.mode_slug = mode_slug
        self.rule_id = rule_id
        self.path = path
        super().__init__(
            f'Rule file for mode "{mode_slug}", rule "{rule_id}" is outside '
            f"the rules directory: {path}"
        )


class MaterializationError(RooInitError):
    pass


class OverwriteConflictError(MaterializationError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File already exists: {path}. Use --force to overwrite.")


class FileSystemError(MaterializationError):
    def __init__(
        self,
        message: str,
        source: Optional[Path] = None,
        destination: Optional[Path] = None,
    ) -> None:
        self.message = message
        self.source = source
        self.destination = destination
        super().__init__(message)


class InvalidSelectionError(RooInitError):
    def __init__(self, invalid_items: Sequence[str]) -> None:
        self.invalid_items = list(invalid_items)
        detail = ", ".join(self.invalid_items) if self.invalid_items else "none given"
        super().__init__(
            f"No valid modes selected. Check --modes / --category (invalid: {detail})"
        )


class UserAbortError(RooInitError):
    def __init__(self, message: str = "Operation aborted by user.") -> None:
        super().__init__(message)


class UserDefinitionsError(RooInitError):
    """The user overlay cannot be updated."""
