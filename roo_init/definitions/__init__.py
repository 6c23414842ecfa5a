from roo_init.definitions.loader import DefinitionLoader, merge_by_slug
from roo_init.definitions.repository import (
    SystemDefinitionsRepository,
    UserDefinitionsRepository,
)

__all__ = [
    "DefinitionLoader",
    "SystemDefinitionsRepository",
    "UserDefinitionsRepository",
    "merge_by_slug",
]
