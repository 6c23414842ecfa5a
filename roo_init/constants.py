from typing import Final


APP_NAME: Final[str] = "roo-init"

MODES_FILENAME: Final[str] = "modes.json"
CATEGORIES_FILENAME: Final[str] = "categories.json"
USER_DEFINITIONS_FILENAME: Final[str] = "user-definitions.json"

RULES_DIRNAME: Final[str] = "rules"
GENERIC_RULES_DIRNAME: Final[str] = "generic"

ROOMODES_FILENAME: Final[str] = ".roomodes"
ROO_DIRNAME: Final[str] = ".roo"

DEFINITIONS_ENVVAR: Final[str] = "ROO_INIT_DEFINITIONS"
CONFIG_DIR_ENVVAR: Final[str] = "ROO_INIT_CONFIG_DIR"

SLUG_PATTERN: Final[str] = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
