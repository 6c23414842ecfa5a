from enum import Enum

from roo_init.models import Provenance


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    DIM = "dim"
    WHITE = "white"


PROVENANCE_STYLE = {
    Provenance.SYSTEM.value: UIStyle.DIM.value,
    Provenance.CUSTOM.value: UIStyle.GREEN.value,
    Provenance.CUSTOM_OVERRIDES_SYSTEM.value: UIStyle.YELLOW.value,
}
