from roo_init.tui.prompts import TerminalPrompter
from roo_init.tui.renderers import RooConsoleUI

__all__ = ["RooConsoleUI", "TerminalPrompter"]
