"""Shell modes, argument parsing, and dispatch."""

from .arguments import ArgumentError, Arguments
from .base_mode import CommandInput, Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode, render_context_line
from .main_mode import MainMode
from .mode_manager import ModeManager

__all__ = [
    "ArgumentError",
    "Arguments",
    "CommandInput",
    "EditMode",
    "MainMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
    "render_context_line",
]
