"""Textual host for the inline diagnostics mode."""

from .controller import (
    DEFAULT_KEYMAP,
    SHOW_COMMAND,
    TOGGLE_COMMAND,
    TextualInlineAdapter,
    TextualUIHooks,
)

__all__ = [
    "DEFAULT_KEYMAP",
    "SHOW_COMMAND",
    "TOGGLE_COMMAND",
    "TextualInlineAdapter",
    "TextualUIHooks",
]
