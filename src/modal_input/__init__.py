"""UI-agnostic modal (vim-style) text input state machine."""

__all__ = [
    "actions",
    "adapters",
    "config",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
