"""Declarative keymap registry, default bindings and the default interpreter."""

from .models import KEYMAP_MODES, ActionBuilder, Binding, KeySequence, WhenClause, keymap_mode
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, Resolution, ResolutionMatch
from .defaults import load_default_keymaps
from .interpreter import KeymapInterpreter

__all__ = [
    "KEYMAP_MODES",
    "ActionBuilder",
    "Binding",
    "KeySequence",
    "WhenClause",
    "keymap_mode",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "Resolution",
    "ResolutionMatch",
    "load_default_keymaps",
    "KeymapInterpreter",
]
