"""
Restaurant settings storage.

Leaf package: it knows how to persist, cache and validate BusinessRules, and
nothing about opening hours evaluation.
"""

from .backends import SettingsBackend, MemoryBackend, JsonFileBackend, DatabaseBackend
from .defaults import default_rules
from .store import ConfigurationStore, RulesSnapshot
from .validation import validate_rules, MAX_BUFFER_MINUTES

__all__ = [
    'SettingsBackend',
    'MemoryBackend',
    'JsonFileBackend',
    'DatabaseBackend',
    'default_rules',
    'ConfigurationStore',
    'RulesSnapshot',
    'validate_rules',
    'MAX_BUFFER_MINUTES',
]
