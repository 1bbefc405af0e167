# src/sourcetrust/settings/__init__.py

"""
Settings store boundary and its implementations.
"""

from .memory import InMemorySettingsStore
from .store import (
    SERVICE_INDEX_KEY,
    TRUSTED_SOURCES_SECTION,
    SettingsStore,
    SettingsStoreError,
)
from .yaml_store import YamlSettingsStore

__all__ = [
    "SERVICE_INDEX_KEY",
    "TRUSTED_SOURCES_SECTION",
    "InMemorySettingsStore",
    "SettingsStore",
    "SettingsStoreError",
    "YamlSettingsStore",
]
