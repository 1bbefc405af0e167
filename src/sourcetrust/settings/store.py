"""
Abstract settings store
=======================

Contract between the trusted source registry and whatever hierarchical
key/value persistence backs it. Implementations own file formats, locking
and I/O; the registry only ever talks to this interface.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Set

from sourcetrust.normalize.schema import (
    FINGERPRINT_ALGORITHM_KEY,
    SERVICE_INDEX_KEY,
    SettingValue,
)

TRUSTED_SOURCES_SECTION = "trustedSources"

__all__ = [
    "FINGERPRINT_ALGORITHM_KEY",
    "SERVICE_INDEX_KEY",
    "TRUSTED_SOURCES_SECTION",
    "SettingsStore",
    "SettingsStoreError",
]


class SettingsStoreError(Exception):
    """Backing store is unreadable or its content is malformed."""


class SettingsStore(ABC):
    """
    Section based nested key/value store.

    Implementations:
    - InMemorySettingsStore: process-local dictionaries
    - YamlSettingsStore: a YAML document on disk
    """

    @abstractmethod
    def list_subsections(self, section: str) -> Set[str]:
        """Names of every subsection under a section"""

    @abstractmethod
    def read_nested(self, section: str, subsection: str) -> List[SettingValue]:
        """Nested values of a subsection, in stored order; empty when absent"""

    @abstractmethod
    def write_nested(
        self, section: str, subsection: str, values: Iterable[SettingValue]
    ) -> None:
        """Replace all nested values of a subsection"""

    @abstractmethod
    def delete_section(self, section: str) -> None:
        """Remove a section with all of its subsections"""
