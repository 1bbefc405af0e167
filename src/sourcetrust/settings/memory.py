# src/sourcetrust/settings/memory.py

import logging
from typing import Dict, Iterable, List, Optional, Set

from sourcetrust.normalize.schema import SettingValue
from sourcetrust.settings.store import SettingsStore

logger = logging.getLogger(__name__)


class InMemorySettingsStore(SettingsStore):
    """Dictionary backed store for tests and embedding."""

    def __init__(self, sections: Optional[Dict[str, Dict[str, List[SettingValue]]]] = None):
        self._sections: Dict[str, Dict[str, List[SettingValue]]] = {}
        for section, subsections in (sections or {}).items():
            for subsection, values in subsections.items():
                self.write_nested(section, subsection, values)

    def list_subsections(self, section: str) -> Set[str]:
        return set(self._sections.get(section, {}))

    def read_nested(self, section: str, subsection: str) -> List[SettingValue]:
        return list(self._sections.get(section, {}).get(subsection, []))

    def write_nested(
        self, section: str, subsection: str, values: Iterable[SettingValue]
    ) -> None:
        values = list(values)
        subsections = self._sections.setdefault(section, {})
        if values:
            subsections[subsection] = values
        else:
            subsections.pop(subsection, None)
        logger.debug(f"Stored {len(values)} values under {section}/{subsection}")

    def delete_section(self, section: str) -> None:
        self._sections.pop(section, None)
