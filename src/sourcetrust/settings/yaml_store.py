# src/sourcetrust/settings/yaml_store.py

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Set, Union

import yaml
from pydantic import ValidationError

from sourcetrust.normalize.schema import FINGERPRINT_ALGORITHM_KEY, SettingValue
from sourcetrust.settings.store import SettingsStore, SettingsStoreError

logger = logging.getLogger(__name__)


class YamlSettingsStore(SettingsStore):
    """
    Settings store persisted as a single YAML document.

    Layout::

        trustedSources:
          nuget.org:
            - key: serviceIndex
              value: https://api.nuget.org/v3/index.json
            - key: 0E5F38F57DC1BCC806D8494F4F90FBCEDD988B46760709CBEEC6F4219AA6157D
              value: CN=NuGet.org Repository by Microsoft
              priority: 0
              fingerprintAlgorithm: SHA256

    The file is read on every call and rewritten in full on every write.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise SettingsStoreError(f"Invalid settings file {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsStoreError(f"Settings file {self.path} must contain a mapping")
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        logger.debug(f"Wrote settings file {self.path}")

    def _section(self, data: Dict[str, Any], section: str) -> Dict[str, Any]:
        subsections = data.get(section) or {}
        if not isinstance(subsections, dict):
            raise SettingsStoreError(f"Section '{section}' in {self.path} must be a mapping")
        # YAML loads names like 2024 or yes as int/bool
        return {str(name): items for name, items in subsections.items()}

    @staticmethod
    def _decode(item: Any, location: str) -> SettingValue:
        if not isinstance(item, dict) or item.get("key") is None or "value" not in item:
            raise SettingsStoreError(f"Malformed entry under {location}: {item!r}")

        extra = {
            name: str(data)
            for name, data in item.items()
            if name not in ("key", "value", "priority")
        }
        try:
            return SettingValue.from_additional_data(
                key=str(item["key"]),
                value="" if item["value"] is None else str(item["value"]),
                priority=item.get("priority"),
                additional_data=extra,
            )
        except ValidationError as e:
            raise SettingsStoreError(f"Malformed entry under {location}: {e}") from e

    @staticmethod
    def _encode(value: SettingValue) -> Dict[str, Any]:
        item: Dict[str, Any] = {"key": value.key, "value": value.value}
        if value.priority is not None:
            item["priority"] = value.priority
        if value.fingerprint_algorithm is not None:
            item[FINGERPRINT_ALGORITHM_KEY] = value.fingerprint_algorithm
        return item

    def list_subsections(self, section: str) -> Set[str]:
        return set(self._section(self._load(), section))

    def read_nested(self, section: str, subsection: str) -> List[SettingValue]:
        items = self._section(self._load(), section).get(subsection) or []
        if not isinstance(items, list):
            raise SettingsStoreError(
                f"Subsection '{section}/{subsection}' in {self.path} must be a list"
            )
        return [self._decode(item, f"{section}/{subsection}") for item in items]

    def write_nested(
        self, section: str, subsection: str, values: Iterable[SettingValue]
    ) -> None:
        data = self._load()
        subsections = dict(self._section(data, section))
        encoded = [self._encode(v) for v in values]
        if encoded:
            subsections[subsection] = encoded
        else:
            subsections.pop(subsection, None)

        if subsections:
            data[section] = subsections
        else:
            data.pop(section, None)
        self._save(data)

    def delete_section(self, section: str) -> None:
        data = self._load()
        if section in data:
            del data[section]
            self._save(data)
