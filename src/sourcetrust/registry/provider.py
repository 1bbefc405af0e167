# src/sourcetrust/registry/provider.py

import logging
from typing import Iterable, List, Optional

from sourcetrust.normalize.hash_utils import normalize_hash_algorithm_name
from sourcetrust.normalize.schema import (
    CertificateTrustEntry,
    SettingValue,
    TrustedSource,
)
from sourcetrust.registry.snapshot import RegistrySnapshot
from sourcetrust.settings.store import (
    SERVICE_INDEX_KEY,
    TRUSTED_SOURCES_SECTION,
    SettingsStore,
)

logger = logging.getLogger(__name__)


class TrustedSourceRegistry:
    """
    Reads and writes trusted sources through a settings store.

    Every operation re-reads the store; nothing is cached between calls.
    Writes always delete the whole trusted sources section and rewrite
    every source, so the store never holds a partially updated registry.
    Store failures propagate unchanged.
    """

    def __init__(self, store: SettingsStore):
        """
        Initialize the registry.

        Args:
            store: Settings store holding the trusted sources section
        """
        self.store = store

    def load_all(self) -> RegistrySnapshot:
        """
        Load every trusted source.

        Subsection names that differ only by case collapse to the first
        one in sorted order.

        Returns:
            Snapshot of all sources that have at least one nested value.
        """
        names = set(self.store.list_subsections(TRUSTED_SOURCES_SECTION))

        snapshot = RegistrySnapshot()
        for name in sorted(names):
            if snapshot.find(name) is not None:
                logger.warning(f"Ignoring trusted source '{name}', name differs only by case")
                continue
            source = self.load_one(name)
            if source is not None:
                snapshot.add(source)

        logger.debug(f"Loaded {len(snapshot)} trusted sources")
        return snapshot

    def load_one(self, source_name: str) -> Optional[TrustedSource]:
        """
        Load a single trusted source.

        Args:
            source_name: Source name as stored in the settings

        Returns:
            The source, or None when it has no nested values.
        """
        values = self.store.read_nested(TRUSTED_SOURCES_SECTION, source_name)
        if not values:
            return None

        source = TrustedSource(source_name=source_name)
        for value in values:
            if value.key.lower() == SERVICE_INDEX_KEY.lower():
                source.service_index = value.value
                continue

            source.certificates.append(
                CertificateTrustEntry(
                    fingerprint=value.key,
                    subject_name=value.value,
                    fingerprint_algorithm=normalize_hash_algorithm_name(
                        value.fingerprint_algorithm
                    ),
                    priority=value.priority,
                )
            )

        logger.debug(
            f"Decoded trusted source '{source_name}' with {len(source.certificates)} certificates"
        )
        return source

    def save_all(self, sources: Iterable[TrustedSource]) -> None:
        """
        Replace the whole registry with the given sources.

        Sources are written in iteration order. No de-duplication by name
        is performed.
        """
        self.store.delete_section(TRUSTED_SOURCES_SECTION)

        count = 0
        for source in sources:
            self.store.write_nested(
                TRUSTED_SOURCES_SECTION, source.source_name, self._encode(source)
            )
            count += 1

        logger.info(f"Saved {count} trusted sources")

    def save_one(self, source: TrustedSource) -> None:
        """
        Add or replace one trusted source.

        A certificate whose fingerprint is already stored for the same
        source keeps the stored priority. The caller's object is not
        modified.
        """
        snapshot = self.load_all()
        existing = snapshot.remove(source.source_name)

        merged = source.model_copy(deep=True)
        if existing is not None:
            for cert in merged.certificates:
                stored = existing.find_certificate(cert.fingerprint)
                if stored is not None:
                    cert.priority = stored.priority

        snapshot.add(merged)
        self.save_all(snapshot)
        logger.info(
            f"{'Replaced' if existing is not None else 'Added'} trusted source '{source.source_name}'"
        )

    def delete_one(self, source_name: str) -> bool:
        """
        Delete a trusted source by name.

        Returns:
            True if a source was removed; False (and nothing written) otherwise.
        """
        snapshot = self.load_all()
        if snapshot.remove(source_name) is None:
            logger.debug(f"Trusted source '{source_name}' not found, nothing to delete")
            return False

        self.save_all(snapshot)
        logger.info(f"Deleted trusted source '{source_name}'")
        return True

    @staticmethod
    def _encode(source: TrustedSource) -> List[SettingValue]:
        values = [
            SettingValue(
                key=cert.fingerprint,
                value=cert.subject_name,
                priority=cert.priority,
                fingerprint_algorithm=cert.fingerprint_algorithm.value,
            )
            for cert in source.certificates
        ]

        if source.service_index:
            values.append(SettingValue(key=SERVICE_INDEX_KEY, value=source.service_index))
        return values
