# src/sourcetrust/registry/snapshot.py

from typing import Iterable, Iterator, List, Optional

from sourcetrust.normalize.schema import TrustedSource


class RegistrySnapshot:
    """
    The full set of trusted sources as read at one point in time.

    Produced by TrustedSourceRegistry.load_all() and written back by
    save_all(). A snapshot carries no version or lock: two writers that
    each load, modify and save a snapshot will overwrite one another, and
    callers needing multi-writer safety must serialize access themselves.
    """

    def __init__(self, sources: Optional[Iterable[TrustedSource]] = None):
        self.sources: List[TrustedSource] = list(sources or [])

    def __iter__(self) -> Iterator[TrustedSource]:
        return iter(self.sources)

    def __len__(self) -> int:
        return len(self.sources)

    def __repr__(self) -> str:
        return f"RegistrySnapshot({self.names()!r})"

    def names(self) -> List[str]:
        return [s.source_name for s in self.sources]

    def find(self, source_name: str) -> Optional[TrustedSource]:
        for source in self.sources:
            if source.matches(source_name):
                return source
        return None

    def remove(self, source_name: str) -> Optional[TrustedSource]:
        """Remove the first source matching the name, case-insensitively."""
        source = self.find(source_name)
        if source is not None:
            self.sources.remove(source)
        return source

    def add(self, source: TrustedSource) -> None:
        self.sources.append(source)
