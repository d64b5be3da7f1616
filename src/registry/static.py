"""In-memory metadata provider."""

from typing import Dict, Iterable, List, Mapping, Optional

from versioning.errors import MetadataRetrievalError

from .base import MetadataProvider


class StaticMetadataProvider(MetadataProvider):
    """Serves versions from a mapping, deferring unknown coordinates to ``fallback``."""

    name = "static"

    def __init__(
        self,
        versions: Optional[Mapping[str, Iterable[str]]] = None,
        fallback: Optional[MetadataProvider] = None,
    ):
        self._versions: Dict[str, List[str]] = {
            coordinate: list(values) for coordinate, values in (versions or {}).items()
        }
        self.fallback = fallback

    def add(self, coordinate: str, versions: Iterable[str]) -> None:
        self._versions.setdefault(coordinate, []).extend(versions)

    def get_versions(self, coordinate: str) -> List[str]:
        if coordinate in self._versions:
            return list(self._versions[coordinate])
        if self.fallback is not None:
            return self.fallback.get_versions(coordinate)
        raise MetadataRetrievalError(coordinate, "no versions configured")
