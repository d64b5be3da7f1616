"""Versions produced by the local build session."""

from typing import Dict, Iterable, List

from versioning.parser import tokenize_rightmost_colon

from .base import MetadataProvider


class ReactorProvider(MetadataProvider):
    """Reactor artifacts from ``group:artifact:version`` tokens.

    Coordinates the reactor does not build have no versions; that is not an
    error.
    """

    name = "reactor"

    def __init__(self, tokens: Iterable[str] = ()):
        self._versions: Dict[str, List[str]] = {}
        for token in tokens:
            self.add_token(token)

    def add_token(self, token: str) -> None:
        """Register one token.

        Raises:
            ValueError: if the token has no version
        """
        if token.count(":") < 2:
            raise ValueError(f"Reactor artifact must be group:artifact:version, got '{token}'")
        coordinate, version = tokenize_rightmost_colon(token)
        if not version:
            raise ValueError(f"Reactor artifact must be group:artifact:version, got '{token}'")
        self._versions.setdefault(coordinate, []).append(version)

    def coordinates(self) -> List[str]:
        return sorted(self._versions)

    def get_versions(self, coordinate: str) -> List[str]:
        return list(self._versions.get(coordinate, ()))
