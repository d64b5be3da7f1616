"""Artifact version value type and Maven-style decomposition."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True, eq=False)
class ArtifactVersion:
    """A version string decomposed into major/minor/incremental/qualifier.

    Equality and hashing use the canonical string only. Ordering is not
    defined here: it belongs to the VersionComparator of the component.
    """

    text: str
    major: int = 0
    minor: int = 0
    incremental: int = 0
    build_number: Optional[int] = None
    qualifier: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text

    @property
    def unparsed(self) -> bool:
        """True when the numeric segments could not be determined."""
        return self.qualifier is not None and self.qualifier == self.text

    @classmethod
    def fallback(cls, text: str) -> "ArtifactVersion":
        """Version whose whole string is kept as the qualifier."""
        return cls(text=text, qualifier=text)


def _plain_int(token: str) -> Optional[int]:
    if _DIGITS.fullmatch(token):
        return int(token)
    return None


def _segment_int(token: str) -> Optional[int]:
    # A multi-digit segment with a leading zero is not a number.
    if len(token) > 1 and token.startswith("0"):
        return None
    return _plain_int(token)


def parse_artifact_version(text: str) -> ArtifactVersion:
    """Decompose a version string the way Maven artifact versions are read.

    ``1.2.3-beta-1`` gives major 1, minor 2, incremental 3, qualifier
    ``beta-1``; ``1.2-45`` gives build number 45; ``1.2.3.Final.x`` gives
    qualifier ``Final``. Anything that does not fit
    ``<int>[.<int>[.<int>[.<text>...]]][-<qualifier|build>]`` falls back to a
    version whose qualifier is the whole string.

    Raises:
        ValueError: if ``text`` is empty.
    """
    canonical = (text or "").strip()
    if not canonical:
        raise ValueError("Empty version string")

    part1, sep, part2 = canonical.partition("-")
    build_number: Optional[int] = None
    qualifier: Optional[str] = None
    if sep:
        if len(part2) == 1 or not part2.startswith("0"):
            build_number = _plain_int(part2)
            if build_number is None:
                qualifier = part2
        else:
            qualifier = part2

    if "." not in part1 and not part1.startswith("0"):
        major = _plain_int(part1)
        if major is None:
            return ArtifactVersion.fallback(canonical)
        return ArtifactVersion(canonical, major, 0, 0, build_number, qualifier)

    if ".." in part1 or part1.startswith(".") or part1.endswith("."):
        return ArtifactVersion.fallback(canonical)

    tokens = part1.split(".")
    numbers: List[int] = []
    for token in tokens[:3]:
        value = _segment_int(token)
        if value is None:
            return ArtifactVersion.fallback(canonical)
        numbers.append(value)

    if len(tokens) > 3:
        # A fourth dotted token is only accepted as a textual qualifier; later tokens are ignored.
        if _DIGITS.fullmatch(tokens[3]):
            return ArtifactVersion.fallback(canonical)
        qualifier = tokens[3]

    numbers.extend([0] * (3 - len(numbers)))
    return ArtifactVersion(canonical, numbers[0], numbers[1], numbers[2], build_number, qualifier)
