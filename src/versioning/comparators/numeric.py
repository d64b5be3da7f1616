"""Plain numeric version comparator."""

import re
from functools import lru_cache
from itertools import zip_longest
from typing import Tuple, Union

from ..version import ArtifactVersion, parse_artifact_version
from .base import VersionComparator
from .maven import SNAPSHOT_PATTERN

_SEPARATORS = re.compile(r"[.\-]")

Token = Tuple[int, Union[int, str]]
_ZERO: Token = (1, 0)


@lru_cache(maxsize=4096)
def _tokens(text: str) -> Tuple[Token, ...]:
    out = []
    for part in _SEPARATORS.split(text):
        if part.isdigit():
            out.append((1, int(part)))
        else:
            out.append((0, part.lower()))
    return tuple(out)


class NumericVersionComparator(VersionComparator):
    """Compares dot/dash separated segments left to right.

    Numeric segments compare numerically and rank above textual ones, so
    ``1.0`` is newer than ``1.0-beta``; missing segments count as zero.
    """

    name = "numeric"

    def parse(self, text: str) -> ArtifactVersion:
        return parse_artifact_version(text)

    def compare(self, a: ArtifactVersion, b: ArtifactVersion) -> int:
        for left, right in zip_longest(_tokens(a.text), _tokens(b.text), fillvalue=_ZERO):
            if left < right:
                return -1
            if left > right:
                return 1
        return 0

    def is_snapshot(self, version: ArtifactVersion) -> bool:
        return bool(SNAPSHOT_PATTERN.match(version.text))
