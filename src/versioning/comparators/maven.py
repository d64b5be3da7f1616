"""Maven version comparator using Maven comparable-version semantics."""

import re
from functools import lru_cache
from typing import List, Optional, Union

from ..version import ArtifactVersion, parse_artifact_version
from .base import VersionComparator

# Known qualifiers, oldest first. The empty string stands for a release.
QUALIFIERS = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")
ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
RELEASE_INDEX = str(QUALIFIERS.index(""))

SNAPSHOT_PATTERN = re.compile(r"^(.*-)?((SNAPSHOT)|(\d{8}\.\d{6}-\d+))$", re.IGNORECASE)

Item = Union[int, str, tuple]


def _qualifier_rank(value: str) -> str:
    """Sortable rank for a qualifier; unknown qualifiers sort after known ones."""
    if value in QUALIFIERS:
        return str(QUALIFIERS.index(value))
    return f"{len(QUALIFIERS)}-{value}"


def _string_item(value: str, followed_by_digit: bool) -> str:
    if followed_by_digit and len(value) == 1:
        value = {"a": "alpha", "b": "beta", "m": "milestone"}.get(value, value)
    return ALIASES.get(value, value)


def _parse_item(is_digit: bool, buf: str) -> Item:
    if is_digit:
        return int(buf)
    return _string_item(buf, False)


def _is_null(item: Item) -> bool:
    if isinstance(item, int):
        return item == 0
    return len(item) == 0


def _normalize(items: List[Item]) -> None:
    # Strip trailing null items, stepping over sub-lists.
    for i in range(len(items) - 1, -1, -1):
        if _is_null(items[i]):
            del items[i]
        elif not isinstance(items[i], list):
            break


def _freeze(items: List[Item]) -> tuple:
    return tuple(_freeze(i) if isinstance(i, list) else i for i in items)


@lru_cache(maxsize=4096)
def parse_items(version: str) -> tuple:
    """Split a version into comparable items.

    Items break on ``.``, ``-`` and digit/letter transitions; ``-`` and
    transitions open a nested list so qualifiers sort under their prefix.
    """
    version = version.lower()
    root: List[Item] = []
    current = root
    stack = [root]
    is_digit = False
    start = 0

    for i, char in enumerate(version):
        if char == ".":
            current.append(0 if i == start else _parse_item(is_digit, version[start:i]))
            start = i + 1
        elif char == "-":
            current.append(0 if i == start else _parse_item(is_digit, version[start:i]))
            start = i + 1
            sub: List[Item] = []
            current.append(sub)
            current = sub
            stack.append(sub)
        elif char.isdigit():
            if not is_digit and i > start:
                current.append(_string_item(version[start:i], True))
                start = i
                sub = []
                current.append(sub)
                current = sub
                stack.append(sub)
            is_digit = True
        else:
            if is_digit and i > start:
                current.append(_parse_item(True, version[start:i]))
                start = i
                sub = []
                current.append(sub)
                current = sub
                stack.append(sub)
            is_digit = False

    if len(version) > start:
        current.append(_parse_item(is_digit, version[start:]))

    while stack:
        _normalize(stack.pop())
    return _freeze(root)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def compare_items(left: Optional[Item], right: Optional[Item]) -> int:
    """Compare two parsed items; None stands for a missing item."""
    if isinstance(left, int):
        if right is None:
            return 0 if left == 0 else 1
        if isinstance(right, int):
            return _sign(left - right)
        return 1

    if isinstance(left, str):
        if right is None:
            return _sign_str(_qualifier_rank(left), RELEASE_INDEX)
        if isinstance(right, str):
            return _sign_str(_qualifier_rank(left), _qualifier_rank(right))
        return -1

    if isinstance(left, tuple):
        if right is None:
            return compare_items(left[0], None) if left else 0
        if isinstance(right, int):
            return -1
        if isinstance(right, str):
            return 1
        for index in range(max(len(left), len(right))):
            l_item = left[index] if index < len(left) else None
            r_item = right[index] if index < len(right) else None
            if l_item is None:
                result = 0 if r_item is None else -compare_items(r_item, None)
            else:
                result = compare_items(l_item, r_item)
            if result:
                return result
        return 0

    # left is None
    return 0 if right is None else -compare_items(right, None)


def _sign_str(left: str, right: str) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


class MavenVersionComparator(VersionComparator):
    """Comparator for Maven artifacts using Maven comparable-version ordering."""

    name = "maven"

    def parse(self, text: str) -> ArtifactVersion:
        return parse_artifact_version(text)

    def compare(self, a: ArtifactVersion, b: ArtifactVersion) -> int:
        return compare_items(parse_items(a.text), parse_items(b.text))

    def is_snapshot(self, version: ArtifactVersion) -> bool:
        return bool(SNAPSHOT_PATTERN.match(version.text))
