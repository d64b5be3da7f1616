"""Maven repository metadata lookup."""
from __future__ import annotations

import logging
import threading
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Tuple

from common.http_client import fetch_text
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from versioning.errors import MetadataRetrievalError

from ..base import MetadataProvider

logger = logging.getLogger(__name__)


def split_coordinate(coordinate: str) -> Tuple[str, str]:
    """Split ``groupId:artifactId``.

    Raises:
        MetadataRetrievalError: if either part is missing
    """
    group, sep, artifact = coordinate.partition(":")
    if not sep or not group.strip() or not artifact.strip() or ":" in artifact:
        raise MetadataRetrievalError(coordinate, "coordinate must be groupId:artifactId")
    return group.strip(), artifact.strip()


def metadata_url(repository_url: str, group: str, artifact: str) -> str:
    group_path = group.replace(".", "/")
    return f"{repository_url.rstrip('/')}/{group_path}/{artifact}/{Constants.MAVEN_METADATA_FILE}"


def metadata_versions(root: ET.Element) -> List[str]:
    """Versions listed under <versioning><versions>, in document order."""
    versions = root.find("./versioning/versions")
    if versions is None:
        return []
    return [v.text.strip() for v in versions.findall("version") if v.text and v.text.strip()]


class MavenMetadataProvider(MetadataProvider):
    """Reads ``maven-metadata.xml`` from a Maven repository.

    Parsed documents are cached per coordinate for the life of the provider;
    the cache is shared by worker threads.
    """

    name = "maven"

    def __init__(self, repository_url: Optional[str] = None):
        self.repository_url = repository_url or Constants.REPOSITORY_URL_MAVEN
        self._cache: Dict[str, ET.Element] = {}
        self._cache_lock = threading.Lock()

    def _fetch_metadata_root(self, coordinate: str) -> ET.Element:
        with self._cache_lock:
            if coordinate in self._cache:
                return self._cache[coordinate]

        group, artifact = split_coordinate(coordinate)
        url = metadata_url(self.repository_url, group, artifact)
        if is_debug_enabled(logger):
            logger.debug("Fetching Maven metadata", extra=extra_context(
                event="function_entry", component="discovery", action="fetch_metadata",
                target=coordinate, package_manager="maven"
            ))
        text = fetch_text(url, coordinate=coordinate)
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise MetadataRetrievalError(coordinate, f"malformed {Constants.MAVEN_METADATA_FILE}: {exc}") from exc

        with self._cache_lock:
            self._cache[coordinate] = root
        return root

    def get_versions(self, coordinate: str) -> List[str]:
        versions = metadata_versions(self._fetch_metadata_root(coordinate))
        if is_debug_enabled(logger):
            logger.debug("Maven metadata versions", extra=extra_context(
                event="function_exit", component="discovery", action="get_versions",
                outcome="success", target=coordinate, count=len(versions), package_manager="maven"
            ))
        return versions
