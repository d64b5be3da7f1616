"""Token parsing for component requests."""

from typing import Optional, Tuple

from .models import ComponentRequest


def tokenize_rightmost_colon(s: str) -> Tuple[str, Optional[str]]:
    """Return (identifier, version or None) using the rightmost-colon rule."""
    s = s.strip()
    if ':' not in s:
        return s, None
    parts = s.rsplit(':', 1)
    identifier = parts[0].strip()
    spec_part = parts[1].strip() if len(parts) > 1 else ''
    spec = spec_part if spec_part else None
    return identifier, spec


def parse_cli_token(token: str, source: str = "cli") -> ComponentRequest:
    """Parse ``groupId:artifactId[:version]`` into a ComponentRequest.

    ``groupId:artifactId`` alone has no current version.

    Raises:
        ValueError: if the token is not a Maven coordinate
    """
    raw = token.strip()
    colon_count = raw.count(':')
    if colon_count == 0:
        raise ValueError(f"Expected groupId:artifactId[:version], got '{token}'")
    if colon_count == 1:
        identifier, version = raw, None
    else:
        identifier, version = tokenize_rightmost_colon(raw)
    group, _, artifact = identifier.partition(':')
    if not group.strip() or not artifact.strip() or ":" in artifact:
        raise ValueError(f"Expected groupId:artifactId[:version], got '{token}'")
    return ComponentRequest(
        coordinate=f"{group.strip()}:{artifact.strip()}",
        current_version=version,
        source=source,
        raw_token=token,
    )


def parse_config_entry(coordinate: str, version: Optional[str], source: str = "config") -> ComponentRequest:
    """Construct a ComponentRequest from configuration fields."""
    current = version.strip() if isinstance(version, str) and version.strip() else None
    return ComponentRequest(
        coordinate=coordinate.strip(),
        current_version=current,
        source=source,
        raw_token=None,
    )
