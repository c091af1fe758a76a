"""Release listing and version ordering."""

import re
from typing import Iterable, List, NamedTuple, Optional

import aiohttp

from asdf_anchor.errors import PluginError
from asdf_anchor.logging import get_logger
from asdf_anchor.types import PluginConfig
from asdf_anchor.utils.github import fetch_release_tags

logger = get_logger(__name__)

SEPARATORS = re.compile(r"[+-]")
PATCH_MARKER = re.compile(r"\.p(\d)")
LEADING_DIGITS = re.compile(r"\d+")
PRERELEASE = re.compile(r"-|rc|alpha|beta|dev", re.IGNORECASE)

# Appended to every version so a release sorts after its own pre-releases
SENTINEL = "z"


class VersionKey(NamedTuple):
    """Comparable form of a version string."""
    major: int
    minor: int
    patch: int
    extra: int
    rank: str
    original: str


def _numeric(field: str) -> int:
    match = LEADING_DIGITS.match(field)
    return int(match.group()) if match else 0


def normalize(version: str) -> str:
    """Align component boundaries of a version string.

    ``+`` and ``-`` become ``.``, a ``p<N>`` patch marker becomes ``z<N>``
    and the sentinel is appended:

        0.30.0-rc.1 -> 0.30.0.rc.1.z
        1.0.0-p1    -> 1.0.0.z1.z
    """
    normalized = SEPARATORS.sub(".", version)
    normalized = PATCH_MARKER.sub(rf".{SENTINEL}\1", normalized, count=1)
    return f"{normalized}.{SENTINEL}"


def version_key(version: str) -> VersionKey:
    """Sort key: first four fields numerically, then the normalized string."""
    normalized = normalize(version)
    fields = (normalized.split(".") + ["", "", "", ""])[:4]
    major, minor, patch, extra = (_numeric(f) for f in fields)
    return VersionKey(major, minor, patch, extra, normalized, version)


def sort_versions(versions: Iterable[str]) -> List[str]:
    return sorted(versions, key=version_key)


def is_at_least(version: str, threshold: str) -> bool:
    return version_key(version)[:5] >= version_key(threshold)[:5]


def is_prerelease(version: str) -> bool:
    return bool(PRERELEASE.search(version))


async def list_versions(
    config: PluginConfig, session: Optional[aiohttp.ClientSession] = None
) -> List[str]:
    """List every released version in ascending order."""
    tags = await fetch_release_tags(config, session=session)
    versions = sort_versions(tag[1:] if tag.startswith("v") else tag for tag in tags)

    logger.debug({"event": "versions_listed", "count": len(versions)})

    return versions


async def latest_stable(
    config: PluginConfig,
    query: str = "",
    session: Optional[aiohttp.ClientSession] = None,
) -> str:
    """Greatest version matching ``query``, preferring ones without a pre-release marker."""
    matching = [v for v in await list_versions(config, session=session) if v.startswith(query)]
    if not matching:
        raise PluginError(f"No versions matching '{query}'", details={"query": query})

    stable = [v for v in matching if not is_prerelease(v)]
    return (stable or matching)[-1]
