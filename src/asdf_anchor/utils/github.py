"""GitHub API helpers."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

import aiohttp

from asdf_anchor.constants import RELEASES_PATH, RELEASES_PER_PAGE
from asdf_anchor.errors import ReleaseIndexError
from asdf_anchor.logging import get_logger
from asdf_anchor.types import PluginConfig

logger = get_logger(__name__)

GITHUB_JSON = "application/vnd.github+json"


def api_headers(config: PluginConfig) -> Dict[str, str]:
    return {"Accept": GITHUB_JSON, **config.auth_headers}


@asynccontextmanager
async def github_session(
    session: Optional[aiohttp.ClientSession] = None,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Yield ``session`` if given, otherwise a new session closed on exit."""
    if session is not None:
        yield session
        return

    timeout = aiohttp.ClientTimeout(total=None)
    async with aiohttp.ClientSession(timeout=timeout) as new_session:
        yield new_session


async def fetch_release_tags(
    config: PluginConfig, session: Optional[aiohttp.ClientSession] = None
) -> List[str]:
    """Fetch every release tag, following ``Link: rel="next"`` pagination."""
    url: Optional[str] = f"{config.api_url}/{RELEASES_PATH}?per_page={RELEASES_PER_PAGE}"
    tags: List[str] = []

    async with github_session(session) as client:
        while url:
            logger.debug({"event": "fetching_releases", "url": url})
            try:
                async with client.get(url, headers=api_headers(config)) as response:
                    response.raise_for_status()
                    releases = await response.json()
                    next_link = response.links.get("next")
            except aiohttp.ClientError as e:
                raise ReleaseIndexError(url, str(e)) from e

            if not isinstance(releases, list):
                raise ReleaseIndexError(url, "unexpected response body")

            tags.extend(r["tag_name"] for r in releases if r.get("tag_name"))
            url = str(next_link["url"]) if next_link else None

    logger.debug({"event": "releases_fetched", "count": len(tags)})

    return tags
