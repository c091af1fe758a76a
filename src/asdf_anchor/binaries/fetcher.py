"""Release asset download and validation."""
import aiohttp
from pathlib import Path
from typing import Optional

from asdf_anchor.constants import DOWNLOAD_PATH, NOT_FOUND_MARKER
from asdf_anchor.errors import DownloadError
from asdf_anchor.logging import get_logger
from asdf_anchor.types import Platform, PluginConfig
from asdf_anchor.binaries.platforms import asset_filename
from asdf_anchor.utils.github import github_session

logger = get_logger(__name__)

CHUNK_SIZE = 8192


def release_asset_url(config: PluginConfig, version: str, target: Platform) -> str:
    filename = asset_filename(config, version, target)
    return f"{config.repo_url}/{DOWNLOAD_PATH}/v{version}/{filename}"


def validate_download(url: str, dest: Path) -> None:
    """Reject empty files and error pages served in place of the asset."""
    if not dest.exists() or dest.stat().st_size == 0:
        raise DownloadError(url, "downloaded file is empty")

    with open(dest, "rb") as f:
        head = f.read(len(NOT_FOUND_MARKER))
    if head == NOT_FOUND_MARKER:
        raise DownloadError(url, "release asset not found")


async def download_file(
    url: str,
    dest: Path,
    config: PluginConfig,
    session: Optional[aiohttp.ClientSession] = None,
) -> None:
    """Download ``url`` to ``dest`` with streaming."""
    logger.info({"event": "download_started", "url": url, "destination": str(dest)})

    try:
        async with github_session(session) as client:
            async with client.get(url, headers=config.auth_headers) as response:
                response.raise_for_status()

                downloaded = 0
                with open(dest, "wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)

    except (aiohttp.ClientError, OSError) as e:
        raise DownloadError(url, str(e)) from e

    logger.info({"event": "download_complete", "url": url, "size": downloaded})


async def fetch_binary(
    version: str,
    dest: Path,
    config: PluginConfig,
    target: Platform,
    session: Optional[aiohttp.ClientSession] = None,
) -> Path:
    """Download the prebuilt release binary for ``version`` to ``dest``.

    Raises:
        DownloadError: the asset could not be fetched or is not a binary.
            ``dest`` is removed in that case.
    """
    url = release_asset_url(config, version, target)

    try:
        await download_file(url, dest, config, session=session)
        validate_download(url, dest)
    except DownloadError:
        dest.unlink(missing_ok=True)
        raise

    dest.chmod(0o755)

    logger.info({"event": "binary_ready", "version": version, "path": str(dest)})

    return dest
