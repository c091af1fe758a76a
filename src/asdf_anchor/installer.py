"""Install orchestration: pick a strategy, place the binary, verify it."""

import shutil
from pathlib import Path
from typing import Optional, Union

import aiohttp

from asdf_anchor.constants import VERSION_FLAG
from asdf_anchor.errors import (
    DownloadError,
    InstallPathError,
    UnsupportedInstallTypeError,
    VerificationError,
)
from asdf_anchor.logging import get_logger
from asdf_anchor.types import InstallType, Platform, PluginConfig
from asdf_anchor.versions import is_at_least
from asdf_anchor.binaries import fetch_binary, resolve_platform
from asdf_anchor.toolchain import build_from_source
from asdf_anchor.utils.fs import async_subprocess_run

logger = get_logger(__name__)


async def acquire(
    version: str,
    dest: Path,
    config: PluginConfig,
    target: Optional[Platform] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> Path:
    """Put an executable for ``version`` at ``dest``.

    Versions from ``config.binary_since`` on try the prebuilt release asset
    first. Older versions, and any failed download, are built from source.
    """
    target = target or resolve_platform()

    if is_at_least(version, config.binary_since):
        try:
            return await fetch_binary(version, dest, config, target, session=session)
        except DownloadError as e:
            logger.warning({
                "event": "download_failed_building_from_source",
                "version": version,
                "reason": e.details.get("reason"),
                "url": e.details.get("url"),
            })
    else:
        logger.info({
            "event": "no_prebuilt_binary",
            "version": version,
            "binary_since": config.binary_since,
        })

    return await build_from_source(version, dest, config, target)


async def verify_binary(binary: Path) -> str:
    """Run ``binary --version`` and return its output."""
    try:
        returncode, stdout, stderr = await async_subprocess_run(str(binary), VERSION_FLAG)
    except OSError as e:
        raise VerificationError(str(binary), str(e)) from e

    if returncode != 0:
        raise VerificationError(
            str(binary), f"exit code {returncode}: {stderr.strip()}"
        )

    return stdout.strip()


async def install(
    install_type: str,
    version: str,
    install_root: Union[str, Path],
    config: Optional[PluginConfig] = None,
    target: Optional[Platform] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> Path:
    """Install ``version`` into ``install_root/bin`` and verify it runs.

    Returns:
        Path to the installed executable

    Raises:
        UnsupportedInstallTypeError: install_type is not ``version``
        VerificationError: the binary did not run; install_root is removed
        PluginError: any other fatal failure
    """
    if install_type != InstallType.VERSION.value:
        raise UnsupportedInstallTypeError(install_type)

    config = config or PluginConfig.from_env()
    install_root = Path(install_root)
    bin_dir = install_root / "bin"
    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallPathError(str(bin_dir), e.strerror or str(e)) from e

    binary = await acquire(version, bin_dir / config.tool_name, config, target, session=session)

    try:
        reported = await verify_binary(binary)
    except VerificationError:
        shutil.rmtree(install_root, ignore_errors=True)
        raise

    logger.info({
        "event": "install_complete",
        "version": version,
        "path": str(binary),
        "reported_version": reported,
    })
    print(f"{config.tool_name} v{version} installed to {binary}")

    return binary
