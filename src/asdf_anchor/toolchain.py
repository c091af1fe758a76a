"""Source build fallback using cargo."""

import shutil
import tempfile
from pathlib import Path
from typing import List

from asdf_anchor.constants import LOG_LEVEL_ENV
from asdf_anchor.errors import BuildError, InstallPathError, ToolchainNotFoundError
from asdf_anchor.logging import get_logger
from asdf_anchor.types import Platform, PluginConfig
from asdf_anchor.binaries.platforms import executable_name
from asdf_anchor.utils.fs import async_subprocess_run, install_executable

logger = get_logger(__name__)

CARGO = "cargo"
RUSTUP_HINT = "Install Rust with rustup (https://rustup.rs) to build from source."

# Lines of cargo output kept in the error message
STDERR_TAIL = 20


def find_cargo() -> str:
    cargo = shutil.which(CARGO)
    if not cargo:
        raise ToolchainNotFoundError(CARGO, RUSTUP_HINT)
    return cargo


def cargo_install_command(
    cargo: str, config: PluginConfig, version: str, root: Path
) -> List[str]:
    return [
        cargo,
        "install",
        "--git",
        config.repo_url,
        "--tag",
        f"v{version}",
        config.cli_package,
        "--locked",
        "--root",
        str(root),
    ]


async def build_from_source(
    version: str, dest: Path, config: PluginConfig, target: Platform
) -> Path:
    """Compile ``version`` with ``cargo install`` and move the result to ``dest``."""
    cargo = find_cargo()

    with tempfile.TemporaryDirectory(prefix=f"{config.tool_name}-build-") as tmpdir:
        root = Path(tmpdir)
        cmd = cargo_install_command(cargo, config, version, root)

        logger.info({"event": "build_started", "version": version, "root": str(root)})

        returncode, _, stderr = await async_subprocess_run(*cmd)
        if returncode != 0:
            tail = "\n".join(stderr.strip().splitlines()[-STDERR_TAIL:])
            logger.debug({
                "event": "build_failed",
                "version": version,
                "returncode": returncode,
                "stderr": tail,
            })
            raise BuildError(
                version,
                returncode,
                tail,
                reason=f"rerun with {LOG_LEVEL_ENV}=DEBUG for cargo output",
            )

        built = root / "bin" / executable_name(config, target)
        if not built.exists():
            raise BuildError(version, returncode, reason=f"{built.name} missing from build output")

        try:
            install_executable(built, dest)
        except OSError as e:
            raise InstallPathError(str(dest), e.strerror or str(e)) from e

    logger.info({"event": "build_complete", "version": version, "path": str(dest)})

    return dest
