import asyncio
import shutil
from pathlib import Path
from typing import Tuple

from asdf_anchor.logging import get_logger

logger = get_logger(__name__)


async def async_subprocess_run(*args) -> Tuple[int, str, str]:
    """
    Run a command asynchronously and return its exit code, stdout, and stderr.

    :param args: Command and arguments to run
    :return: Tuple of (returncode, stdout, stderr)
    """
    logger.debug({"event": "subprocess_exec", "cmd": [str(a) for a in args]})

    proc = await asyncio.create_subprocess_exec(
        *args, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
    )
    stdout, stderr = await proc.communicate()

    logger.debug({"event": "subprocess_complete", "returncode": proc.returncode})

    return proc.returncode, stdout.decode(errors="replace"), stderr.decode(errors="replace")


def install_executable(src: Path, dest: Path) -> Path:
    """Move ``src`` to ``dest`` and mark it executable."""
    # shutil.move copies when src and dest are on different devices
    shutil.move(str(src), str(dest))
    dest.chmod(0o755)

    logger.debug({"event": "executable_installed", "source": str(src), "destination": str(dest)})

    return dest
