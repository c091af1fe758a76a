"""Error handling for the anchor plugin."""
from typing import Any, Dict, Optional

from asdf_anchor.logging import get_logger


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger=None,
    level: str = "error"
) -> None:
    """Log an error with context at ``level``."""
    logger = logger or get_logger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, PluginError):
        error_info["details"] = error.details

    getattr(logger, level)({"event": "plugin_error", **error_info})


class PluginError(Exception):
    """Base error class for the plugin. Always fatal when it reaches the CLI."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class UnsupportedPlatformError(PluginError):
    """Unknown CPU architecture or operating system."""
    def __init__(self, kind: str, value: str):
        super().__init__(
            f"Unsupported {kind}: {value}",
            details={"kind": kind, "value": value}
        )


class UnsupportedInstallTypeError(PluginError):
    """Install kind other than a pinned version."""
    def __init__(self, install_type: str):
        super().__init__(
            "Only version-based installs are supported",
            details={"install_type": install_type}
        )


class ReleaseIndexError(PluginError):
    """Release index could not be fetched or parsed."""
    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Could not list releases from {url}: {reason}",
            details={"url": url, "reason": reason}
        )


class DownloadError(PluginError):
    """Release asset missing or unusable."""
    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Could not download {url}: {reason}",
            details={"url": url, "reason": reason}
        )


class ToolchainNotFoundError(PluginError):
    """Build toolchain needed for the source fallback is missing."""
    def __init__(self, binary_name: str, hint: str):
        super().__init__(
            f"{binary_name} not found on PATH. {hint}",
            details={"binary_name": binary_name}
        )


class BuildError(PluginError):
    """Source build failed."""
    def __init__(self, version: str, returncode: int, stderr: str = "", reason: str = ""):
        message = f"Failed to build v{version} from source (exit code {returncode})"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            details={"version": version, "returncode": returncode, "stderr": stderr}
        )


class VerificationError(PluginError):
    """Installed binary did not run."""
    def __init__(self, binary: str, reason: str):
        super().__init__(
            "Installed binary did not run correctly",
            details={"binary": binary, "reason": reason}
        )


class InstallPathError(PluginError):
    """Install location could not be created or written."""
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not write {path}: {reason}",
            details={"path": path, "reason": reason}
        )
