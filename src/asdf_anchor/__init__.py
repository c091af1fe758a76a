"""asdf plugin for the Anchor CLI."""

from asdf_anchor.types import PluginConfig, Platform, InstallType
from asdf_anchor.versions import list_versions, latest_stable, version_key, sort_versions
from asdf_anchor.binaries import resolve_platform
from asdf_anchor.installer import acquire, install
from asdf_anchor.errors import (
    PluginError,
    UnsupportedPlatformError,
    UnsupportedInstallTypeError,
    ReleaseIndexError,
    DownloadError,
    ToolchainNotFoundError,
    BuildError,
    VerificationError,
    InstallPathError,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "PluginConfig",
    "Platform",
    "InstallType",

    # Versions
    "list_versions",
    "latest_stable",
    "version_key",
    "sort_versions",

    # Install
    "resolve_platform",
    "acquire",
    "install",

    # Error types
    "PluginError",
    "UnsupportedPlatformError",
    "UnsupportedInstallTypeError",
    "ReleaseIndexError",
    "DownloadError",
    "ToolchainNotFoundError",
    "BuildError",
    "VerificationError",
    "InstallPathError",
]
