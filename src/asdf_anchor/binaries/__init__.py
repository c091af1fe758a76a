"""Prebuilt binary handling."""
from asdf_anchor.binaries.platforms import (
    resolve_platform,
    asset_filename,
    executable_name,
)
from asdf_anchor.binaries.fetcher import (
    fetch_binary,
    release_asset_url,
)

__all__ = [
    "resolve_platform",
    "asset_filename",
    "executable_name",
    "fetch_binary",
    "release_asset_url",
]
