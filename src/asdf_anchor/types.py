"""Core type definitions"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from asdf_anchor.constants import (
    ANCHOR_API_URL,
    ANCHOR_REPO_URL,
    BINARY_SINCE,
    BINARY_SINCE_ENV,
    CLI_PACKAGE,
    TOKEN_ENV,
    TOOL_NAME,
)

InstallType = Enum("InstallType", [("VERSION", "version")])


@dataclass(frozen=True)
class PluginConfig:
    """Process-wide plugin configuration, built once at startup"""
    tool_name: str = TOOL_NAME
    repo_url: str = ANCHOR_REPO_URL
    api_url: str = ANCHOR_API_URL
    cli_package: str = CLI_PACKAGE
    binary_since: str = BINARY_SINCE
    token: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PluginConfig":
        """Build configuration from environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            binary_since=environ.get(BINARY_SINCE_ENV) or BINARY_SINCE,
            token=environ.get(TOKEN_ENV) or None,
        )

    @property
    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


@dataclass(frozen=True)
class Platform:
    """Release target of the running machine"""
    arch: str
    os: str

    @property
    def target(self) -> str:
        return f"{self.arch}-{self.os}"

    @property
    def is_windows(self) -> bool:
        return self.os.endswith(".exe")
