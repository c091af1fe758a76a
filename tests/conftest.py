import logging

import pytest
import structlog
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import aiohttp

from asdf_anchor.logging import configure_logging
from asdf_anchor.types import Platform, PluginConfig

SCRIPT_OK = b"#!/bin/sh\necho 'anchor-cli 0.31.1'\n"
SCRIPT_FAIL = b"#!/bin/sh\necho 'broken' >&2\nexit 1\n"


class FakeContent:
    def __init__(self, body: bytes):
        self._body = body

    async def iter_chunked(self, size: int):
        for i in range(0, len(self._body), size):
            yield self._body[i:i + size]


class FakeResponse:
    """Stand-in for aiohttp.ClientResponse used as an async context manager"""

    def __init__(
        self,
        status: int = 200,
        body: bytes = b"",
        json_data: Any = None,
        next_url: Optional[str] = None,
    ):
        self.status = status
        self.content = FakeContent(body)
        self._json = json_data
        self.links = {"next": {"url": next_url}} if next_url else {}

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                MagicMock(), (), status=self.status, message="error"
            )

    async def json(self):
        return self._json


class FakeSession:
    """Serves canned responses by URL and records every request"""

    def __init__(self, routes: Dict[str, Any]):
        self.routes = routes
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    def get(self, url: str, headers: Optional[Dict[str, str]] = None):
        self.calls.append((url, headers or {}))
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return FakeResponse(status=404, body=b"Not Found")
        return route

    @property
    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def config() -> PluginConfig:
    return PluginConfig()


@pytest.fixture
def linux_x86() -> Platform:
    return Platform(arch="x86_64", os="unknown-linux-gnu")


@pytest.fixture
def releases_url(config: PluginConfig) -> str:
    return f"{config.api_url}/releases?per_page=100"


def asset_url(config: PluginConfig, version: str) -> str:
    return (
        f"{config.repo_url}/releases/download/v{version}/"
        f"anchor-{version}-x86_64-unknown-linux-gnu"
    )


@pytest.fixture(autouse=True)
def structured_logging():
    """Route log output to stderr for every test and reset afterwards"""
    configure_logging("DEBUG")
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers = []
