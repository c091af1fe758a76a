"""Plugin constants and GitHub URL structure."""

# GitHub URL structure
GITHUB_HOST = "https://github.com"
GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
DOWNLOAD_PATH = "releases/download"

# Anchor repository constants
ANCHOR_OWNER = "solana-foundation"
ANCHOR_REPO = "anchor"
ANCHOR_REPO_URL = f"{GITHUB_HOST}/{ANCHOR_OWNER}/{ANCHOR_REPO}"
ANCHOR_API_URL = f"{GITHUB_API_BASE}/{GITHUB_REPOS_PATH}/{ANCHOR_OWNER}/{ANCHOR_REPO}"

TOOL_NAME = "anchor"
PLUGIN_NAME = f"asdf-{TOOL_NAME}"
CLI_PACKAGE = "anchor-cli"
VERSION_FLAG = "--version"

# First release that ships prebuilt binaries as release assets
BINARY_SINCE = "0.30.0"

# Body GitHub serves in place of a missing asset
NOT_FOUND_MARKER = b"Not Found"

RELEASES_PER_PAGE = 100

# Environment variables
TOKEN_ENV = "GITHUB_API_TOKEN"
LOG_LEVEL_ENV = "ASDF_ANCHOR_LOG_LEVEL"
BINARY_SINCE_ENV = "ASDF_ANCHOR_BINARY_SINCE"
INSTALL_TYPE_ENV = "ASDF_INSTALL_TYPE"
DEFAULT_INSTALL_TYPE = "version"
INSTALL_VERSION_ENV = "ASDF_INSTALL_VERSION"
INSTALL_PATH_ENV = "ASDF_INSTALL_PATH"
