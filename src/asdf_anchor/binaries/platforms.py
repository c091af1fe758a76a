"""Platform detection and mapping."""
import platform
from typing import Optional

from asdf_anchor.errors import UnsupportedPlatformError
from asdf_anchor.types import Platform, PluginConfig

# Architecture mappings
ARCH_MAPPINGS = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}

# Operating system mappings
OS_MAPPINGS = {
    "Linux": "unknown-linux-gnu",
    "Darwin": "apple-darwin",
    "Windows": "pc-windows-msvc.exe",
    "Windows_NT": "pc-windows-msvc.exe",
}

# uname -s prefixes reported by Windows shell environments
WINDOWS_PREFIXES = ("MINGW", "MSYS", "CYGWIN")
WINDOWS_TARGET = OS_MAPPINGS["Windows"]


def resolve_arch(machine: str) -> str:
    try:
        return ARCH_MAPPINGS[machine.lower()]
    except KeyError:
        raise UnsupportedPlatformError("architecture", machine) from None


def resolve_os(system: str) -> str:
    if system in OS_MAPPINGS:
        return OS_MAPPINGS[system]
    if system.upper().startswith(WINDOWS_PREFIXES):
        return WINDOWS_TARGET
    raise UnsupportedPlatformError("OS", system)


def resolve_platform(
    system: Optional[str] = None, machine: Optional[str] = None
) -> Platform:
    """Get the release target for the current (or given) platform."""
    system = platform.system() if system is None else system
    machine = platform.machine() if machine is None else machine

    return Platform(arch=resolve_arch(machine), os=resolve_os(system))


def asset_filename(config: PluginConfig, version: str, target: Platform) -> str:
    """Release asset name, e.g. ``anchor-0.31.1-x86_64-unknown-linux-gnu``."""
    return f"{config.tool_name}-{version}-{target.target}"


def executable_name(config: PluginConfig, target: Platform) -> str:
    """Name of the executable a source build produces."""
    return f"{config.tool_name}.exe" if target.is_windows else config.tool_name
