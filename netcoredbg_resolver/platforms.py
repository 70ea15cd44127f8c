"""
Platform detection and release asset naming for netcoredbg.

Supported assets:
    netcoredbg-linux-amd64.tar.gz
    netcoredbg-linux-arm64.tar.gz
    netcoredbg-osx-amd64.tar.gz
    netcoredbg-osx-arm64.tar.gz
    netcoredbg-win64.zip
"""

import platform
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import UnsupportedArchitectureError, UnsupportedFileTypeError

ASSET_BASE_NAME = "netcoredbg"
EXECUTABLE_NAME = "netcoredbg"


class Os(Enum):
    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"


class Architecture(Enum):
    X86_64 = "x86_64"
    AARCH64 = "aarch64"
    X86 = "x86"


class ArchiveKind(Enum):
    ZIP = "zip"
    GZIP_TAR = "gzip_tar"


# (os, arch) -> (platform_arch, extension)
PLATFORM_MAP = {
    (Os.LINUX, Architecture.X86_64): ("linux-amd64", ".tar.gz"),
    (Os.LINUX, Architecture.AARCH64): ("linux-arm64", ".tar.gz"),
    (Os.MAC, Architecture.X86_64): ("osx-amd64", ".tar.gz"),
    (Os.MAC, Architecture.AARCH64): ("osx-arm64", ".tar.gz"),
    (Os.WINDOWS, Architecture.X86_64): ("win64", ".zip"),
    # No native Windows ARM64 build; the x64 one runs under emulation
    (Os.WINDOWS, Architecture.AARCH64): ("win64", ".zip"),
}

_SYSTEM_MAP = {
    "Linux": Os.LINUX,
    "Darwin": Os.MAC,
    "Windows": Os.WINDOWS,
}

_MACHINE_MAP = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "aarch64": Architecture.AARCH64,
    "arm64": Architecture.AARCH64,
    "x86": Architecture.X86,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
}


@dataclass(frozen=True)
class PlatformAsset:
    """Release asset for one (os, arch) pair."""
    name: str
    archive_kind: ArchiveKind


def detect_platform(
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> Tuple[Os, Architecture]:
    """
    Detect the current platform.

    Args:
        system: Override for ``platform.system()``.
        machine: Override for ``platform.machine()``.

    Returns:
        (Os, Architecture) tuple.

    Raises:
        UnsupportedArchitectureError: If the OS or machine is unknown.
    """
    system = system or platform.system()
    machine = (machine or platform.machine()).lower()

    os_ = _SYSTEM_MAP.get(system)
    if os_ is None:
        raise UnsupportedArchitectureError(
            f"Unsupported operating system: {system}. "
            f"Supported: Linux, macOS, Windows",
            details={"system": system},
        )
    arch = _MACHINE_MAP.get(machine)
    if arch is None:
        raise UnsupportedArchitectureError(
            f"Unsupported architecture: {machine}. "
            f"NetCoreDbg only supports 64-bit architectures (amd64/arm64).",
            details={"machine": machine},
        )
    return os_, arch


def get_executable_name(os_: Os) -> str:
    """netcoredbg.exe on Windows, netcoredbg elsewhere."""
    return f"{EXECUTABLE_NAME}.exe" if os_ == Os.WINDOWS else EXECUTABLE_NAME


def get_platform_asset_name(os_: Os, arch: Architecture) -> str:
    """
    Compute the release asset file name for a platform.

    Raises:
        UnsupportedArchitectureError: For 32-bit x86 on any OS.
    """
    if arch == Architecture.X86:
        raise UnsupportedArchitectureError(
            "Unsupported architecture: x86 (32-bit). "
            "NetCoreDbg only supports 64-bit architectures (amd64/arm64).",
            details={"os": os_.value, "arch": arch.value},
        )
    platform_arch, extension = PLATFORM_MAP[(os_, arch)]
    return f"{ASSET_BASE_NAME}-{platform_arch}{extension}"


def archive_kind_for(asset_name: str) -> ArchiveKind:
    """Archive kind from an asset file name's extension."""
    if asset_name.endswith(".zip"):
        return ArchiveKind.ZIP
    if asset_name.endswith(".tar.gz"):
        return ArchiveKind.GZIP_TAR
    raise UnsupportedFileTypeError(
        f"Unsupported file type for asset: {asset_name}",
        details={"asset_name": asset_name},
    )


def get_platform_asset(os_: Os, arch: Architecture) -> PlatformAsset:
    name = get_platform_asset_name(os_, arch)
    return PlatformAsset(name=name, archive_kind=archive_kind_for(name))
