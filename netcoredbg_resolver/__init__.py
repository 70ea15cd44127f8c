"""
netcoredbg-resolver - locate, download and cache the netcoredbg debugger.

Used by editor extensions that launch netcoredbg as their .NET debug adapter:

    from netcoredbg_resolver import BinaryResolver
    path = BinaryResolver().get_binary_path(user_setting_or_none)
"""

from .config import ResolverSettings, load_env
from .errors import (
    ErrorKind,
    ResolverError,
    NotFoundError,
    NotAFileError,
    UnsupportedArchitectureError,
    UnsupportedFileTypeError,
    ReleaseFetchError,
    AssetNotFoundError,
    TempDirError,
    DownloadError,
    ExtractionError,
    BinaryNotFoundAfterExtractionError,
    ExecutablePermissionError,
    PathResolutionError,
)
from .host import HostPlatform, LocalHost
from .logger import DiagnosticLogger, NullDiagnosticLogger, get_logger, setup_logging
from .platforms import (
    Architecture,
    ArchiveKind,
    Os,
    PlatformAsset,
    archive_kind_for,
    detect_platform,
    get_executable_name,
    get_platform_asset,
    get_platform_asset_name,
)
from .releases import (
    GitHubReleaseClient,
    ReleaseAsset,
    ReleaseInfo,
    ReleaseOptions,
    ReleaseVersion,
)
from .resolver import BinaryResolver, default_resolver, get_binary_path

__version__ = "0.1.0"
__all__ = [
    # Resolver
    "BinaryResolver",
    "default_resolver",
    "get_binary_path",
    # Host
    "HostPlatform",
    "LocalHost",
    # Platforms
    "Os",
    "Architecture",
    "ArchiveKind",
    "PlatformAsset",
    "detect_platform",
    "get_executable_name",
    "get_platform_asset",
    "get_platform_asset_name",
    "archive_kind_for",
    # Releases
    "GitHubReleaseClient",
    "ReleaseAsset",
    "ReleaseInfo",
    "ReleaseOptions",
    "ReleaseVersion",
    # Config / logging
    "ResolverSettings",
    "load_env",
    "DiagnosticLogger",
    "NullDiagnosticLogger",
    "get_logger",
    "setup_logging",
    # Errors
    "ErrorKind",
    "ResolverError",
    "NotFoundError",
    "NotAFileError",
    "UnsupportedArchitectureError",
    "UnsupportedFileTypeError",
    "ReleaseFetchError",
    "AssetNotFoundError",
    "TempDirError",
    "DownloadError",
    "ExtractionError",
    "BinaryNotFoundAfterExtractionError",
    "ExecutablePermissionError",
    "PathResolutionError",
]
