"""
Error taxonomy for netcoredbg resolution.

Every failure raised by the resolver is a ResolverError carrying a stable
``kind`` so callers (and tests) can branch on what went wrong without
parsing messages. Messages stay human-readable and name the path, URL or
asset involved.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(Enum):
    """Failure categories of a resolution attempt."""
    NOT_FOUND = "not_found"
    NOT_A_FILE = "not_a_file"
    UNSUPPORTED_ARCHITECTURE = "unsupported_architecture"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    RELEASE_FETCH = "release_fetch"
    ASSET_NOT_FOUND = "asset_not_found"
    TEMP_DIR = "temp_dir"
    DOWNLOAD = "download"
    EXTRACTION = "extraction"
    BINARY_NOT_FOUND_AFTER_EXTRACTION = "binary_not_found_after_extraction"
    PERMISSION = "permission"
    PATH_RESOLUTION = "path_resolution"


class ResolverError(RuntimeError):
    """Base error for every terminal resolution failure."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value if self.kind else None,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ResolverError):
    kind = ErrorKind.NOT_FOUND


class NotAFileError(ResolverError):
    kind = ErrorKind.NOT_A_FILE


class UnsupportedArchitectureError(ResolverError):
    kind = ErrorKind.UNSUPPORTED_ARCHITECTURE


class UnsupportedFileTypeError(ResolverError):
    kind = ErrorKind.UNSUPPORTED_FILE_TYPE


class ReleaseFetchError(ResolverError):
    kind = ErrorKind.RELEASE_FETCH


class AssetNotFoundError(ResolverError):
    """No release asset matched the platform asset name."""

    kind = ErrorKind.ASSET_NOT_FOUND

    def __init__(self, asset_name: str, available: List[str]):
        super().__init__(
            f"No compatible asset found for platform. Looking for: '{asset_name}'. "
            f"Available assets: [{', '.join(available)}]",
            details={"asset_name": asset_name, "available": list(available)},
        )
        self.asset_name = asset_name
        self.available = list(available)


class TempDirError(ResolverError):
    kind = ErrorKind.TEMP_DIR


class DownloadError(ResolverError):
    kind = ErrorKind.DOWNLOAD


class ExtractionError(ResolverError):
    kind = ErrorKind.EXTRACTION


class BinaryNotFoundAfterExtractionError(ResolverError):
    kind = ErrorKind.BINARY_NOT_FOUND_AFTER_EXTRACTION


class ExecutablePermissionError(ResolverError):
    kind = ErrorKind.PERMISSION


class PathResolutionError(ResolverError):
    kind = ErrorKind.PATH_RESOLUTION


__all__ = [
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
