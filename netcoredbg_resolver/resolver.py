"""
netcoredbg binary resolution.

Resolution order (first success wins):
1. User-provided path (validated, made absolute, never cached)
2. In-memory cache of the last resolved path
3. Binary already extracted for the latest release (<prefix>_v<version>/)
4. Download + extract the latest release into that directory
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from .config.settings import ResolverSettings, strip_version_prefix
from .errors import (
    BinaryNotFoundAfterExtractionError,
    ExtractionError,
    NotAFileError,
    NotFoundError,
    PathResolutionError,
    ResolverError,
    TempDirError,
)
from .fs_utils import copy_content_only
from .host import HostPlatform, LocalHost
from .logger import DiagnosticLogger
from .platforms import archive_kind_for, get_executable_name, get_platform_asset_name
from .releases import GitHubReleaseClient, ReleaseOptions, ReleaseVersion


def _current_dir() -> Path:
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise PathResolutionError(f"Failed to get current directory: {e}") from e


def _absolute(path: Path) -> str:
    if path.is_absolute():
        return str(path)
    return str(_current_dir() / path)


class BinaryResolver:
    """
    Locates (downloading if necessary) the netcoredbg executable.

    The cached path is owned by this instance. When the cached file
    disappears the slot is cleared and the next successful resolution
    replaces it.

    Args:
        host: Platform/network/filesystem collaborator.
        logger: Diagnostic log sink.
        settings: Repository, directory prefix and transport settings.
    """

    def __init__(
        self,
        host: Optional[HostPlatform] = None,
        logger: Optional[DiagnosticLogger] = None,
        settings: Optional[ResolverSettings] = None,
    ):
        self.settings = settings or ResolverSettings.from_env()
        self.host = host or LocalHost(
            release_client=GitHubReleaseClient(
                token=self.settings.github_token,
                timeout=self.settings.http_timeout,
            ),
            timeout=self.settings.http_timeout,
        )
        self.logger = logger or DiagnosticLogger(
            enabled=self.settings.debug_log,
            log_file=self.settings.log_file,
        )
        self._cached_binary_path: Optional[str] = None

    @property
    def cached_path(self) -> Optional[str]:
        return self._cached_binary_path

    def invalidate_cache(self) -> None:
        """Forget the cached path (e.g. after the version directory was removed)."""
        self._cached_binary_path = None

    def _set_cache(self, path: str) -> None:
        self._cached_binary_path = path

    def executable_name(self) -> str:
        os_, _ = self.host.current_platform()
        return get_executable_name(os_)

    def platform_asset_name(self) -> str:
        os_, arch = self.host.current_platform()
        return get_platform_asset_name(os_, arch)

    def version_dir(self, tag: str) -> Path:
        """Version directory for a release tag, relative to the working directory."""
        return Path(self.settings.version_dir_name(tag))

    def fetch_latest_release(self) -> ReleaseVersion:
        """
        Fetch the latest release and pick this platform's asset.

        Raises:
            ReleaseFetchError: Registry unreachable or no release.
            UnsupportedArchitectureError: 32-bit x86 host.
            AssetNotFoundError: No asset with the platform asset name.
        """
        release = self.host.fetch_latest_release(
            self.settings.github_repo,
            ReleaseOptions(require_assets=True, pre_release=self.settings.pre_release),
        )
        asset = release.find_asset(self.platform_asset_name())
        return ReleaseVersion(tag_name=release.version, download_url=asset.download_url)

    def validate_binary(self, binary_path: str) -> None:
        """
        Check that binary_path exists and is a regular file.

        Raises:
            NotFoundError / NotAFileError
        """
        path = Path(binary_path)
        if not path.exists():
            raise NotFoundError(
                f"netcoredbg binary not found at: {binary_path}",
                details={"path": binary_path},
            )
        if not path.is_file():
            raise NotAFileError(
                f"netcoredbg path is not a file: {binary_path}",
                details={"path": binary_path},
            )

    def _resolve_user_path(self, user_path: str) -> str:
        path = Path(user_path)
        if not path.exists():
            raise NotFoundError(
                f"User-provided netcoredbg binary not found at: {user_path}",
                details={"path": user_path},
            )
        if not path.is_file():
            raise NotAFileError(
                f"User-provided path is not a file: {user_path}",
                details={"path": user_path},
            )
        return _absolute(path)

    def _create_secure_temp_dir(self, tag: str) -> tempfile.TemporaryDirectory:
        try:
            return tempfile.TemporaryDirectory(
                prefix=f"{self.settings.dir_prefix}_v{strip_version_prefix(tag)}_"
            )
        except OSError as e:
            raise TempDirError(f"Failed to create secure temp directory: {e}") from e

    def download_and_extract_binary(self, version: ReleaseVersion) -> str:
        """
        Download ``version`` into its version directory and return the
        absolute path of the executable.

        The temporary download directory is removed whether this succeeds
        or fails. A partially populated version directory is left in place.
        """
        archive_kind = archive_kind_for(self.platform_asset_name())
        version_dir = self.version_dir(version.tag_name)

        with self._create_secure_temp_dir(version.tag_name) as temp_dir:
            self.logger.debug_log(f"Created secure temp directory: {temp_dir}")

            self.host.download_and_extract(version.download_url, temp_dir, archive_kind)

            try:
                version_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ExtractionError(
                    f"Failed to create version directory: {e}",
                    details={"path": str(version_dir)},
                ) from e
            self._copy_extracted_content(Path(temp_dir), version_dir)

        binary_path = version_dir / self.executable_name()
        if not binary_path.is_file():
            raise BinaryNotFoundAfterExtractionError(
                f"netcoredbg executable not found at: {binary_path}",
                details={"path": str(binary_path), "version_dir": str(version_dir)},
            )

        self.host.set_executable(str(binary_path))
        return _absolute(binary_path)

    def _copy_extracted_content(self, temp_dir: Path, version_dir: Path) -> None:
        try:
            copy_content_only(temp_dir, version_dir)
        except (OSError, shutil.Error) as e:
            raise ExtractionError(
                f"Failed to copy extracted content: {e}",
                details={"source": str(temp_dir), "dest": str(version_dir)},
            ) from e

    def get_binary_path(self, user_provided_path: Optional[str] = None) -> str:
        """
        Resolve the netcoredbg executable, downloading it if needed.

        Args:
            user_provided_path: Explicit binary path from the host's settings.

        Returns:
            Absolute path to the executable.

        Raises:
            ResolverError: Any terminal failure; see ``errors.ErrorKind``.
        """
        self.logger.debug_log("Starting get_binary_path")

        # Priority 1: User-provided path
        if user_provided_path is not None:
            self.logger.debug_log(f"Using user-provided path: {user_provided_path}")
            return self._resolve_user_path(user_provided_path)

        # Priority 2: In-memory cache
        cached = self._cached_binary_path
        if cached is not None:
            if Path(cached).exists():
                self.logger.debug_log(f"Using cached binary path: {cached}")
                return cached
            self.logger.debug_log("Cached binary no longer exists, will re-resolve")
            self.invalidate_cache()

        # Priority 3: Binary already extracted for the latest release
        self.logger.debug_log("Fetching latest release info from GitHub to check for existing binary")
        try:
            version = self.fetch_latest_release()
        except ResolverError as e:
            self.logger.debug_log(f"Release lookup failed: {e}")
            raise
        self.logger.debug_log(f"Found latest version: {version.tag_name}")

        existing = self.version_dir(version.tag_name) / self.executable_name()
        if existing.is_file():
            self.logger.debug_log(f"Found existing binary on disk: {existing}")
            path_str = _absolute(existing)
            self._set_cache(path_str)
            return path_str

        # Priority 4: Download and extract
        self.logger.debug_log("No existing binary found, downloading from GitHub")
        try:
            binary_path = self.download_and_extract_binary(version)
        except ResolverError as e:
            self.logger.debug_log(f"Download failed: {e}")
            raise
        self.logger.debug_log(f"Successfully downloaded and extracted to: {binary_path}")

        self._set_cache(binary_path)
        return binary_path


_default_resolver: Optional[BinaryResolver] = None


def default_resolver() -> BinaryResolver:
    """Process-wide resolver built from environment settings."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = BinaryResolver()
    return _default_resolver


def get_binary_path(user_provided_path: Optional[str] = None) -> str:
    """Resolve with the default resolver; NETCOREDBG_PATH is used when no path is given."""
    resolver = default_resolver()
    return resolver.get_binary_path(user_provided_path or resolver.settings.binary_path)


__all__ = [
    "BinaryResolver",
    "default_resolver",
    "get_binary_path",
]
