"""
Host capabilities used by the resolver.

Everything that touches the machine or the network (platform detection,
release lookup, download + extraction, chmod) sits behind HostPlatform so
tests can swap in a fake.
"""

import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

import requests

from .errors import DownloadError, ExecutablePermissionError
from .fs_utils import extract_archive, make_executable
from .logger import get_logger
from .platforms import ArchiveKind, Architecture, Os, detect_platform
from .releases import GitHubReleaseClient, ReleaseInfo, ReleaseOptions

logger = get_logger("netcoredbg_resolver.host")

DOWNLOAD_CHUNK_SIZE = 64 * 1024


class HostPlatform(ABC):
    """Narrow seam between the resolver and its environment."""

    @abstractmethod
    def current_platform(self) -> Tuple[Os, Architecture]:
        ...

    @abstractmethod
    def fetch_latest_release(self, repo_id: str, options: ReleaseOptions) -> ReleaseInfo:
        ...

    @abstractmethod
    def download_and_extract(self, url: str, dest_dir: str, archive_kind: ArchiveKind) -> None:
        ...

    @abstractmethod
    def set_executable(self, path: str) -> None:
        ...


class LocalHost(HostPlatform):
    """
    HostPlatform backed by the running machine, requests and GitHub.

    Args:
        release_client: GitHub client (default: unauthenticated client).
        timeout: Download timeout in seconds.
        session: requests session for downloads.
    """

    def __init__(
        self,
        release_client: Optional[GitHubReleaseClient] = None,
        timeout: int = 60,
        session: Optional[requests.Session] = None,
    ):
        self.release_client = release_client or GitHubReleaseClient(timeout=timeout)
        self.timeout = timeout
        self.session = session or requests.Session()

    def current_platform(self) -> Tuple[Os, Architecture]:
        return detect_platform()

    def fetch_latest_release(self, repo_id: str, options: ReleaseOptions) -> ReleaseInfo:
        return self.release_client.fetch_latest_release(repo_id, options)

    def download_and_extract(self, url: str, dest_dir: str, archive_kind: ArchiveKind) -> None:
        """
        Stream url into a private directory inside dest_dir, extract it into
        dest_dir, then delete the archive.

        Raises:
            DownloadError: HTTP/network failure.
            ExtractionError: Archive could not be unpacked.
        """
        dest = Path(dest_dir)
        archive_name = Path(urlparse(url).path).name or "download"

        # Removed before returning, so only archive content stays in dest_dir
        with tempfile.TemporaryDirectory(prefix=".download-", dir=dest) as download_dir:
            archive_path = Path(download_dir) / archive_name
            logger.debug("Downloading %s -> %s", url, archive_path)
            self._download(url, archive_path)
            extract_archive(archive_path, dest, archive_kind)

    def _download(self, url: str, dest: Path) -> None:
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as resp:
                resp.raise_for_status()
                with open(dest, "wb") as f:
                    for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except (requests.RequestException, OSError) as e:
            raise DownloadError(
                f"Failed to download netcoredbg: {e}",
                details={"url": url, "dest": str(dest)},
            ) from e

    def set_executable(self, path: str) -> None:
        try:
            make_executable(path)
        except OSError as e:
            raise ExecutablePermissionError(
                f"Failed to make file executable: {e}",
                details={"path": path},
            ) from e
