"""
Shared fixtures for netcoredbg-resolver tests.

FakeHost stands in for the machine/network so resolution can be exercised
without GitHub.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from netcoredbg_resolver.config import ResolverSettings
from netcoredbg_resolver.errors import DownloadError
from netcoredbg_resolver.host import HostPlatform
from netcoredbg_resolver.logger import NullDiagnosticLogger
from netcoredbg_resolver.platforms import ArchiveKind, Architecture, Os
from netcoredbg_resolver.releases import ReleaseAsset, ReleaseInfo, ReleaseOptions
from netcoredbg_resolver.resolver import BinaryResolver


def make_release(version: str, *asset_names: str) -> ReleaseInfo:
    return ReleaseInfo(
        version=version,
        assets=[
            ReleaseAsset(name=n, download_url=f"https://example.invalid/{version}/{n}")
            for n in asset_names
        ],
    )


class FakeHost(HostPlatform):
    """
    In-memory HostPlatform.

    ``archive_files`` is what a download "extracts": relative path -> content.
    """

    def __init__(
        self,
        platform: Tuple[Os, Architecture] = (Os.LINUX, Architecture.X86_64),
        release: Optional[ReleaseInfo] = None,
        archive_files: Optional[Dict[str, bytes]] = None,
    ):
        self.platform = platform
        self.release = release or make_release("v3.1.0", "netcoredbg-linux-amd64.tar.gz")
        self.archive_files = archive_files if archive_files is not None else {"netcoredbg": b"\x7fELF"}
        self.release_calls: List[Tuple[str, ReleaseOptions]] = []
        self.downloads: List[Tuple[str, str, ArchiveKind]] = []
        self.executables: List[str] = []
        self.fail_download: Optional[Exception] = None
        self.release_error: Optional[Exception] = None

    def current_platform(self) -> Tuple[Os, Architecture]:
        return self.platform

    def fetch_latest_release(self, repo_id: str, options: ReleaseOptions) -> ReleaseInfo:
        self.release_calls.append((repo_id, options))
        if self.release_error is not None:
            raise self.release_error
        return self.release

    def download_and_extract(self, url: str, dest_dir: str, archive_kind: ArchiveKind) -> None:
        self.downloads.append((url, dest_dir, archive_kind))
        if self.fail_download is not None:
            raise self.fail_download
        for rel, content in self.archive_files.items():
            target = Path(dest_dir) / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)

    def set_executable(self, path: str) -> None:
        self.executables.append(path)
        p = Path(path)
        p.chmod(p.stat().st_mode | 0o111)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def settings():
    return ResolverSettings(debug_log=False, http_timeout=5, pre_release=False)


@pytest.fixture
def resolver(fake_host, settings):
    return BinaryResolver(host=fake_host, logger=NullDiagnosticLogger(), settings=settings)


@pytest.fixture
def download_error():
    return DownloadError("Failed to download netcoredbg: boom")
