"""
GitHub release metadata for netcoredbg.

Queries the releases list of a repository and picks the newest usable
release: drafts are skipped, pre-releases are skipped unless requested,
and releases without assets are skipped when ``require_assets`` is set.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .errors import AssetNotFoundError, ReleaseFetchError
from .logger import get_logger

logger = get_logger("netcoredbg_resolver.releases")

GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    download_url: str


@dataclass(frozen=True)
class ReleaseInfo:
    """A published release: its version tag and downloadable assets."""
    version: str
    assets: List[ReleaseAsset] = field(default_factory=list)

    @property
    def asset_names(self) -> List[str]:
        return [a.name for a in self.assets]

    def find_asset(self, asset_name: str) -> ReleaseAsset:
        """
        Exact-name asset lookup.

        Raises:
            AssetNotFoundError: Listing every available asset name.
        """
        for asset in self.assets:
            if asset.name == asset_name:
                return asset
        raise AssetNotFoundError(asset_name, self.asset_names)


@dataclass(frozen=True)
class ReleaseOptions:
    require_assets: bool = True
    pre_release: bool = False


@dataclass(frozen=True)
class ReleaseVersion:
    """Release tag plus the download URL of this platform's asset."""
    tag_name: str
    download_url: str


class GitHubReleaseClient:
    """
    Minimal GitHub releases API client.

    Args:
        token: Optional API token (sent as a bearer token).
        timeout: Request timeout in seconds.
        session: Injected requests session (tests pass a mock).
    """

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: int = 60,
        session: Optional[requests.Session] = None,
        api_base: str = GITHUB_API_BASE,
    ):
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "User-Agent": "netcoredbg-resolver",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def releases_url(self, repo_id: str) -> str:
        return f"{self.api_base}/{GITHUB_REPOS_PATH}/{repo_id}/{RELEASES_PATH}"

    def _get_releases(self, repo_id: str) -> List[Dict[str, Any]]:
        url = self.releases_url(repo_id)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.debug("Release listing failed for %s: %s", repo_id, e)
            raise ReleaseFetchError(
                f"Failed to fetch latest release: {e}",
                details={"repo": repo_id, "url": url},
            ) from e
        if not isinstance(data, list):
            raise ReleaseFetchError(
                f"Failed to fetch latest release: unexpected response from {url}",
                details={"repo": repo_id, "url": url},
            )
        return data

    def fetch_latest_release(
        self,
        repo_id: str,
        options: Optional[ReleaseOptions] = None,
    ) -> ReleaseInfo:
        """
        Return the newest release of ``repo_id`` (``owner/repo``) matching options.

        Raises:
            ReleaseFetchError: Network/HTTP failure or no matching release.
        """
        options = options or ReleaseOptions()
        for release in self._get_releases(repo_id):
            try:
                if release.get("draft"):
                    continue
                if release.get("prerelease") and not options.pre_release:
                    continue
                assets = [
                    ReleaseAsset(name=a["name"], download_url=a["browser_download_url"])
                    for a in release.get("assets") or []
                ]
                if options.require_assets and not assets:
                    continue
                return ReleaseInfo(version=release["tag_name"], assets=assets)
            except (KeyError, TypeError, AttributeError) as e:
                raise ReleaseFetchError(
                    f"Failed to fetch latest release: malformed release entry ({e!r})",
                    details={"repo": repo_id},
                ) from e

        raise ReleaseFetchError(
            f"Failed to fetch latest release: no matching release found for {repo_id}",
            details={"repo": repo_id, "options": vars(options)},
        )


__all__ = [
    "ReleaseAsset",
    "ReleaseInfo",
    "ReleaseOptions",
    "ReleaseVersion",
    "GitHubReleaseClient",
]
