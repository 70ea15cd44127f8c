"""
Tests for the GitHub release client.

HTTP is mocked at the requests.Session level.
"""

from unittest.mock import MagicMock, Mock

import pytest
import requests

from netcoredbg_resolver.errors import AssetNotFoundError, ReleaseFetchError
from netcoredbg_resolver.releases import (
    GitHubReleaseClient,
    ReleaseAsset,
    ReleaseInfo,
    ReleaseOptions,
)


def _release(tag, *assets, draft=False, prerelease=False):
    return {
        "tag_name": tag,
        "draft": draft,
        "prerelease": prerelease,
        "assets": [
            {"name": a, "browser_download_url": f"https://github.com/dl/{tag}/{a}"}
            for a in assets
        ],
    }


def _session(payload=None, error=None):
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    resp = Mock()
    if error is not None:
        resp.raise_for_status.side_effect = error
    resp.json.return_value = payload
    session.get.return_value = resp
    return session


class TestFetchLatestRelease:
    """Tests for GitHubReleaseClient.fetch_latest_release."""

    def test_returns_first_release(self):
        session = _session([
            _release("v3.1.0", "netcoredbg-linux-amd64.tar.gz", "netcoredbg-win64.zip"),
            _release("v3.0.0", "netcoredbg-linux-amd64.tar.gz"),
        ])
        client = GitHubReleaseClient(session=session, timeout=7)

        info = client.fetch_latest_release("qwadrox/netcoredbg")

        assert info.version == "v3.1.0"
        assert info.asset_names == ["netcoredbg-linux-amd64.tar.gz", "netcoredbg-win64.zip"]
        assert info.assets[1].download_url == "https://github.com/dl/v3.1.0/netcoredbg-win64.zip"
        session.get.assert_called_once_with(
            "https://api.github.com/repos/qwadrox/netcoredbg/releases", timeout=7,
        )

    def test_skips_drafts_and_prereleases(self):
        session = _session([
            _release("v4.0.0", "a.zip", draft=True),
            _release("v3.2.0-rc1", "a.zip", prerelease=True),
            _release("v3.1.0", "a.zip"),
        ])
        info = GitHubReleaseClient(session=session).fetch_latest_release("o/r")
        assert info.version == "v3.1.0"

    def test_prerelease_allowed_when_requested(self):
        session = _session([
            _release("v3.2.0-rc1", "a.zip", prerelease=True),
            _release("v3.1.0", "a.zip"),
        ])
        info = GitHubReleaseClient(session=session).fetch_latest_release(
            "o/r", ReleaseOptions(pre_release=True),
        )
        assert info.version == "v3.2.0-rc1"

    def test_skips_releases_without_assets(self):
        session = _session([_release("v3.2.0"), _release("v3.1.0", "a.zip")])
        info = GitHubReleaseClient(session=session).fetch_latest_release("o/r")
        assert info.version == "v3.1.0"

    def test_assetless_release_allowed_without_require_assets(self):
        session = _session([_release("v3.2.0"), _release("v3.1.0", "a.zip")])
        info = GitHubReleaseClient(session=session).fetch_latest_release(
            "o/r", ReleaseOptions(require_assets=False),
        )
        assert info.version == "v3.2.0"
        assert info.assets == []

    def test_no_matching_release(self):
        session = _session([_release("v1", draft=True)])
        with pytest.raises(ReleaseFetchError, match="no matching release"):
            GitHubReleaseClient(session=session).fetch_latest_release("o/r")

    def test_http_error_wrapped(self):
        session = _session(error=requests.HTTPError("403 rate limited"))
        with pytest.raises(ReleaseFetchError, match="403 rate limited") as exc_info:
            GitHubReleaseClient(session=session).fetch_latest_release("o/r")
        assert isinstance(exc_info.value.__cause__, requests.HTTPError)

    def test_connection_error_wrapped(self):
        session = _session()
        session.get.side_effect = requests.ConnectionError("offline")
        with pytest.raises(ReleaseFetchError, match="offline"):
            GitHubReleaseClient(session=session).fetch_latest_release("o/r")

    def test_unexpected_payload(self):
        session = _session({"message": "Not Found"})
        with pytest.raises(ReleaseFetchError, match="unexpected response"):
            GitHubReleaseClient(session=session).fetch_latest_release("o/r")

    @pytest.mark.parametrize("payload", [
        [{"draft": False, "assets": []}],
        [{"tag_name": "v3.1.0", "assets": [{"name": "netcoredbg-win64.zip"}]}],
        ["v3.1.0"],
        [{"tag_name": "v3.1.0", "assets": ["netcoredbg-win64.zip"]}],
    ])
    def test_malformed_entry_wrapped(self, payload):
        session = _session(payload)
        with pytest.raises(ReleaseFetchError, match="malformed release entry"):
            GitHubReleaseClient(session=session).fetch_latest_release(
                "o/r", ReleaseOptions(require_assets=False)
            )

    def test_token_sets_authorization(self):
        session = _session([])
        GitHubReleaseClient(token="abc", session=session)
        assert session.headers["Authorization"] == "Bearer abc"


class TestReleaseInfo:
    """Tests for ReleaseInfo.find_asset."""

    def test_exact_match_only(self):
        info = ReleaseInfo(version="v1", assets=[
            ReleaseAsset("netcoredbg-linux-amd64.tar.gz.sha256", "u1"),
            ReleaseAsset("netcoredbg-linux-amd64.tar.gz", "u2"),
        ])
        assert info.find_asset("netcoredbg-linux-amd64.tar.gz").download_url == "u2"

    def test_missing_asset_lists_alternatives(self):
        info = ReleaseInfo(version="v1", assets=[ReleaseAsset("netcoredbg-win64.zip", "u")])
        with pytest.raises(AssetNotFoundError) as exc_info:
            info.find_asset("netcoredbg-osx-arm64.tar.gz")
        assert exc_info.value.details == {
            "asset_name": "netcoredbg-osx-arm64.tar.gz",
            "available": ["netcoredbg-win64.zip"],
        }
