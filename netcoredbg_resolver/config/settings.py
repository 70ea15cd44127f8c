"""
Resolver configuration.

Environment Variables:
    NETCOREDBG_PATH: User-provided netcoredbg binary (skips download)
    NETCOREDBG_GITHUB_REPO: Release repository as owner/repo
    NETCOREDBG_DIR_PREFIX: Prefix of version directories (<prefix>_v<tag>)
    NETCOREDBG_DEBUG_LOG: Write the diagnostic log file (true/false)
    NETCOREDBG_LOG_FILE: Diagnostic log file name
    NETCOREDBG_HTTP_TIMEOUT: HTTP timeout in seconds
    NETCOREDBG_PRERELEASE: Accept pre-releases (true/false)
    GITHUB_TOKEN: Token for the GitHub API (optional, raises rate limits)
"""

from dataclasses import dataclass, replace
from typing import Optional

from .env_config import get_int_env, get_str_env, parse_bool_env

GITHUB_OWNER = "qwadrox"
GITHUB_REPO = "netcoredbg"

DEFAULT_GITHUB_REPO = f"{GITHUB_OWNER}/{GITHUB_REPO}"
DEFAULT_DIR_PREFIX = "netcoredbg"
DEFAULT_LOG_FILE = "netcoredbg_extension_debug.log"
DEFAULT_DEBUG_LOG = True
DEFAULT_HTTP_TIMEOUT = 60  # seconds
DEFAULT_PRERELEASE = False


@dataclass
class ResolverSettings:
    """Setup configuration for BinaryResolver and its collaborators."""
    binary_path: Optional[str] = None
    github_repo: str = DEFAULT_GITHUB_REPO
    dir_prefix: str = DEFAULT_DIR_PREFIX
    log_file: str = DEFAULT_LOG_FILE
    github_token: Optional[str] = None
    debug_log: bool = DEFAULT_DEBUG_LOG
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    pre_release: bool = DEFAULT_PRERELEASE

    @classmethod
    def from_env(cls) -> "ResolverSettings":
        """Create settings from environment variables."""
        return cls(
            binary_path=get_str_env("NETCOREDBG_PATH"),
            github_repo=get_str_env("NETCOREDBG_GITHUB_REPO", DEFAULT_GITHUB_REPO),
            dir_prefix=get_str_env("NETCOREDBG_DIR_PREFIX", DEFAULT_DIR_PREFIX),
            log_file=get_str_env("NETCOREDBG_LOG_FILE", DEFAULT_LOG_FILE),
            github_token=get_str_env("GITHUB_TOKEN"),
            debug_log=parse_bool_env("NETCOREDBG_DEBUG_LOG", DEFAULT_DEBUG_LOG),
            http_timeout=get_int_env("NETCOREDBG_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            pre_release=parse_bool_env("NETCOREDBG_PRERELEASE", DEFAULT_PRERELEASE),
        )

    def with_overrides(self, **overrides) -> "ResolverSettings":
        """Create new settings with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def version_dir_name(self, tag: str) -> str:
        """<prefix>_v<version>; a leading "v" on the tag is not doubled."""
        return f"{self.dir_prefix}_v{strip_version_prefix(tag)}"


def strip_version_prefix(tag: str) -> str:
    return tag[1:] if tag[:1] in ("v", "V") else tag
