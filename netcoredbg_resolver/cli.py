"""
Command-line interface for netcoredbg-resolver.

Usage:
    netcoredbg-resolver resolve [--path P]   # Print the netcoredbg path, downloading if needed
    netcoredbg-resolver status               # Show platform, latest release and local state
    netcoredbg-resolver version              # Show version information
"""

import argparse
import sys
from typing import Any, List, Optional

from . import __version__
from .config import ResolverSettings, load_env
from .errors import ResolverError
from .logger import setup_logging
from .platforms import detect_platform, get_executable_name, get_platform_asset_name
from .resolver import BinaryResolver


def _build_resolver(args: argparse.Namespace) -> BinaryResolver:
    settings = ResolverSettings.from_env().with_overrides(
        github_repo=getattr(args, "repo", None),
        dir_prefix=getattr(args, "dir_prefix", None),
    )
    return BinaryResolver(settings=settings)


def cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve and print the netcoredbg binary path."""
    try:
        resolver = _build_resolver(args)
        print(resolver.get_binary_path(args.path or resolver.settings.binary_path))
        return 0
    except ResolverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_status(args: argparse.Namespace) -> int:
    """Show resolution status."""
    try:
        resolver = _build_resolver(args)
        os_, arch = resolver.host.current_platform()
        print("netcoredbg Resolution Status")
        print("=" * 40)
        print(f"Platform: {os_.value}/{arch.value}")
        print(f"Asset: {get_platform_asset_name(os_, arch)}")
        print(f"Executable: {get_executable_name(os_)}")

        version = resolver.fetch_latest_release()
        print(f"Latest release: {version.tag_name}")
        print(f"  URL: {version.download_url}")

        binary = resolver.version_dir(version.tag_name) / get_executable_name(os_)
        if binary.exists():
            print(f"✓ netcoredbg {version.tag_name} is present")
            print(f"  Location: {binary.resolve()}")
        else:
            print(f"✗ netcoredbg {version.tag_name} is not downloaded")
            print("  Download with: netcoredbg-resolver resolve")
        return 0
    except ResolverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"netcoredbg-resolver: v{__version__}")
    try:
        os_, arch = detect_platform()
        print(f"Platform: {os_.value}/{arch.value}")
        print(f"Asset: {get_platform_asset_name(os_, arch)}")
    except ResolverError as e:
        print(f"Platform: {e}")
    return 0


_COMMON_ARGS = [
    ("--repo", None, "repo", None, "Release repository as owner/repo"),
    ("--dir-prefix", None, "dir_prefix", None, "Version directory prefix (default: netcoredbg)"),
]

# (name, help, func, arg_specs); arg spec: (long, short, dest, default, help)
_SUBCOMMANDS = [
    ("resolve", "Resolve the netcoredbg binary, downloading it if needed", cmd_resolve, [
        ("--path", "-p", "path", None, "Use this binary instead of downloading"),
        *_COMMON_ARGS,
    ]),
    ("status", "Show platform, latest release and local state", cmd_status, _COMMON_ARGS),
    ("version", "Show version information", cmd_version, []),
]


def _add_args(parser: argparse.ArgumentParser, specs: List[Any]) -> None:
    for long_opt, short_opt, dest, default, help_text in specs:
        flags = (long_opt, short_opt) if short_opt else (long_opt,)
        parser.add_argument(*flags, dest=dest, default=default, help=help_text)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netcoredbg-resolver",
        description="Locate, download and cache the netcoredbg debugger",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--env-file", dest="env_file", default=None, help="Load variables from this .env file")
    subparsers = parser.add_subparsers(dest="command")
    for name, help_text, func, specs in _SUBCOMMANDS:
        sub = subparsers.add_parser(name, help=help_text)
        _add_args(sub, specs)
        sub.set_defaults(func=func)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    load_env(args.env_file)
    setup_logging(verbose=args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
