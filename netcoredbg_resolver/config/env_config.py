"""
Unified environment variable parsing for netcoredbg-resolver.

Single source of truth for reading NETCOREDBG_* variables.
Used by config.settings and the CLI.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values


_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


def parse_bool_env(key: str, default: bool) -> bool:
    """
    Boolean env var such as NETCOREDBG_DEBUG_LOG or NETCOREDBG_PRERELEASE.

    Accepts true/false, 1/0, yes/no, on/off (case-insensitive); an empty
    value means false. Unset or unrecognised values give ``default``.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def get_int_env(key: str, default: int) -> int:
    """Integer env var (NETCOREDBG_HTTP_TIMEOUT); unset, empty or non-numeric gives default."""
    try:
        return int(os.environ.get(key) or default)
    except ValueError:
        return default


def get_str_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """String env var; empty values count as unset."""
    value = os.environ.get(key)
    return value if value else default


def load_env(env_file: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """
    Load .env file into environment variables.

    Existing variables win over values from the file.
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"
    else:
        env_file = Path(env_file)

    loaded = {}
    if env_file.exists():
        for key, value in dotenv_values(env_file).items():
            if value:
                os.environ.setdefault(key, value)
                loaded[key] = value
    return loaded
