"""
Configuration module - env parsing, resolver settings.
"""

from .env_config import (
    parse_bool_env,
    get_int_env,
    get_str_env,
    load_env,
)
from .settings import ResolverSettings

__all__ = [
    "parse_bool_env",
    "get_int_env",
    "get_str_env",
    "load_env",
    "ResolverSettings",
]
