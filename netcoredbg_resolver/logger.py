"""
Logging for netcoredbg-resolver.

Two sinks:
- get_logger(): standard ``logging`` logger, configured once per name.
- DiagnosticLogger: append-only ``[<unix_seconds>] <message>`` file in the
  working directory, for diagnosing resolution from inside an editor host
  where stdout is not visible.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOGGER_NAME = "netcoredbg_resolver"
DEFAULT_LOG_FILE = "netcoredbg_extension_debug.log"


def get_logger(name: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Get or create a logger instance.

    Only the package logger ("netcoredbg_resolver") owns a handler; module
    loggers such as "netcoredbg_resolver.host" propagate to it.

    Args:
        name: Logger name (default: "netcoredbg_resolver")
        verbose: Whether to enable DEBUG output (default: False)

    Returns:
        Configured logger instance
    """
    root = logging.getLogger(DEFAULT_LOGGER_NAME)

    # Only configure if not already configured (avoid duplicate handlers)
    if not root.handlers:
        root.setLevel(logging.DEBUG if verbose else logging.WARNING)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

        root.propagate = False

    if not name or name == DEFAULT_LOGGER_NAME:
        return root
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    verbose: bool = False,
) -> None:
    """
    Configure package logging (used by the CLI).

    Args:
        level: Logging level (default: INFO)
        format_string: Custom format string (default: simple format)
        verbose: Lower the level to DEBUG
    """
    if format_string is None:
        format_string = "%(message)s"

    root = get_logger()
    root.setLevel(logging.DEBUG if verbose else level)
    for handler in root.handlers:
        handler.setFormatter(logging.Formatter(format_string))


class DiagnosticLogger:
    """
    Timestamped, append-only debug log file.

    Constructed by the host and passed to the resolver. Write failures are
    ignored: logging never fails a resolution.

    Usage:
        log = DiagnosticLogger(enabled=True)
        log.debug_log("Starting get_binary_path")
    """

    def __init__(
        self,
        enabled: bool = True,
        log_file: str = DEFAULT_LOG_FILE,
        base_dir: Optional[Union[str, Path]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.enabled = enabled
        self.log_file = log_file
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._logger = logger or logging.getLogger(f"{DEFAULT_LOGGER_NAME}.diagnostic")

    @property
    def path(self) -> Path:
        """Log file location; relative to the working directory unless base_dir is set."""
        if self.base_dir is not None:
            return self.base_dir / self.log_file
        return Path(self.log_file)

    def debug_log(self, message: str) -> None:
        """Append ``[<unix_seconds>] <message>``. No-op when disabled."""
        if not self.enabled:
            return

        self._logger.debug(message)
        line = f"[{int(time.time())}] {message}\n"
        try:
            with open(self.path, "a", encoding="utf-8", errors="backslashreplace") as f:
                f.write(line)
        except (OSError, ValueError):
            pass  # Silently ignore write errors (e.g. permission, disk full)


class NullDiagnosticLogger(DiagnosticLogger):
    """Diagnostic logger that never writes (for embedding without a log file)."""

    def __init__(self):
        super().__init__(enabled=False)


__all__ = [
    "get_logger",
    "setup_logging",
    "DiagnosticLogger",
    "NullDiagnosticLogger",
]
