"""
Tests for the diagnostic log file and package logger.
"""

import logging
import os
import re
from unittest.mock import patch

from netcoredbg_resolver.logger import (
    DEFAULT_LOGGER_NAME,
    DiagnosticLogger,
    NullDiagnosticLogger,
    get_logger,
)


class TestDiagnosticLogger:
    """Tests for DiagnosticLogger."""

    def test_appends_timestamped_lines(self, tmp_path):
        log = DiagnosticLogger(base_dir=tmp_path)
        log.debug_log("first")
        log.debug_log("second")

        lines = log.path.read_text().splitlines()
        assert len(lines) == 2
        assert re.fullmatch(r"\[\d+\] first", lines[0])
        assert re.fullmatch(r"\[\d+\] second", lines[1])

    def test_uses_unix_seconds(self, tmp_path):
        log = DiagnosticLogger(base_dir=tmp_path)
        with patch("netcoredbg_resolver.logger.time.time", return_value=1700000000.75):
            log.debug_log("hello")
        assert log.path.read_text() == "[1700000000] hello\n"

    def test_appends_to_existing_file(self, tmp_path):
        (tmp_path / "netcoredbg_extension_debug.log").write_text("[1] earlier\n")
        log = DiagnosticLogger(base_dir=tmp_path)
        log.debug_log("later")
        assert log.path.read_text().startswith("[1] earlier\n")

    def test_default_location_is_working_directory(self, workdir):
        log = DiagnosticLogger()
        log.debug_log("here")
        assert (workdir / "netcoredbg_extension_debug.log").exists()

    def test_disabled_writes_nothing(self, tmp_path):
        log = DiagnosticLogger(enabled=False, base_dir=tmp_path)
        log.debug_log("ignored")
        assert not log.path.exists()

    def test_null_logger(self, workdir):
        NullDiagnosticLogger().debug_log("ignored")
        assert list(workdir.iterdir()) == []

    def test_write_failure_is_swallowed(self, tmp_path):
        """A log location that cannot be opened never raises."""
        log = DiagnosticLogger(base_dir=tmp_path / "missing" / "dir")
        log.debug_log("lost")
        assert not log.path.exists()

    def test_undecodable_message_is_escaped(self, tmp_path):
        """Surrogate-escaped file names never break a write."""
        name = os.fsdecode(b"netcoredbg-\xff")
        log = DiagnosticLogger(base_dir=tmp_path)
        log.debug_log(f"Using user-provided path: {name}")
        assert log.path.read_text(encoding="utf-8").endswith("netcoredbg-\\udcff\n")

    def test_mirrors_to_logging(self, tmp_path, caplog):
        log = DiagnosticLogger(base_dir=tmp_path, logger=logging.getLogger("test.diagnostic"))
        with caplog.at_level(logging.DEBUG, logger="test.diagnostic"):
            log.debug_log("mirrored")
        assert "mirrored" in caplog.text


class TestGetLogger:
    """Tests for get_logger."""

    def test_default_name(self):
        assert get_logger().name == DEFAULT_LOGGER_NAME

    def test_repeated_calls_add_no_handlers(self):
        package_logger = get_logger()
        before = list(package_logger.handlers)
        get_logger()
        get_logger("netcoredbg_resolver.host", verbose=True)
        assert package_logger.handlers == before
        own = [h for h in before if type(h) is logging.StreamHandler]
        assert len(own) <= 1

    def test_module_logger_propagates_to_package(self):
        child = get_logger("netcoredbg_resolver.host")
        assert child.name == "netcoredbg_resolver.host"
        assert child.handlers == []
