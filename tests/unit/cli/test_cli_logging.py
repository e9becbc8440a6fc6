"""Unit tests for CLI logging features.

Tests for --log-level, --log-file, --trace flags and logging configuration.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from difftrail.logging_utils import configure_logging


@pytest.mark.unit
class TestLoggingConfiguration:
    """Test logging configuration functions."""

    def test_configure_logging_basic(self):
        """Test basic logging configuration."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging(logging.INFO)

            mock_logger.setLevel.assert_called_once_with(logging.INFO)
            assert mock_logger.addHandler.call_count == 1

    def test_configure_logging_level_name(self):
        """Test that level names are resolved."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging("debug")

            mock_logger.setLevel.assert_called_once_with(logging.DEBUG)

    def test_configure_logging_numeric_string(self):
        """Test that numeric level strings are accepted."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging("20")

            mock_logger.setLevel.assert_called_once_with(logging.INFO)

    def test_configure_logging_unknown_level_name(self):
        """Test that an unknown level name falls back to WARNING."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging("chatty")

            mock_logger.setLevel.assert_called_once_with(logging.WARNING)

    def test_configure_logging_with_file(self, tmp_path):
        """Test logging configuration with file output."""
        log_file = tmp_path / "difftrail.log"

        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging(logging.DEBUG, log_file=str(log_file))

            # Console and file handlers
            assert mock_logger.addHandler.call_count == 2
            for call in mock_logger.addHandler.call_args_list:
                call[0][0].close()

    def test_configure_logging_unwritable_file(self, tmp_path):
        """Test that an unusable log file only produces a warning."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging(logging.INFO, log_file=str(tmp_path / "missing-dir" / "x.log"))

            assert mock_logger.addHandler.call_count == 1
            assert mock_logger.warning.called

    def test_configure_logging_trace_mode(self):
        """Test trace mode uses detailed format."""
        with patch("logging.getLogger") as mock_get_logger, patch("logging.Formatter") as mock_formatter:
            mock_get_logger.return_value = MagicMock()

            configure_logging(logging.DEBUG, trace_mode=True)

            format_str = mock_formatter.call_args_list[0][0][0]
            assert "asctime" in format_str
            assert "levelname" in format_str
            assert "name" in format_str

    def test_configure_logging_normal_mode(self):
        """Test normal mode uses simple format."""
        with patch("logging.getLogger") as mock_get_logger, patch("logging.Formatter") as mock_formatter:
            mock_get_logger.return_value = MagicMock()

            configure_logging(logging.INFO, trace_mode=False)

            format_str = mock_formatter.call_args_list[0][0][0]
            assert format_str == "%(levelname)s: %(message)s"

    def test_log_file_uses_trace_format(self, tmp_path):
        """Test the log file gets timestamps even without --trace."""
        with patch("logging.getLogger") as mock_get_logger, patch("logging.Formatter") as mock_formatter:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            configure_logging(logging.INFO, log_file=str(tmp_path / "difftrail.log"))

            formats = [call[0][0] for call in mock_formatter.call_args_list]
            assert formats[0] == "%(levelname)s: %(message)s"
            assert "asctime" in formats[1]
            for call in mock_logger.addHandler.call_args_list:
                call[0][0].close()


@pytest.mark.unit
@pytest.mark.cli
class TestLoggingFlags:
    """Test that CLI flags reach the logging configuration."""

    def test_flags_passed_through(self, isolated_config, tmp_path):
        """Test --log-level, --log-file and --trace for the diff command."""
        from difftrail.cli.commands.diff import handle_diff_command

        (isolated_config / "a").write_bytes(b"x\n")
        (isolated_config / "b").write_bytes(b"x\n")
        log_file = tmp_path / "run.log"

        with patch("difftrail.cli.configure_logging") as mock_configure:
            handle_diff_command(
                ["a", "b", "--no-pager", "--no-config", "--log-level", "info", "--log-file", str(log_file), "--trace"]
            )

        mock_configure.assert_called_once_with("INFO", log_file=str(log_file), trace_mode=True)

    def test_env_log_level_default(self, monkeypatch):
        """Test DIFFTRAIL_LOG_LEVEL sets the default level."""
        from difftrail.cli.builder import create_parser

        monkeypatch.setenv("DIFFTRAIL_LOG_LEVEL", "debug")
        assert create_parser().parse_args(["main"]).log_level == "DEBUG"
