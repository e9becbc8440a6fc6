"""Unit tests for cli/pager.py."""

import io
import sys

import pytest

from difftrail.cli.pager import page_bytes, resolve_pager_command, write_stdout
from difftrail.exceptions import PagerError


@pytest.mark.unit
@pytest.mark.cli
class TestResolvePagerCommand:
    """Tests for resolve_pager_command()."""

    def test_configured_command(self, monkeypatch):
        """Test the configured command is used when the env var is unset."""
        monkeypatch.delenv("DIFFTRAIL_PAGER", raising=False)
        assert resolve_pager_command(("less", "-R")) == ["less", "-R"]

    def test_env_var_overrides(self, monkeypatch):
        """Test DIFFTRAIL_PAGER is split like a shell command line."""
        monkeypatch.setenv("DIFFTRAIL_PAGER", "less -R '-P prompt'")
        assert resolve_pager_command(("more",)) == ["less", "-R", "-P prompt"]

    def test_blank_env_var_ignored(self, monkeypatch):
        """Test an empty DIFFTRAIL_PAGER falls back to the configured command."""
        monkeypatch.setenv("DIFFTRAIL_PAGER", "  ")
        assert resolve_pager_command(("more",)) == ["more"]


@pytest.mark.unit
@pytest.mark.cli
class TestPageBytes:
    """Tests for page_bytes()."""

    def test_content_piped_to_pager(self, tmp_path):
        """Test the pager receives the content on stdin."""
        target = tmp_path / "paged.bin"
        command = [sys.executable, "-c", f"import sys; open({str(target)!r}, 'wb').write(sys.stdin.buffer.read())"]
        assert page_bytes(b"a\x1b[1;92mb\x1b[0m\n", command) is True
        assert target.read_bytes() == b"a\x1b[1;92mb\x1b[0m\n"

    def test_failing_pager_raises(self):
        """Test a non-zero pager exit status raises PagerError."""
        with pytest.raises(PagerError) as exc_info:
            page_bytes(b"x", [sys.executable, "-c", "import sys; sys.stdin.read(); sys.exit(3)"])
        assert exc_info.value.returncode == 3

    def test_missing_pager_falls_back_to_stdout(self, monkeypatch, caplog):
        """Test that a pager that cannot be started is replaced by stdout."""
        written = []
        monkeypatch.setattr("difftrail.cli.pager.write_stdout", lambda content: written.append(content))
        assert page_bytes(b"content", ["difftrail-no-such-pager-command"]) is False
        assert written == [b"content"]
        assert "Could not start pager" in caplog.text


@pytest.mark.unit
class TestWriteStdout:
    """Tests for write_stdout()."""

    def test_write_to_stream(self):
        """Test writing raw bytes to an explicit stream."""
        stream = io.BytesIO()
        write_stdout(b"\x1b[1;92mx\x1b[0m", stream)
        assert stream.getvalue() == b"\x1b[1;92mx\x1b[0m"

    def test_write_to_stdout(self, capsysbinary):
        """Test writing to the process stdout."""
        write_stdout(b"raw\n")
        assert capsysbinary.readouterr().out == b"raw\n"
