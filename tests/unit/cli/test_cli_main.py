"""Unit tests for the CLI entry point, argument parser and exit codes."""

import argparse

import pytest

from difftrail import __version__
from difftrail.cli import load_options, main
from difftrail.cli.builder import (
    EXIT_DIRTY_TREE,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_GIT_ERROR,
    EXIT_RUN_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from difftrail.exceptions import (
    ConfigError,
    DiffTrailError,
    DirtyTreeError,
    FileError,
    GitError,
    PagerError,
    RunError,
    ValidationError,
)


@pytest.mark.unit
class TestGetExitCodeForException:
    """Test the exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception,expected",
        [
            (DirtyTreeError(), EXIT_DIRTY_TREE),
            (GitError("git log main failed"), EXIT_GIT_ERROR),
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (ConfigError("bad"), EXIT_VALIDATION_ERROR),
            (FileError("missing"), EXIT_FILE_ERROR),
            (RunError("build failed"), EXIT_RUN_ERROR),
            (PagerError("pager failed"), EXIT_RUN_ERROR),
            (DiffTrailError("other"), EXIT_ERROR),
            (RuntimeError("other"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, expected):
        """Test each exception type maps to its exit code."""
        assert get_exit_code_for_exception(exception) == expected


@pytest.mark.unit
class TestCreateParser:
    """Test the commit browser argument parser."""

    def test_head_required(self):
        """Test that the head revision is required."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_defaults(self):
        """Test default values."""
        parsed = create_parser().parse_args(["main"])
        assert parsed.head == "main"
        assert parsed.repo is None
        assert parsed.pager is None
        assert parsed.no_clear is False
        assert parsed.no_config is False

    def test_log_level_case_insensitive(self):
        """Test --log-level accepts lower case."""
        assert create_parser().parse_args(["main", "--log-level", "debug"]).log_level == "DEBUG"

    def test_version(self, capsys):
        """Test --version prints the version."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


@pytest.mark.unit
class TestLoadOptions:
    """Test load_options() flag handling."""

    def _args(self, **overrides):
        values = {"config": None, "no_config": True, "pager": None, "no_clear": False}
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_defaults(self, isolated_config):
        """Test defaults without any configuration."""
        _highlight, session = load_options(self._args())
        assert session.pager_command == ("less", "-R")
        assert session.clear_screen is True

    def test_env_pager(self, isolated_config, monkeypatch):
        """Test DIFFTRAIL_PAGER overrides the configured pager."""
        monkeypatch.setenv("DIFFTRAIL_PAGER", "most")
        _highlight, session = load_options(self._args())
        assert session.pager_command == ("most",)

    def test_flag_pager_beats_env(self, isolated_config, monkeypatch):
        """Test --pager overrides DIFFTRAIL_PAGER."""
        monkeypatch.setenv("DIFFTRAIL_PAGER", "most")
        _highlight, session = load_options(self._args(pager="less -RS"))
        assert session.pager_command == ("less", "-RS")

    def test_env_pager_beats_config(self, isolated_config, monkeypatch):
        """Test DIFFTRAIL_PAGER overrides the config file."""
        (isolated_config / ".difftrail.toml").write_text('[session]\npager_command = "more"\n')
        monkeypatch.setenv("DIFFTRAIL_PAGER", "most")
        _highlight, session = load_options(self._args(no_config=False))
        assert session.pager_command == ("most",)

    def test_no_clear(self, isolated_config):
        """Test --no-clear disables clearing the screen."""
        _highlight, session = load_options(self._args(no_clear=True))
        assert session.clear_screen is False

    def test_no_config_ignores_files(self, isolated_config):
        """Test --no-config skips discovery."""
        (isolated_config / ".difftrail.toml").write_text("[highlight]\ntab_width = 3\n")
        highlight, _session = load_options(self._args())
        assert highlight.tab_width == 8

    def test_env_config(self, isolated_config, monkeypatch):
        """Test DIFFTRAIL_CONFIG names the config file."""
        path = isolated_config / "custom.yaml"
        path.write_text("highlight:\n  tab_width: 3\n")
        monkeypatch.setenv("DIFFTRAIL_CONFIG", str(path))
        highlight, _session = load_options(self._args(no_config=False))
        assert highlight.tab_width == 3


class FakeBrowser:
    """Records construction and raises a preset error from run()."""

    instances = []
    error = None

    def __init__(self, repo, head, options=None, highlight_options=None):
        self.repo = repo
        self.head = head
        self.options = options
        FakeBrowser.instances.append(self)

    def run(self):
        if FakeBrowser.error is not None:
            raise FakeBrowser.error


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test main() with the commit browser replaced."""

    @pytest.fixture(autouse=True)
    def fake_browser(self, monkeypatch, isolated_config):
        FakeBrowser.instances = []
        FakeBrowser.error = None
        monkeypatch.setattr("difftrail.cli.session.CommitBrowser", FakeBrowser)

    def test_success(self):
        """Test a normal session exits 0."""
        assert main(["main", "--no-config", "-C", "repo"]) == EXIT_SUCCESS
        browser = FakeBrowser.instances[0]
        assert browser.head == "main"
        assert str(browser.repo.path) == "repo"

    def test_no_clear_flag(self):
        """Test --no-clear reaches the browser options."""
        main(["main", "--no-config", "--no-clear"])
        assert FakeBrowser.instances[0].options.clear_screen is False

    def test_dirty_tree_exit_code(self, capsys):
        """Test a dirty tree prints the hint and exits with its code."""
        FakeBrowser.error = DirtyTreeError()
        assert main(["main", "--no-config"]) == EXIT_DIRTY_TREE
        assert "Error: git tree isn't clean; run git status and resolve" in capsys.readouterr().err

    def test_git_error_exit_code(self, capsys):
        """Test a git failure includes the command output."""
        FakeBrowser.error = GitError("git log nope failed (exit status 128)", output="fatal: bad revision 'nope'\n")
        assert main(["nope", "--no-config"]) == EXIT_GIT_ERROR
        err = capsys.readouterr().err
        assert "git log nope failed" in err
        assert "fatal: bad revision 'nope'" in err

    def test_keyboard_interrupt(self):
        """Test Ctrl-C ends the session quietly."""
        FakeBrowser.error = KeyboardInterrupt()
        assert main(["main", "--no-config"]) == EXIT_SUCCESS

    def test_invalid_config(self, isolated_config):
        """Test an invalid config value exits with the validation code."""
        (isolated_config / ".difftrail.toml").write_text("[highlight]\nbyte_granularity = -1\n")
        assert main(["main"]) == EXIT_VALIDATION_ERROR
        assert FakeBrowser.instances == []

    def test_diff_subcommand(self, isolated_config, capsysbinary):
        """Test main() routes 'diff' to the diff command."""
        (isolated_config / "a").write_bytes(b"x\n")
        (isolated_config / "b").write_bytes(b"y\n")
        assert main(["diff", "a", "b", "--no-pager", "--no-config"]) == EXIT_SUCCESS
        assert capsysbinary.readouterr().out == b"\x1b[1;92my\x1b[0m\n"
        assert FakeBrowser.instances == []
