# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/test_init.py

"""Tests for the init workflow."""

from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest
from loguru import logger

from teryx.config.manager import UserConfig
from teryx.core.lifecycle import init_repository
from teryx.core.models import InitOptions
from teryx.system.exceptions import ExternalCommandError, FilesystemError, TeryxError, ValidationError
from teryx.system.execution import CommandExecutor
from teryx.system.logging_setup import setup_logging


class TestInitValidation:

    @pytest.mark.parametrize("password", [None, ""])
    def test_missing_password_runs_nothing(self, runner, console, tmp_path, password):
        with pytest.raises(ValidationError, match="--password is required"):
            init_repository(InitOptions(name="proj", password=password), runner, console, base_dir=tmp_path)

        assert runner.calls == []
        assert not (tmp_path / "proj").exists()

    @pytest.mark.parametrize("name", ["", ".fossil"])
    def test_empty_name_rejected(self, runner, console, tmp_path, name):
        with pytest.raises(ValidationError, match="must not be empty"):
            init_repository(InitOptions(name=name, password="pw"), runner, console, base_dir=tmp_path)
        assert runner.calls == []

    def test_name_with_directory_rejected(self, runner, console, tmp_path):
        with pytest.raises(ValidationError, match="must not contain '/'"):
            init_repository(InitOptions(name="sub/proj", password="pw"), runner, console, base_dir=tmp_path)
        assert runner.calls == []


class TestInitWorkflow:

    def test_full_sequence_with_explicit_user(self, runner, console, tmp_path):
        result = init_repository(
            InitOptions(name="proj", password="s3cret", user="admin"),
            runner, console, base_dir=tmp_path
        )

        checkout = tmp_path / "proj"
        assert runner.commands == [
            ["fossil", "new", "proj.fossil"],
            ["fossil", "open", str(Path("..") / "proj.fossil")],
            ["fossil", "user", "password", "admin", "s3cret"],
            ["fossil", "user", "default", "admin"],
        ]
        assert [call.working_dir for call in runner.calls] == [tmp_path, checkout, checkout, checkout]
        assert all(call.mode == "interactive" for call in runner.calls)

        assert checkout.is_dir()
        assert result.checkout_dir == checkout.resolve()
        assert result.repo_file == tmp_path.resolve() / "proj.fossil"
        assert result.user == "admin"

    def test_user_defaults_to_whoami(self, make_runner, console, tmp_path):
        runner = make_runner(captured_output="alice")

        result = init_repository(InitOptions(name="proj", password="pw"), runner, console, base_dir=tmp_path)

        assert runner.calls[0].mode == "capturing"
        assert runner.calls[0].command == ["whoami"]
        assert ["fossil", "user", "password", "alice", "pw"] in runner.commands
        assert ["fossil", "user", "default", "alice"] in runner.commands
        assert result.user == "alice"
        assert "Defaulting to current user: alice" in console.file.getvalue()

    def test_empty_whoami_output_is_fatal(self, make_runner, console, tmp_path):
        runner = make_runner(captured_output="")

        with pytest.raises(TeryxError, match="empty user name"):
            init_repository(InitOptions(name="proj", password="pw"), runner, console, base_dir=tmp_path)
        assert runner.programs() == ["whoami"]

    def test_suffix_not_appended_twice(self, runner, console, tmp_path):
        init_repository(InitOptions(name="proj.fossil", password="pw", user="u"), runner, console, base_dir=tmp_path)

        assert runner.commands[0] == ["fossil", "new", "proj.fossil"]
        assert (tmp_path / "proj").is_dir()
        assert "Appending .fossil" not in console.file.getvalue()

    def test_suffix_append_is_reported(self, runner, console, tmp_path):
        init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, base_dir=tmp_path)
        assert "Repository file will be: proj.fossil" in console.file.getvalue()

    def test_quiet_hides_info_but_not_success(self, runner, console, tmp_path):
        init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, base_dir=tmp_path, quiet=True)

        output = console.file.getvalue()
        assert "Appending .fossil" not in output
        assert "Repository initialized and opened in" in output

    def test_configured_fossil_binary(self, runner, console, tmp_path):
        config = UserConfig(fossil_bin="/opt/fossil/bin/fossil")

        init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, config=config, base_dir=tmp_path)

        assert set(runner.programs()) == {"/opt/fossil/bin/fossil"}

    def test_existing_checkout_directory_is_fine(self, runner, console, tmp_path):
        (tmp_path / "proj").mkdir()
        init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, base_dir=tmp_path)
        assert len(runner.calls) == 4


class TestInitFailures:

    def test_new_failure_stops_before_checkout(self, make_runner, console, tmp_path):
        runner = make_runner(fail_on=("fossil new",))

        with pytest.raises(ExternalCommandError):
            init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, base_dir=tmp_path)

        assert runner.commands == [["fossil", "new", "proj.fossil"]]
        assert not (tmp_path / "proj").exists()

    def test_open_failure_leaves_checkout_dir(self, make_runner, console, tmp_path):
        runner = make_runner(fail_on=("fossil open",))

        with pytest.raises(ExternalCommandError):
            init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, base_dir=tmp_path)

        assert len(runner.calls) == 2
        assert (tmp_path / "proj").is_dir()

    def test_checkout_dir_blocked_by_file(self, runner, console, tmp_path):
        (tmp_path / "proj").write_text("not a directory")

        with pytest.raises(FilesystemError) as exc_info:
            init_repository(InitOptions(name="proj", password="pw", user="u"), runner, console, base_dir=tmp_path)

        assert exc_info.value.path == str(tmp_path / "proj")
        assert runner.commands == [["fossil", "new", "proj.fossil"]]


class TestInitLogging:
    """The admin password never reaches the log file."""

    @pytest.fixture
    def log_file(self, tmp_path):
        setup_logging(UserConfig(local_log=tmp_path / "logs"))
        yield tmp_path / "logs" / "teryx.log"
        logger.remove()

    @patch('subprocess.run')
    def test_password_not_written_to_log(self, mock_run, console, tmp_path, log_file):
        mock_run.return_value = MagicMock(returncode=0)

        init_repository(
            InitOptions(name="proj", password="TOPSECRET", user="admin"),
            CommandExecutor(console), console, base_dir=tmp_path
        )
        logger.remove()

        content = log_file.read_text()
        assert "'user', 'password', 'admin'" in content
        assert "TOPSECRET" not in content

    @patch('subprocess.run')
    def test_password_not_in_failure_message(self, mock_run, console, tmp_path, log_file):
        mock_run.side_effect = lambda cmd, **kwargs: MagicMock(returncode=1 if "password" in cmd else 0)

        with pytest.raises(ExternalCommandError) as exc_info:
            init_repository(
                InitOptions(name="proj", password="TOPSECRET", user="admin"),
                CommandExecutor(console), console, base_dir=tmp_path
            )
        logger.remove()

        assert "TOPSECRET" not in str(exc_info.value)
        assert "TOPSECRET" not in exc_info.value.command
        assert "TOPSECRET" not in log_file.read_text()
