"""
Tests for the command line entry point.
"""

from unittest.mock import patch

import pytest
import yaml

from feedback_notifier import __version__
from feedback_notifier.main import build_parser, main
from feedback_notifier.models.delivery import RunSummary
from feedback_notifier.utils.error_handling import ConfigError, RemoteFetchError


class TestBuildParser:
    """Test cases for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.config is None
        assert args.release is None
        assert args.dry_run is False
        assert args.verbose is False

    def test_short_options(self):
        args = build_parser().parse_args(["-c", "my.toml", "-r", "F41", "-n", "-v"])

        assert args.config == "my.toml"
        assert args.release == "F41"
        assert args.dry_run is True
        assert args.verbose is True

    def test_print_config_template(self, capsys):
        assert main(["--print-config-template"]) == 0

        template = yaml.safe_load(capsys.readouterr().out)
        assert template["username"] == "${FAS_USERNAME}"
        assert template["interests"] == ["kernel", "firefox", "python3"]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


@patch("feedback_notifier.main.RunOrchestrator")
class TestMain:
    """Test cases for exit codes."""

    def test_success(self, mock_orchestrator):
        mock_orchestrator.return_value.run.return_value = RunSummary()

        assert main(["--no-log-file", "-n", "-r", "F40"]) == 0
        mock_orchestrator.assert_called_once_with(
            config_path=None, release="F40", dry_run=True, verbose=False
        )

    def test_fatal_error(self, mock_orchestrator, capsys):
        mock_orchestrator.return_value.run.side_effect = ConfigError("missing username")

        assert main(["--no-log-file"]) == 1
        err = capsys.readouterr().err
        assert err.count("missing username") == 1
        assert "Run aborted" in err

    def test_remote_fetch_error(self, mock_orchestrator):
        mock_orchestrator.return_value.run.side_effect = RemoteFetchError("Timeout")

        assert main(["--no-log-file"]) == 1

    def test_interrupted(self, mock_orchestrator):
        mock_orchestrator.return_value.run.side_effect = KeyboardInterrupt

        assert main(["--no-log-file"]) == 130

    def test_log_dir(self, mock_orchestrator, tmp_path):
        mock_orchestrator.return_value.run.return_value = RunSummary()

        assert main(["--log-dir", str(tmp_path / "logs")]) == 0
        assert (tmp_path / "logs" / "bodhi-feedback-notifier.log").exists()
