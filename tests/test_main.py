"""
Tests for the command line entry point.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from provisioner import main as cli
from provisioner.core.exceptions import PrerequisiteMissingError, ProvisioningAbortedError
from provisioner.models import ProvisioningReport, StepName, StepResult

ARGS = [r"\\nas\backup", "Z", "--password", "pw"]


@pytest.fixture
def service():
    service = Mock()
    service.run = AsyncMock(return_value=ProvisioningReport(results=[
        StepResult(step=StepName.TASK, success=True, message="ok"),
    ]))
    return service


@pytest.fixture
def patched(settings, service):
    factory = Mock()
    factory.is_elevated.return_value = True
    with patch.object(cli, "get_settings", return_value=settings), \
            patch.object(cli, "get_provisioning_service", return_value=service) as get_service, \
            patch.object(cli, "get_platform_factory", return_value=factory):
        yield get_service, factory


class TestMain:

    def test_success_exit_code(self, patched, service):
        assert cli.main(ARGS) == cli.EXIT_OK

        request = service.run.call_args.args[0]
        assert request.network_path == r"\\nas\backup"
        assert request.drive_letter == "Z"
        assert request.account_password == "pw"
        assert request.run_now is True

    def test_defaults_from_settings(self, patched, service, settings):
        cli.main(ARGS)

        request = service.run.call_args.args[0]
        assert request.account_name == settings.default_account_name
        assert request.mirror_executable == settings.mirror_executable

    def test_options_override_defaults(self, patched, service):
        cli.main(ARGS + [
            "--account-name", "OtherSvc",
            "--share-username", "nasuser",
            "--share-password", "naspw",
            "--mirror-exe", r"D:\tools\mirror.exe",
            "--no-run-now",
        ])

        request = service.run.call_args.args[0]
        assert request.account_name == "OtherSvc"
        assert request.share_username == "nasuser"
        assert request.mirror_executable == r"D:\tools\mirror.exe"
        assert request.run_now is False

    def test_provisioning_failure_exit_code(self, patched, service):
        service.run.side_effect = PrerequisiteMissingError("Mirroring executable not found: [x]")

        assert cli.main(ARGS) == cli.EXIT_FAILED

    def test_requires_elevation(self, patched, service):
        _, factory = patched
        factory.is_elevated.return_value = False

        assert cli.main(ARGS) == cli.EXIT_FAILED
        service.run.assert_not_called()

    def test_invalid_drive_letter_is_usage_error(self, patched, service):
        assert cli.main([r"\\nas\backup", "ZZ", "--password", "pw"]) == cli.EXIT_USAGE
        service.run.assert_not_called()

    def test_yes_skips_confirmation(self, patched):
        get_service, _ = patched

        cli.main(ARGS + ["--yes"])

        assert get_service.call_args.args[0] is cli.always_continue

    def test_interactive_confirmation_by_default(self, patched):
        get_service, _ = patched

        cli.main(ARGS)

        assert get_service.call_args.args[0] is cli.ask_to_continue

    def test_prompts_for_missing_password(self, patched, service):
        with patch.object(cli.Prompt, "ask", return_value="typed-pw") as ask:
            cli.main([r"\\nas\backup", "Z"])

        assert ask.call_args.kwargs["password"] is True
        assert service.run.call_args.args[0].account_password == "typed-pw"

    @pytest.mark.parametrize("interrupt", [EOFError, KeyboardInterrupt])
    def test_unanswered_password_prompt_fails_cleanly(self, patched, service, interrupt):
        with patch.object(cli.Prompt, "ask", side_effect=interrupt):
            assert cli.main([r"\\nas\backup", "Z"]) == cli.EXIT_FAILED

        service.run.assert_not_called()

    def test_missing_positional_arguments(self, patched):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 2


class TestConfirmation:

    def test_answer_is_returned(self):
        with patch.object(cli.Confirm, "ask", return_value=True) as ask:
            assert cli.ask_to_continue("Continue?") is True

        assert ask.call_args.kwargs["default"] is False

    @pytest.mark.parametrize("interrupt", [EOFError, KeyboardInterrupt])
    def test_no_answer_aborts(self, interrupt):
        with patch.object(cli.Confirm, "ask", side_effect=interrupt):
            with pytest.raises(ProvisioningAbortedError, match="no answer"):
                cli.ask_to_continue("Continue?")

    def test_abort_during_run_exits_failed(self, patched, service):
        service.run.side_effect = ProvisioningAbortedError("Aborted by operator: no answer to confirmation prompt")

        assert cli.main(ARGS) == cli.EXIT_FAILED
