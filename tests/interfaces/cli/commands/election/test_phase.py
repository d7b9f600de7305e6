"""election のフェーズ操作コマンドのテスト."""

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from src.application.dtos.election_dto import (
    ElectionStatusOutputDto,
    PhaseTransitionOutputDto,
)
from src.domain.value_objects.election_phase import ElectionPhase
from src.interfaces.cli.commands.election import election


_DI_PATH = "src.infrastructure.di.container"


def _setup_mocks(mock_container: MagicMock) -> tuple[AsyncMock, AsyncMock]:
    mock_store = AsyncMock()
    mock_container.database.state_store.return_value = mock_store
    mock_usecase = AsyncMock()
    mock_container.use_cases.manage_election_phase_usecase.return_value = mock_usecase
    return mock_usecase, mock_store


class TestPhaseCommands:
    @patch(f"{_DI_PATH}.get_container")
    def test_start_registration(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        mock_usecase, mock_store = _setup_mocks(mock_container)
        mock_usecase.start_registration.return_value = PhaseTransitionOutputDto(
            success=True,
            phase=ElectionPhase.REGISTRATION,
            previous_phase=ElectionPhase.IDLE,
        )

        result = CliRunner().invoke(election, ["start-registration"])

        assert result.exit_code == 0
        assert "Phase is now REGISTRATION" in result.output
        mock_store.close.assert_awaited_once()

    @patch(f"{_DI_PATH}.get_container")
    def test_rejected_transition_exits_with_error(
        self, mock_get_container: MagicMock
    ) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        mock_usecase, mock_store = _setup_mocks(mock_container)
        mock_usecase.end_voting.return_value = PhaseTransitionOutputDto(
            success=False,
            phase=ElectionPhase.REGISTRATION,
            error_message="end_voting is not allowed during REGISTRATION",
        )

        result = CliRunner().invoke(election, ["end-voting"])

        assert result.exit_code == 1
        assert "not allowed during REGISTRATION" in result.output
        mock_store.close.assert_awaited_once()

    @patch(f"{_DI_PATH}.get_container")
    def test_reset_with_yes(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        mock_usecase, _ = _setup_mocks(mock_container)
        mock_usecase.reset.return_value = PhaseTransitionOutputDto(
            success=True, phase=ElectionPhase.IDLE, previous_phase=ElectionPhase.ENDED
        )

        result = CliRunner().invoke(election, ["reset", "--yes"])

        assert result.exit_code == 0
        (input_dto,) = mock_usecase.reset.call_args.args
        assert input_dto.confirmed is True

    @patch(f"{_DI_PATH}.get_container")
    def test_reset_declined(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        mock_usecase, _ = _setup_mocks(mock_container)
        mock_usecase.reset.return_value = PhaseTransitionOutputDto(
            success=False,
            phase=ElectionPhase.VOTING,
            error_message="Reset requires confirmation",
        )

        result = CliRunner().invoke(election, ["reset"], input="n\n")

        assert result.exit_code == 1
        (input_dto,) = mock_usecase.reset.call_args.args
        assert input_dto.confirmed is False

    @patch(f"{_DI_PATH}.get_container")
    def test_status(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        mock_usecase, _ = _setup_mocks(mock_container)
        mock_usecase.get_status.return_value = ElectionStatusOutputDto(
            phase=ElectionPhase.REGISTRATION_CLOSED,
            registered_count=1200,
            voted_count=0,
            turnout_percentage=0,
            available_actions=["start_registration", "start_voting", "reset"],
        )

        result = CliRunner().invoke(election, ["status"])

        assert result.exit_code == 0
        assert "REGISTRATION CLOSED" in result.output
        assert "1,200" in result.output
        assert "start_voting" in result.output

    @patch(f"{_DI_PATH}.get_container")
    def test_unexpected_error(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        mock_usecase, mock_store = _setup_mocks(mock_container)
        mock_usecase.start_voting.side_effect = RuntimeError("database is locked")

        result = CliRunner().invoke(election, ["start-voting"])

        assert result.exit_code == 1
        assert "database is locked" in result.output
        mock_store.close.assert_awaited_once()
