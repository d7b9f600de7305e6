"""選挙フェーズ管理のユースケース."""

from src.application.dtos.election_dto import (
    ElectionStatusOutputDto,
    PhaseTransitionOutputDto,
    ResetElectionInputDto,
)
from src.common.logging import get_logger
from src.domain.repositories.election_state_repository import (
    ElectionStateRepository,
)
from src.domain.services.ballot_tabulation_service import BallotTabulationService
from src.domain.services.election_phase_policy import (
    ElectionAction,
    ElectionPhasePolicy,
)
from src.domain.value_objects.election_phase import ElectionPhase


logger = get_logger(__name__)


class ManageElectionPhaseUseCase:
    """管理者によるフェーズ操作（登録開始〜投票終了、リセット）のユースケース.

    許可されない操作は状態を一切変更せず、success=Falseの結果を返す。
    """

    def __init__(
        self,
        election_state_repository: ElectionStateRepository,
        phase_policy: ElectionPhasePolicy | None = None,
        tabulation_service: BallotTabulationService | None = None,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            election_state_repository: 選挙状態リポジトリ
            phase_policy: フェーズ遷移ポリシー
            tabulation_service: 投票率の計算に使う集計サービス
        """
        self.election_state_repository = election_state_repository
        self.phase_policy = phase_policy or ElectionPhasePolicy()
        self.tabulation_service = tabulation_service or BallotTabulationService()

    async def start_registration(self) -> PhaseTransitionOutputDto:
        """選挙人登録を開始する."""
        return await self._transition(ElectionAction.START_REGISTRATION)

    async def end_registration(self) -> PhaseTransitionOutputDto:
        """選挙人登録を締め切る."""
        return await self._transition(ElectionAction.END_REGISTRATION)

    async def start_voting(self) -> PhaseTransitionOutputDto:
        """投票を開始する."""
        return await self._transition(ElectionAction.START_VOTING)

    async def end_voting(self) -> PhaseTransitionOutputDto:
        """投票を終了する."""
        return await self._transition(ElectionAction.END_VOTING)

    async def reset(self, input_dto: ResetElectionInputDto) -> PhaseTransitionOutputDto:
        """選挙をIDLEに戻し、名簿・投票済み集合・得票数を消去する.

        役職と候補者自体は残す（得票数のみ0に戻す）。
        """
        current: ElectionPhase | None = None
        try:
            current = await self.election_state_repository.get_phase()
            if not input_dto.confirmed:
                return PhaseTransitionOutputDto(
                    success=False,
                    phase=current,
                    error_message="Reset requires confirmation",
                )

            candidates = await self.election_state_repository.get_candidates()
            for candidate in candidates:
                candidate.reset_votes()

            # フェーズは最後に書く
            await self.election_state_repository.save_candidates(candidates)
            await self.election_state_repository.clear_voter_data()
            await self.election_state_repository.save_phase(ElectionPhase.IDLE)

            logger.info(
                "Election reset",
                previous_phase=current.value,
                candidates=len(candidates),
            )
            return PhaseTransitionOutputDto(
                success=True, phase=ElectionPhase.IDLE, previous_phase=current
            )
        except Exception as e:
            logger.error(f"Failed to reset election: {e}")
            return PhaseTransitionOutputDto(
                success=False, phase=current, error_message=str(e)
            )

    async def get_status(self) -> ElectionStatusOutputDto:
        """現在のフェーズと投票率を取得する."""
        try:
            phase = await self.election_state_repository.get_phase()
            registered = await self.election_state_repository.get_registered_voters()
            voted = await self.election_state_repository.get_voted_voters()
            turnout = self.tabulation_service.turnout(len(registered), len(voted))
            return ElectionStatusOutputDto(
                phase=phase,
                registered_count=turnout.registered_count,
                voted_count=turnout.voted_count,
                turnout_percentage=turnout.turnout_percentage,
                available_actions=[
                    a.value for a in self.phase_policy.available_actions(phase)
                ],
            )
        except Exception as e:
            logger.error(f"Failed to get election status: {e}")
            return ElectionStatusOutputDto(
                phase=ElectionPhase.IDLE, success=False, error_message=str(e)
            )

    async def _transition(self, action: ElectionAction) -> PhaseTransitionOutputDto:
        current: ElectionPhase | None = None
        try:
            current = await self.election_state_repository.get_phase()
            transition = self.phase_policy.evaluate(current, action)
            if not transition.allowed:
                logger.warning(
                    "Phase transition rejected",
                    action=action.value,
                    phase=current.value,
                )
                return PhaseTransitionOutputDto(
                    success=False, phase=current, error_message=transition.reason
                )

            await self.election_state_repository.save_phase(transition.to_phase)
            logger.info(
                "Election phase changed",
                action=action.value,
                from_phase=current.value,
                to_phase=transition.to_phase.value,
            )
            return PhaseTransitionOutputDto(
                success=True, phase=transition.to_phase, previous_phase=current
            )
        except Exception as e:
            logger.error(f"Failed to {action.value}: {e}")
            return PhaseTransitionOutputDto(
                success=False, phase=current, error_message=str(e)
            )
