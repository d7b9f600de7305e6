"""開票結果取得のユースケース."""

from src.application.dtos.election_dto import (
    ElectionResultsOutputDto,
    GetResultsInputDto,
    PositionResultOutputItem,
)
from src.common.logging import get_logger
from src.domain.repositories.election_state_repository import (
    ElectionStateRepository,
)
from src.domain.services.ballot_tabulation_service import BallotTabulationService
from src.domain.services.election_phase_policy import ElectionPhasePolicy
from src.domain.value_objects.election_phase import ElectionPhase


logger = get_logger(__name__)


class GetElectionResultsUseCase:
    """役職ごとの開票結果を取得するユースケース.

    投票中は速報（is_live=True）、投票終了後は確定結果を返す。
    """

    def __init__(
        self,
        election_state_repository: ElectionStateRepository,
        phase_policy: ElectionPhasePolicy | None = None,
        tabulation_service: BallotTabulationService | None = None,
    ) -> None:
        self.election_state_repository = election_state_repository
        self.phase_policy = phase_policy or ElectionPhasePolicy()
        self.tabulation_service = tabulation_service or BallotTabulationService()

    async def execute(self, input_dto: GetResultsInputDto) -> ElectionResultsOutputDto:
        """開票結果を取得する.

        Args:
            input_dto: position_idを指定するとその役職のみ

        Returns:
            ElectionResultsOutputDto。候補者のいない役職は含めない。
        """
        try:
            phase = await self.election_state_repository.get_phase()
            if not self.phase_policy.results_visible(phase):
                return ElectionResultsOutputDto(
                    results=[],
                    phase=phase,
                    success=False,
                    error_message=f"Results are not available during {phase.value}",
                )

            positions = await self.election_state_repository.get_positions()
            candidates = await self.election_state_repository.get_candidates()

            if input_dto.position_id is not None:
                targets = [p for p in positions if p.id == input_dto.position_id]
                if not targets:
                    return ElectionResultsOutputDto(
                        results=[],
                        phase=phase,
                        success=False,
                        error_message=f"Unknown position: {input_dto.position_id}",
                    )
            else:
                targets = self.tabulation_service.open_positions(positions, candidates)

            results = [
                PositionResultOutputItem.from_value_object(
                    self.tabulation_service.tabulate(position, candidates)
                )
                for position in targets
            ]
            return ElectionResultsOutputDto(
                results=results,
                phase=phase,
                is_live=phase == ElectionPhase.VOTING,
            )
        except Exception as e:
            logger.error(f"Failed to get election results: {e}")
            return ElectionResultsOutputDto(
                results=[], success=False, error_message=str(e)
            )
