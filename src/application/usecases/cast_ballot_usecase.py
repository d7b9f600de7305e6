"""選挙人登録・投票のユースケース."""

from src.application.dtos.election_dto import (
    CastBallotInputDto,
    CastBallotOutputDto,
    RegisterVoterInputDto,
    RegisterVoterOutputDto,
)
from src.common.logging import get_logger
from src.domain.repositories.election_state_repository import (
    ElectionStateRepository,
)
from src.domain.services.ballot_tabulation_service import BallotTabulationService
from src.domain.services.election_phase_policy import ElectionPhasePolicy


logger = get_logger(__name__)


class CastBallotUseCase:
    """選挙人の登録と、1人1回の投票を扱うユースケース."""

    def __init__(
        self,
        election_state_repository: ElectionStateRepository,
        phase_policy: ElectionPhasePolicy | None = None,
        tabulation_service: BallotTabulationService | None = None,
    ) -> None:
        self.election_state_repository = election_state_repository
        self.phase_policy = phase_policy or ElectionPhasePolicy()
        self.tabulation_service = tabulation_service or BallotTabulationService()

    async def register_voter(
        self, input_dto: RegisterVoterInputDto
    ) -> RegisterVoterOutputDto:
        """選挙人名簿に登録する（登録期間中のみ、重複登録は成功扱い）."""
        try:
            voter_id = input_dto.voter_id.strip()
            if not voter_id:
                return RegisterVoterOutputDto(
                    success=False, error_message="Voter id must not be blank"
                )

            phase = await self.election_state_repository.get_phase()
            if not self.phase_policy.can_register(phase):
                return RegisterVoterOutputDto(
                    success=False,
                    error_message=f"Registration is not open ({phase.value})",
                )

            voters = await self.election_state_repository.get_registered_voters()
            if voter_id in voters:
                return RegisterVoterOutputDto(success=True, already_registered=True)

            voters.append(voter_id)
            await self.election_state_repository.save_registered_voters(voters)
            logger.info("Voter registered", registered_count=len(voters))
            return RegisterVoterOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to register voter: {e}")
            return RegisterVoterOutputDto(success=False, error_message=str(e))

    async def cast_ballot(self, input_dto: CastBallotInputDto) -> CastBallotOutputDto:
        """投票する.

        全ての投票対象の役職に1人ずつ選択した投票用紙のみ受け付ける。
        得票数を保存した後に投票済み集合へ追加する（キーをまたぐ
        トランザクションはない）。
        """
        try:
            voter_id = input_dto.voter_id.strip()
            phase = await self.election_state_repository.get_phase()
            if not self.phase_policy.can_vote(phase):
                return CastBallotOutputDto(
                    success=False,
                    error_message=f"Voting is not open ({phase.value})",
                )

            registered = await self.election_state_repository.get_registered_voters()
            if voter_id not in registered:
                return CastBallotOutputDto(
                    success=False, error_message="Voter is not registered"
                )

            voted = await self.election_state_repository.get_voted_voters()
            if voter_id in voted:
                return CastBallotOutputDto(
                    success=False, error_message="Voter has already voted"
                )

            positions = await self.election_state_repository.get_positions()
            candidates = await self.election_state_repository.get_candidates()
            reason = self.tabulation_service.validate_ballot(
                input_dto.selections, positions, candidates
            )
            if reason:
                return CastBallotOutputDto(success=False, error_message=reason)

            self.tabulation_service.apply_ballot(input_dto.selections, candidates)
            await self.election_state_repository.save_candidates(candidates)
            voted.append(voter_id)
            await self.election_state_repository.save_voted_voters(voted)

            logger.info(
                "Ballot cast",
                positions=len(input_dto.selections),
                voted_count=len(voted),
            )
            return CastBallotOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to cast ballot: {e}")
            return CastBallotOutputDto(success=False, error_message=str(e))
