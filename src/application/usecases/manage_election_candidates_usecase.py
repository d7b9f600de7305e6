"""役職・候補者管理のユースケース."""

from uuid import uuid4

from src.application.dtos.election_dto import (
    CandidateOutputItem,
    CreateCandidateInputDto,
    CreateCandidateOutputDto,
    CreatePositionInputDto,
    CreatePositionOutputDto,
    DeleteCandidateInputDto,
    DeletePositionInputDto,
    ListRosterInputDto,
    ListRosterOutputDto,
    PositionOutputItem,
    RosterChangeOutputDto,
    UpdateCandidateInputDto,
)
from src.common.logging import get_logger
from src.domain.entities import Candidate, ElectionPosition
from src.domain.repositories.election_state_repository import (
    ElectionStateRepository,
)
from src.domain.services.election_phase_policy import ElectionPhasePolicy


logger = get_logger(__name__)


class ManageElectionCandidatesUseCase:
    """管理画面の役職・候補者の追加/更新/削除のユースケース.

    投票開始後は名簿を固定するため、変更操作は拒否する。
    得票数はこのユースケースからは変更できない。
    """

    def __init__(
        self,
        election_state_repository: ElectionStateRepository,
        phase_policy: ElectionPhasePolicy | None = None,
    ) -> None:
        self.election_state_repository = election_state_repository
        self.phase_policy = phase_policy or ElectionPhasePolicy()

    async def list_roster(
        self, input_dto: ListRosterInputDto | None = None
    ) -> ListRosterOutputDto:
        """役職と候補者の一覧を取得する."""
        position_id = input_dto.position_id if input_dto else None
        try:
            positions = await self.election_state_repository.get_positions()
            candidates = await self.election_state_repository.get_candidates()
            if position_id is not None:
                candidates = [c for c in candidates if c.position_id == position_id]
            return ListRosterOutputDto(
                positions=[PositionOutputItem.from_entity(p) for p in positions],
                candidates=[CandidateOutputItem.from_entity(c) for c in candidates],
            )
        except Exception as e:
            logger.error(f"Failed to list roster: {e}")
            return ListRosterOutputDto(
                positions=[], candidates=[], success=False, error_message=str(e)
            )

    async def create_position(
        self, input_dto: CreatePositionInputDto
    ) -> CreatePositionOutputDto:
        """役職を追加する."""
        try:
            title = input_dto.title.strip()
            if not title:
                return CreatePositionOutputDto(
                    success=False, error_message="Position title must not be blank"
                )
            if input_dto.max_votes != 1:
                return CreatePositionOutputDto(
                    success=False,
                    error_message="A ballot selects exactly one candidate per position",
                )
            if error := await self._roster_locked_reason():
                return CreatePositionOutputDto(success=False, error_message=error)

            positions = await self.election_state_repository.get_positions()
            position = ElectionPosition(
                title=title,
                description=input_dto.description,
                max_votes=input_dto.max_votes,
                id=f"pos_{uuid4().hex[:8]}",
            )
            positions.append(position)
            await self.election_state_repository.save_positions(positions)
            logger.info("Position created", position_id=position.id)
            return CreatePositionOutputDto(success=True, position_id=position.id)
        except Exception as e:
            logger.error(f"Failed to create position: {e}")
            return CreatePositionOutputDto(success=False, error_message=str(e))

    async def delete_position(
        self, input_dto: DeletePositionInputDto
    ) -> RosterChangeOutputDto:
        """役職を削除する（候補者が紐づいている場合は不可）."""
        try:
            if error := await self._roster_locked_reason():
                return RosterChangeOutputDto(success=False, error_message=error)

            positions = await self.election_state_repository.get_positions()
            if not any(p.id == input_dto.id for p in positions):
                return RosterChangeOutputDto(
                    success=False, error_message=f"Unknown position: {input_dto.id}"
                )

            candidates = await self.election_state_repository.get_candidates()
            if any(c.position_id == input_dto.id for c in candidates):
                return RosterChangeOutputDto(
                    success=False,
                    error_message=(
                        "Cannot delete a position that still has candidates"
                    ),
                )

            await self.election_state_repository.save_positions(
                [p for p in positions if p.id != input_dto.id]
            )
            logger.info("Position deleted", position_id=input_dto.id)
            return RosterChangeOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to delete position: {e}")
            return RosterChangeOutputDto(success=False, error_message=str(e))

    async def create_candidate(
        self, input_dto: CreateCandidateInputDto
    ) -> CreateCandidateOutputDto:
        """候補者を追加する（得票数0）."""
        try:
            name = input_dto.name.strip()
            if not name:
                return CreateCandidateOutputDto(
                    success=False, error_message="Candidate name must not be blank"
                )
            if error := await self._roster_locked_reason():
                return CreateCandidateOutputDto(success=False, error_message=error)

            positions = await self.election_state_repository.get_positions()
            if not any(p.id == input_dto.position_id for p in positions):
                return CreateCandidateOutputDto(
                    success=False,
                    error_message=f"Unknown position: {input_dto.position_id}",
                )

            candidates = await self.election_state_repository.get_candidates()
            candidate = Candidate(
                name=name,
                position_id=input_dto.position_id,
                student_id=input_dto.student_id,
                manifesto=input_dto.manifesto,
                photo=input_dto.photo,
                id=f"cand_{uuid4().hex[:8]}",
            )
            candidates.append(candidate)
            await self.election_state_repository.save_candidates(candidates)
            logger.info(
                "Candidate created",
                candidate_id=candidate.id,
                position_id=candidate.position_id,
            )
            return CreateCandidateOutputDto(success=True, candidate_id=candidate.id)
        except Exception as e:
            logger.error(f"Failed to create candidate: {e}")
            return CreateCandidateOutputDto(success=False, error_message=str(e))

    async def update_candidate(
        self, input_dto: UpdateCandidateInputDto
    ) -> RosterChangeOutputDto:
        """候補者の情報を更新する."""
        try:
            if error := await self._roster_locked_reason():
                return RosterChangeOutputDto(success=False, error_message=error)

            candidates = await self.election_state_repository.get_candidates()
            candidate = next((c for c in candidates if c.id == input_dto.id), None)
            if candidate is None:
                return RosterChangeOutputDto(
                    success=False, error_message=f"Unknown candidate: {input_dto.id}"
                )

            if input_dto.position_id is not None:
                positions = await self.election_state_repository.get_positions()
                if not any(p.id == input_dto.position_id for p in positions):
                    return RosterChangeOutputDto(
                        success=False,
                        error_message=f"Unknown position: {input_dto.position_id}",
                    )
                candidate.position_id = input_dto.position_id
            if input_dto.name is not None:
                if not input_dto.name.strip():
                    return RosterChangeOutputDto(
                        success=False,
                        error_message="Candidate name must not be blank",
                    )
                candidate.name = input_dto.name.strip()
            if input_dto.student_id is not None:
                candidate.student_id = input_dto.student_id
            if input_dto.manifesto is not None:
                candidate.manifesto = input_dto.manifesto
            if input_dto.photo is not None:
                candidate.photo = input_dto.photo

            await self.election_state_repository.save_candidates(candidates)
            return RosterChangeOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to update candidate: {e}")
            return RosterChangeOutputDto(success=False, error_message=str(e))

    async def delete_candidate(
        self, input_dto: DeleteCandidateInputDto
    ) -> RosterChangeOutputDto:
        """候補者を削除する."""
        try:
            if error := await self._roster_locked_reason():
                return RosterChangeOutputDto(success=False, error_message=error)

            candidates = await self.election_state_repository.get_candidates()
            remaining = [c for c in candidates if c.id != input_dto.id]
            if len(remaining) == len(candidates):
                return RosterChangeOutputDto(
                    success=False, error_message=f"Unknown candidate: {input_dto.id}"
                )

            await self.election_state_repository.save_candidates(remaining)
            logger.info("Candidate deleted", candidate_id=input_dto.id)
            return RosterChangeOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to delete candidate: {e}")
            return RosterChangeOutputDto(success=False, error_message=str(e))

    async def _roster_locked_reason(self) -> str | None:
        phase = await self.election_state_repository.get_phase()
        if self.phase_policy.can_edit_roster(phase):
            return None
        return f"Roster cannot be changed during {phase.value}"
