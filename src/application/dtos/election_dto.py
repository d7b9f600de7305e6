"""選挙管理に関するDTO.

このモジュールはフェーズ操作・投票・開票・役職/候補者管理のDTOを定義します。
"""

from dataclasses import dataclass, field

from src.domain.entities import Candidate, ElectionPosition
from src.domain.value_objects.election_phase import ElectionPhase
from src.domain.value_objects.election_result import CandidateTally, PositionResult


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class ResetElectionInputDto:
    """選挙リセットの入力DTO.

    リセットは破壊的操作のため、confirmed=Trueでなければ実行しない。
    """

    confirmed: bool = False


@dataclass
class RegisterVoterInputDto:
    """選挙人登録の入力DTO."""

    voter_id: str


@dataclass
class CastBallotInputDto:
    """投票の入力DTO."""

    voter_id: str
    selections: dict[str, str]  # position_id -> candidate_id


@dataclass
class GetResultsInputDto:
    """開票結果取得の入力DTO（position_id省略時は全役職）."""

    position_id: str | None = None


@dataclass
class CreatePositionInputDto:
    """役職作成の入力DTO."""

    title: str
    description: str = ElectionPosition.DEFAULT_DESCRIPTION
    max_votes: int = 1


@dataclass
class DeletePositionInputDto:
    """役職削除の入力DTO."""

    id: str


@dataclass
class CreateCandidateInputDto:
    """候補者作成の入力DTO."""

    name: str
    position_id: str
    student_id: str = ""
    manifesto: str = ""
    photo: str | None = None


@dataclass
class UpdateCandidateInputDto:
    """候補者更新の入力DTO（Noneの項目は変更しない）."""

    id: str
    name: str | None = None
    position_id: str | None = None
    student_id: str | None = None
    manifesto: str | None = None
    photo: str | None = None


@dataclass
class DeleteCandidateInputDto:
    """候補者削除の入力DTO."""

    id: str


@dataclass
class ListRosterInputDto:
    """役職・候補者一覧の入力DTO（position_id指定時はその役職の候補者のみ）."""

    position_id: str | None = None


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class PhaseTransitionOutputDto:
    """フェーズ操作の出力DTO.

    success=Falseの場合、phaseは変更されていない現在のフェーズ。
    現在のフェーズを読む前に失敗した場合はNone。
    """

    success: bool
    phase: ElectionPhase | None
    previous_phase: ElectionPhase | None = None
    error_message: str | None = None


@dataclass
class ElectionStatusOutputDto:
    """選挙状況の出力DTO."""

    phase: ElectionPhase
    registered_count: int = 0
    voted_count: int = 0
    turnout_percentage: int = 0
    available_actions: list[str] = field(default_factory=list)
    success: bool = True
    error_message: str | None = None


@dataclass
class RegisterVoterOutputDto:
    """選挙人登録の出力DTO."""

    success: bool
    already_registered: bool = False
    error_message: str | None = None


@dataclass
class CastBallotOutputDto:
    """投票の出力DTO."""

    success: bool
    error_message: str | None = None


@dataclass
class CandidateTallyOutputItem:
    """候補者ごとの集計の出力アイテム."""

    candidate_id: str
    candidate_name: str
    votes: int
    percentage: float

    @classmethod
    def from_value_object(cls, tally: CandidateTally) -> "CandidateTallyOutputItem":
        return cls(
            candidate_id=tally.candidate_id,
            candidate_name=tally.candidate_name,
            votes=tally.votes,
            percentage=tally.percentage,
        )


@dataclass
class PositionResultOutputItem:
    """役職ごとの開票結果の出力アイテム."""

    position_id: str
    position_title: str
    total_votes: int
    tallies: list[CandidateTallyOutputItem]
    winner: CandidateTallyOutputItem | None = None

    @classmethod
    def from_value_object(cls, result: PositionResult) -> "PositionResultOutputItem":
        """値オブジェクトから出力アイテムを生成する."""
        winner = result.winner
        return cls(
            position_id=result.position_id,
            position_title=result.position_title,
            total_votes=result.total_votes,
            tallies=[
                CandidateTallyOutputItem.from_value_object(t) for t in result.tallies
            ],
            winner=(
                CandidateTallyOutputItem.from_value_object(winner) if winner else None
            ),
        )


@dataclass
class ElectionResultsOutputDto:
    """開票結果取得の出力DTO."""

    results: list[PositionResultOutputItem]
    phase: ElectionPhase | None = None
    is_live: bool = False
    success: bool = True
    error_message: str | None = None


@dataclass
class PositionOutputItem:
    """役職の出力アイテム."""

    id: str
    title: str
    description: str
    max_votes: int

    @classmethod
    def from_entity(cls, entity: ElectionPosition) -> "PositionOutputItem":
        return cls(
            id=entity.id or "",
            title=entity.title,
            description=entity.description,
            max_votes=entity.max_votes,
        )


@dataclass
class CandidateOutputItem:
    """候補者の出力アイテム."""

    id: str
    name: str
    position_id: str
    student_id: str
    manifesto: str
    votes: int

    @classmethod
    def from_entity(cls, entity: Candidate) -> "CandidateOutputItem":
        return cls(
            id=entity.id or "",
            name=entity.name,
            position_id=entity.position_id,
            student_id=entity.student_id,
            manifesto=entity.manifesto,
            votes=entity.votes,
        )


@dataclass
class ListRosterOutputDto:
    """役職・候補者一覧の出力DTO."""

    positions: list[PositionOutputItem]
    candidates: list[CandidateOutputItem]
    success: bool = True
    error_message: str | None = None


@dataclass
class CreatePositionOutputDto:
    """役職作成の出力DTO."""

    success: bool
    position_id: str | None = None
    error_message: str | None = None


@dataclass
class CreateCandidateOutputDto:
    """候補者作成の出力DTO."""

    success: bool
    candidate_id: str | None = None
    error_message: str | None = None


@dataclass
class RosterChangeOutputDto:
    """役職・候補者の更新/削除の出力DTO."""

    success: bool
    error_message: str | None = None
