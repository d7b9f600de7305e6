"""開票結果の値オブジェクト."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateTally:
    """候補者1人分の集計行."""

    candidate_id: str
    candidate_name: str
    votes: int
    percentage: float


@dataclass(frozen=True)
class PositionResult:
    """役職ごとの開票結果.

    ``tallies`` は得票数の降順。同数の場合は候補者の登録順を保つ。
    """

    position_id: str
    position_title: str
    total_votes: int
    tallies: tuple[CandidateTally, ...]

    @property
    def winner(self) -> CandidateTally | None:
        """先頭の候補者。1票も入っていなければNone."""
        if not self.tallies or self.tallies[0].votes == 0:
            return None
        return self.tallies[0]


@dataclass(frozen=True)
class TurnoutSummary:
    """投票率の集計."""

    registered_count: int
    voted_count: int
    turnout_percentage: int
