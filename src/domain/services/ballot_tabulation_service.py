"""投票の検証・開票集計のドメインサービス."""

from collections.abc import Mapping, Sequence

from src.domain.entities.candidate import Candidate
from src.domain.entities.election_position import ElectionPosition
from src.domain.utils.rounding import percentage
from src.domain.value_objects.election_result import (
    CandidateTally,
    PositionResult,
    TurnoutSummary,
)


class BallotTabulationService:
    """投票用紙の検証、得票の加算、役職ごとの結果集計を行う.

    同票の順位は候補者の登録順（リスト内の順序）で決まる。
    ``sorted`` が安定ソートであることに依存している。
    """

    def open_positions(
        self,
        positions: Sequence[ElectionPosition],
        candidates: Sequence[Candidate],
    ) -> list[ElectionPosition]:
        """候補者が1人以上いる役職（投票対象）を役職の並び順で返す."""
        contested = {c.position_id for c in candidates}
        return [p for p in positions if p.id in contested]

    def validate_ballot(
        self,
        selections: Mapping[str, str],
        positions: Sequence[ElectionPosition],
        candidates: Sequence[Candidate],
    ) -> str | None:
        """投票内容を検証する.

        全ての投票対象の役職にちょうど1人ずつ選択されている必要がある。

        Args:
            selections: 役職ID → 候補者ID
            positions: 全役職
            candidates: 全候補者

        Returns:
            問題があればその理由、なければNone
        """
        open_ids = {p.id for p in self.open_positions(positions, candidates)}
        if not open_ids:
            return "No positions are open for voting"

        selected_ids = set(selections)
        missing = open_ids - selected_ids
        if missing:
            return f"Incomplete ballot: no selection for {', '.join(sorted(missing))}"
        unknown = selected_ids - open_ids
        if unknown:
            return f"Ballot includes unknown positions: {', '.join(sorted(unknown))}"

        by_id = {c.id: c for c in candidates}
        for position_id, candidate_id in selections.items():
            candidate = by_id.get(candidate_id)
            if candidate is None:
                return f"Unknown candidate: {candidate_id}"
            if candidate.position_id != position_id:
                return (
                    f"Candidate {candidate_id} is not standing for position "
                    f"{position_id}"
                )
        return None

    def apply_ballot(
        self, selections: Mapping[str, str], candidates: Sequence[Candidate]
    ) -> None:
        """選択された候補者の得票をそれぞれ1増やす（検証済みであること）."""
        chosen = set(selections.values())
        for candidate in candidates:
            if candidate.id in chosen:
                candidate.add_vote()

    def tabulate(
        self, position: ElectionPosition, candidates: Sequence[Candidate]
    ) -> PositionResult:
        """役職1つ分の開票結果を作成する."""
        standing = [c for c in candidates if c.position_id == position.id]
        total = sum(c.votes for c in standing)
        tallies = [
            CandidateTally(
                candidate_id=c.id or "",
                candidate_name=c.name,
                votes=c.votes,
                percentage=percentage(c.votes, total, digits=1),
            )
            for c in standing
        ]
        tallies = sorted(tallies, key=lambda t: t.votes, reverse=True)
        return PositionResult(
            position_id=position.id or "",
            position_title=position.title,
            total_votes=total,
            tallies=tuple(tallies),
        )

    def turnout(self, registered_count: int, voted_count: int) -> TurnoutSummary:
        return TurnoutSummary(
            registered_count=registered_count,
            voted_count=voted_count,
            turnout_percentage=int(percentage(voted_count, registered_count)),
        )
