"""選挙フェーズ遷移のドメインサービス.

遷移表で許可されたフェーズからのみ操作を受け付ける:

    IDLE ──start_registration──▶ REGISTRATION ──end_registration──▶ REGISTRATION_CLOSED
                                     │  ▲                                  │
                                     │  └──────start_registration──────────┤
                                     └────────start_voting──────▶ VOTING ◀─┘
                                                                    │
                                                               end_voting
                                                                    ▼
                                                                  ENDED
    (any) ──reset──▶ IDLE
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from src.domain.value_objects.election_phase import ElectionPhase


class ElectionAction(str, Enum):
    """管理者が実行するフェーズ操作."""

    START_REGISTRATION = "start_registration"
    END_REGISTRATION = "end_registration"
    START_VOTING = "start_voting"
    END_VOTING = "end_voting"
    RESET = "reset"


@dataclass(frozen=True)
class PhaseTransition:
    """遷移判定の結果."""

    action: ElectionAction
    from_phase: ElectionPhase
    to_phase: ElectionPhase
    allowed: bool
    reason: str | None = None


class ElectionPhasePolicy:
    """フェーズ遷移表と、フェーズごとに可能な操作を判定するドメインサービス."""

    TRANSITIONS: ClassVar[
        dict[ElectionAction, tuple[frozenset[ElectionPhase], ElectionPhase]]
    ] = {
        ElectionAction.START_REGISTRATION: (
            frozenset({ElectionPhase.IDLE, ElectionPhase.REGISTRATION_CLOSED}),
            ElectionPhase.REGISTRATION,
        ),
        ElectionAction.END_REGISTRATION: (
            frozenset({ElectionPhase.REGISTRATION}),
            ElectionPhase.REGISTRATION_CLOSED,
        ),
        ElectionAction.START_VOTING: (
            frozenset({ElectionPhase.REGISTRATION, ElectionPhase.REGISTRATION_CLOSED}),
            ElectionPhase.VOTING,
        ),
        ElectionAction.END_VOTING: (
            frozenset({ElectionPhase.VOTING}),
            ElectionPhase.ENDED,
        ),
        ElectionAction.RESET: (
            frozenset(ElectionPhase),
            ElectionPhase.IDLE,
        ),
    }

    # 投票開始以降は候補者・役職の構成を固定する
    _ROSTER_FROZEN: ClassVar[frozenset[ElectionPhase]] = frozenset(
        {ElectionPhase.VOTING, ElectionPhase.ENDED}
    )
    _RESULTS_VISIBLE: ClassVar[frozenset[ElectionPhase]] = frozenset(
        {ElectionPhase.VOTING, ElectionPhase.ENDED}
    )

    def evaluate(
        self, current: ElectionPhase, action: ElectionAction
    ) -> PhaseTransition:
        """現在フェーズで操作が可能かを判定する.

        Args:
            current: 現在のフェーズ
            action: 実行しようとしている操作

        Returns:
            PhaseTransition。不許可の場合 ``to_phase`` は現在フェーズのまま。
        """
        sources, target = self.TRANSITIONS[action]
        if current in sources:
            return PhaseTransition(
                action=action, from_phase=current, to_phase=target, allowed=True
            )
        allowed_from = ", ".join(sorted(p.value for p in sources))
        return PhaseTransition(
            action=action,
            from_phase=current,
            to_phase=current,
            allowed=False,
            reason=(
                f"{action.value} is not allowed during {current.value} "
                f"(allowed from: {allowed_from})"
            ),
        )

    def can_transition(self, current: ElectionPhase, action: ElectionAction) -> bool:
        return self.evaluate(current, action).allowed

    def available_actions(self, current: ElectionPhase) -> list[ElectionAction]:
        """現在フェーズで実行可能な操作の一覧（RESETを含む）."""
        return [a for a in ElectionAction if self.can_transition(current, a)]

    def can_register(self, phase: ElectionPhase) -> bool:
        return phase == ElectionPhase.REGISTRATION

    def can_vote(self, phase: ElectionPhase) -> bool:
        return phase == ElectionPhase.VOTING

    def can_edit_roster(self, phase: ElectionPhase) -> bool:
        return phase not in self._ROSTER_FROZEN

    def results_visible(self, phase: ElectionPhase) -> bool:
        return phase in self._RESULTS_VISIBLE
