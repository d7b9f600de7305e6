"""クイズ設問の値オブジェクト."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class QuestionType(str, Enum):
    """設問の種類."""

    MCQ = "MCQ"
    TRUE_FALSE = "TrueFalse"
    SHORT_ANSWER = "ShortAnswer"
    MATCHING = "Matching"


@dataclass(frozen=True)
class MatchingPair:
    """組み合わせ問題の正解ペア（左の項目→右の値）."""

    left: str
    right: str


@dataclass(frozen=True)
class QuizQuestion:
    """クイズの1設問.

    正解の表現は種類ごとに異なる:
    - MCQ: 選択肢のインデックス(int, 0始まり)
    - TrueFalse: bool
    - ShortAnswer: 文字列
    - Matching: ``matching_pairs`` が正解（``correct_answer`` は使わない）
    """

    id: str
    text: str
    type: QuestionType
    correct_answer: int | bool | str | None = None
    options: tuple[str, ...] = ()
    explanation: str | None = None
    matching_pairs: tuple[MatchingPair, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValueError("Question text must not be empty")

        object.__setattr__(self, "type", QuestionType(self.type))
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "matching_pairs", tuple(self.matching_pairs))

        if self.type == QuestionType.MCQ:
            self._validate_mcq()
        elif self.type == QuestionType.TRUE_FALSE:
            if not isinstance(self.correct_answer, bool):
                raise ValueError("TrueFalse questions need a boolean answer")
        elif self.type == QuestionType.SHORT_ANSWER:
            if not isinstance(self.correct_answer, str):
                raise ValueError("ShortAnswer questions need a string answer")
        elif not self.matching_pairs:
            raise ValueError("Matching questions need at least one pair")

    def _validate_mcq(self) -> None:
        answer = self.correct_answer
        if isinstance(answer, bool) or not isinstance(answer, int):
            raise ValueError("MCQ questions need an integer option index")
        if len(self.options) < 2:
            raise ValueError("MCQ questions need at least two options")
        if not 0 <= answer < len(self.options):
            raise ValueError(
                f"MCQ answer index {answer} is out of range for "
                f"{len(self.options)} options"
            )

    @classmethod
    def multiple_choice(
        cls,
        id: str,
        text: str,
        options: Iterable[str],
        correct_index: int,
        explanation: str | None = None,
    ) -> "QuizQuestion":
        return cls(
            id=id,
            text=text,
            type=QuestionType.MCQ,
            correct_answer=correct_index,
            options=tuple(options),
            explanation=explanation,
        )

    @classmethod
    def true_false(
        cls, id: str, text: str, answer: bool, explanation: str | None = None
    ) -> "QuizQuestion":
        return cls(
            id=id,
            text=text,
            type=QuestionType.TRUE_FALSE,
            correct_answer=answer,
            explanation=explanation,
        )

    @classmethod
    def short_answer(
        cls, id: str, text: str, answer: str, explanation: str | None = None
    ) -> "QuizQuestion":
        return cls(
            id=id,
            text=text,
            type=QuestionType.SHORT_ANSWER,
            correct_answer=answer,
            explanation=explanation,
        )

    @classmethod
    def matching(
        cls,
        id: str,
        text: str,
        pairs: Iterable[tuple[str, str]],
        explanation: str | None = None,
    ) -> "QuizQuestion":
        return cls(
            id=id,
            text=text,
            type=QuestionType.MATCHING,
            matching_pairs=tuple(MatchingPair(left, right) for left, right in pairs),
            explanation=explanation,
        )
