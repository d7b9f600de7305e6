"""クイズ採点のドメインサービス."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.domain.entities.quiz import Quiz
from src.domain.utils.rounding import percentage
from src.domain.value_objects.quiz_question import QuestionType, QuizQuestion


@dataclass(frozen=True)
class QuizScore:
    """採点結果."""

    correct_count: int
    total_questions: int
    score: int
    correct_question_ids: tuple[str, ...]


class QuizScoringService:
    """回答を設問の種類ごとの一致判定で採点する.

    採点はクイズと回答だけから決まる純粋関数で、同じ回答を何度採点しても
    結果は変わらない。
    """

    def is_correct(self, question: QuizQuestion, answer: Any) -> bool:
        """1設問分の正誤を判定する."""
        if question.type == QuestionType.MCQ:
            # boolはintのサブクラスなので、True/Falseを選択肢番号として扱わない
            return (
                isinstance(answer, int)
                and not isinstance(answer, bool)
                and answer == question.correct_answer
            )
        if question.type == QuestionType.TRUE_FALSE:
            return isinstance(answer, bool) and answer is question.correct_answer
        if question.type == QuestionType.SHORT_ANSWER:
            if answer is None:
                return False
            return (
                str(answer).strip().lower()
                == str(question.correct_answer).strip().lower()
            )
        if not isinstance(answer, Mapping):
            return False
        return all(
            answer.get(pair.left) == pair.right for pair in question.matching_pairs
        )

    def score(self, quiz: Quiz, answers: Mapping[str, Any]) -> QuizScore:
        """クイズ全体を採点する.

        Args:
            quiz: 対象クイズ
            answers: 設問ID → 回答

        Returns:
            QuizScore。scoreは正答率(%)を四捨五入した整数。設問0件なら0。
        """
        correct_ids = tuple(
            q.id for q in quiz.questions if self.is_correct(q, answers.get(q.id))
        )
        total = len(quiz.questions)
        return QuizScore(
            correct_count=len(correct_ids),
            total_questions=total,
            score=int(percentage(len(correct_ids), total)),
            correct_question_ids=correct_ids,
        )
