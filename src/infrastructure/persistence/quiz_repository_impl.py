"""Quiz repository implementation backed by a key/value state store."""

import logging

from datetime import datetime
from typing import Any

from src.domain.entities.quiz import Quiz, QuizStatus
from src.domain.repositories.quiz_repository import QuizRepository
from src.domain.repositories.state_store import IStateStore
from src.domain.value_objects.quiz_question import (
    MatchingPair,
    QuestionType,
    QuizQuestion,
)
from src.infrastructure.exceptions import SerializationError


logger = logging.getLogger(__name__)


class QuizRepositoryImpl(QuizRepository):
    """全レベルのクイズを1つのキー（``{prefix}lms_quizzes``）に保存するリポジトリ.

    値はレベルID → クイズのJSONオブジェクト。
    """

    def __init__(self, store: IStateStore, key_prefix: str = "baobab_"):
        self.store = store
        self.storage_key = f"{key_prefix}lms_quizzes"

    async def _load_raw(self) -> dict[str, Any]:
        return await self.store.get(self.storage_key) or {}

    async def get_by_level(self, level_id: str) -> Quiz | None:
        raw = await self._load_raw()
        data = raw.get(level_id)
        if data is None:
            return None
        return self._dict_to_entity(data)

    async def get_all(self) -> dict[str, Quiz]:
        raw = await self._load_raw()
        return {level_id: self._dict_to_entity(data) for level_id, data in raw.items()}

    async def save(self, level_id: str, quiz: Quiz) -> Quiz:
        raw = await self._load_raw()
        raw[level_id] = self._to_dict(quiz)
        await self.store.set(self.storage_key, raw)
        return quiz

    async def save_many(self, quizzes: dict[str, Quiz]) -> None:
        if not quizzes:
            return
        raw = await self._load_raw()
        for level_id, quiz in quizzes.items():
            raw[level_id] = self._to_dict(quiz)
        await self.store.set(self.storage_key, raw)

    async def delete(self, level_id: str) -> bool:
        raw = await self._load_raw()
        if level_id not in raw:
            return False
        del raw[level_id]
        await self.store.set(self.storage_key, raw)
        return True

    # --- conversions ---

    def _to_dict(self, quiz: Quiz) -> dict[str, Any]:
        return {
            "id": quiz.id,
            "title": quiz.title,
            "durationMinutes": quiz.duration_minutes,
            "status": quiz.status.value,
            "scheduledDate": quiz.scheduled_date,
            "startedAt": quiz.started_at.isoformat() if quiz.started_at else None,
            "questions": [self._question_to_dict(q) for q in quiz.questions],
        }

    def _question_to_dict(self, question: QuizQuestion) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": question.id,
            "text": question.text,
            "type": question.type.value,
            "correctAnswer": question.correct_answer,
        }
        if question.options:
            data["options"] = list(question.options)
        if question.explanation:
            data["explanation"] = question.explanation
        if question.matching_pairs:
            data["matchingPairs"] = [
                {"left": p.left, "right": p.right} for p in question.matching_pairs
            ]
        return data

    def _dict_to_entity(self, data: dict[str, Any]) -> Quiz:
        try:
            started_at = data.get("startedAt")
            return Quiz(
                id=data.get("id"),
                title=data["title"],
                duration_minutes=int(
                    data.get("durationMinutes", Quiz.DEFAULT_DURATION_MINUTES)
                ),
                status=QuizStatus(data.get("status", QuizStatus.DRAFT.value)),
                scheduled_date=data.get("scheduledDate"),
                started_at=datetime.fromisoformat(started_at) if started_at else None,
                questions=[
                    self.question_from_dict(q) for q in data.get("questions", [])
                ],
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed quiz in {self.storage_key}: {e}")
            raise SerializationError(
                "Malformed quiz in store", {"key": self.storage_key, "error": str(e)}
            ) from e

    @staticmethod
    def question_from_dict(data: dict[str, Any]) -> QuizQuestion:
        """保存形式（camelCase）の辞書から設問を復元する."""
        return QuizQuestion(
            id=data["id"],
            text=data["text"],
            type=QuestionType(data["type"]),
            correct_answer=data.get("correctAnswer"),
            options=tuple(data.get("options") or ()),
            explanation=data.get("explanation"),
            matching_pairs=tuple(
                MatchingPair(left=p["left"], right=p["right"])
                for p in data.get("matchingPairs") or ()
            ),
        )
