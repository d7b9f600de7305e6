"""Domain entities."""

from src.domain.entities.base import BaseEntity
from src.domain.entities.candidate import Candidate
from src.domain.entities.election_position import ElectionPosition
from src.domain.entities.quiz import Quiz, QuizStatus


__all__ = [
    "BaseEntity",
    "Candidate",
    "ElectionPosition",
    "Quiz",
    "QuizStatus",
]
