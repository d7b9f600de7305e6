"""Candidate entity."""

from src.domain.entities.base import BaseEntity


class Candidate(BaseEntity):
    """役職に立候補した学生.

    ``votes`` は開票処理（投票1件につき+1）とリセット（0に戻す）でのみ変化する。
    """

    def __init__(
        self,
        name: str,
        position_id: str,
        student_id: str = "",
        manifesto: str = "",
        photo: str | None = None,
        votes: int = 0,
        id: str | None = None,
    ) -> None:
        super().__init__(id)
        if votes < 0:
            raise ValueError("votes must not be negative")
        self.name = name
        self.position_id = position_id
        self.student_id = student_id
        self.manifesto = manifesto
        self.photo = photo
        self.votes = votes

    def add_vote(self) -> None:
        """得票を1増やす."""
        self.votes += 1

    def reset_votes(self) -> None:
        """得票を0に戻す."""
        self.votes = 0

    def __str__(self) -> str:
        return f"Candidate(name={self.name}, position={self.position_id})"
