"""選挙フェーズの値オブジェクト."""

from enum import Enum


class ElectionPhase(str, Enum):
    """選挙のライフサイクル段階.

    プロセス全体で1つだけ存在し、状態ストアに永続化される。
    """

    IDLE = "IDLE"
    REGISTRATION = "REGISTRATION"
    REGISTRATION_CLOSED = "REGISTRATION_CLOSED"
    VOTING = "VOTING"
    ENDED = "ENDED"

    @classmethod
    def parse(cls, value: str | None) -> "ElectionPhase":
        """保存値からフェーズを復元する。不明な値はIDLEとして扱う."""
        if value is None:
            return cls.IDLE
        try:
            return cls(value)
        except ValueError:
            return cls.IDLE

    @property
    def label(self) -> str:
        """表示用ラベル（例: "REGISTRATION CLOSED"）."""
        return self.value.replace("_", " ")
