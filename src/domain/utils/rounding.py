"""四捨五入ユーティリティ.

組み込みの ``round`` は偶数丸め（0.5→0, 2.5→2）になるため、
パーセンテージ表示・得点計算では小数を文字列経由でDecimalに変換して四捨五入する。
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """``value`` を小数点以下 ``digits`` 桁で四捨五入する."""
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int, digits: int = 0) -> float:
    """``part / whole * 100`` を四捨五入した値。``whole`` が0なら0."""
    if whole <= 0:
        return 0.0
    return round_half_up(part / whole * 100, digits)
