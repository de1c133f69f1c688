"""Count-based betting recommendation."""

from enum import Enum

from shoecount.common.card import CardConfig


class Recommendation(Enum):
    """Suggested side for the next round."""

    PLAYER = "PLAYER"
    BANKER = "BANKER"
    NEUTRAL = "NEUTRAL"

    @property
    def label(self) -> str:
        """Short advice text for display."""
        if self is Recommendation.NEUTRAL:
            return "WAIT"
        return f"BET {self.value}"


def recommend(
    true_count: float, player_threshold: float = 1.5, banker_threshold: float = -1.5
) -> Recommendation:
    """
    Pick a side from the true count.

    Both thresholds are inclusive. There is no hysteresis: the result
    depends on the true count alone.

    Args:
        true_count: Current true count
        player_threshold: Count at or above which Player is favoured
        banker_threshold: Count at or below which Banker is favoured

    Returns:
        The recommended side, or NEUTRAL to wait
    """
    if true_count >= player_threshold:
        return Recommendation.PLAYER
    if true_count <= banker_threshold:
        return Recommendation.BANKER
    return Recommendation.NEUTRAL


def favored_side(config: CardConfig) -> Recommendation:
    """Which side a card of this weight pushes the count towards."""
    if config.count_value > 0:
        return Recommendation.PLAYER
    if config.count_value < 0:
        return Recommendation.BANKER
    return Recommendation.NEUTRAL
