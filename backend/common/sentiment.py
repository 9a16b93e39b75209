"""
Sentiment Labels

Shared user-facing tone labels attached to recommendation blocks.
Sentiment only ever escalates within a single advisory pass.
"""

from enum import Enum


class Sentiment(str, Enum):
    """Tone of a recommendation block, ordered from calm to alarming."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    CAUTIONARY = "cautionary"
    WARNING = "warning"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def escalate(self, other: "Sentiment") -> "Sentiment":
        """Return whichever of the two sentiments is more severe."""
        other = Sentiment(other)
        return other if other.rank > self.rank else self


_ORDER = [
    Sentiment.POSITIVE,
    Sentiment.NEUTRAL,
    Sentiment.CAUTIONARY,
    Sentiment.WARNING,
]
