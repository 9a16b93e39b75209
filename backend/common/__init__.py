from .merge import deep_merge
from .sentiment import Sentiment

__all__ = [
    "deep_merge",
    "Sentiment",
]
