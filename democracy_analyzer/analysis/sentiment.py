"""
Lexicon-based sentiment estimation.

A deliberately small polarity score used only as a tie-break boost by the
indicator scorer. Each positive lexicon token adds 0.1, each negative token
subtracts 0.1, and the total is clamped to [-1, 1].
"""

import re

from democracy_analyzer.config import SENTIMENT_STEP

POSITIVE_WORDS = frozenset({
    'good', 'great', 'excellent', 'positive', 'wonderful',
    'best', 'love', 'happy', 'right', 'free',
})

NEGATIVE_WORDS = frozenset({
    'bad', 'terrible', 'awful', 'negative', 'worst',
    'hate', 'sad', 'wrong', 'evil', 'corrupt',
})

_NON_WORD = re.compile(r'\W+')


def estimate_sentiment(text: str) -> float:
    """
    Estimate polarity of text in [-1, 1].

    Args:
        text: Any text; empty text scores 0.

    Returns:
        Clamped polarity score
    """
    if not text:
        return 0.0

    score = 0.0
    for word in _NON_WORD.split(text.lower()):
        if word in POSITIVE_WORDS:
            score += SENTIMENT_STEP
        elif word in NEGATIVE_WORDS:
            score -= SENTIMENT_STEP

    return max(-1.0, min(1.0, score))
