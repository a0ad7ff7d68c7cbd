"""
Frequency-based key phrase extraction.

Ranks content words by how often they appear. A small fixed stopword
lexicon stands in for part-of-speech filtering.
"""

import re
from collections import Counter
from dataclasses import dataclass

from democracy_analyzer.config import KEY_PHRASE_DEFAULT_COUNT, KEY_PHRASE_MIN_LENGTH

STOPWORDS = frozenset({
    'about', 'after', 'again', 'also', 'been', 'before', 'being', 'both', 'could',
    'does', 'doing', 'down', 'during', 'each', 'from', 'further', 'have', 'having',
    'here', 'into', 'just', 'more', 'most', 'much', 'only', 'other', 'over', 'same',
    'should', 'some', 'such', 'than', 'that', 'their', 'them', 'then', 'there',
    'these', 'they', 'this', 'those', 'through', 'under', 'until', 'very', 'were',
    'what', 'when', 'where', 'which', 'while', 'will', 'with', 'would', 'your',
})

_WORD = re.compile(r"[a-z][a-z'-]*")


@dataclass(frozen=True)
class KeyPhrase:
    term: str
    frequency: int


def extract_key_phrases(text: str, num_phrases: int = KEY_PHRASE_DEFAULT_COUNT) -> list[KeyPhrase]:
    """
    Return the most frequent content words in text.

    Args:
        text: Text to scan
        num_phrases: Maximum number of phrases to return

    Returns:
        KeyPhrase list, most frequent first (ties keep first-seen order)
    """
    if not text or num_phrases <= 0:
        return []

    counts = Counter(
        word for word in _WORD.findall(text.lower())
        if len(word) >= KEY_PHRASE_MIN_LENGTH and word not in STOPWORDS
    )
    # most_common is stable for equal counts (insertion order)
    return [KeyPhrase(term, freq) for term, freq in counts.most_common(num_phrases)]
