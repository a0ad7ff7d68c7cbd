"""
Indicator Scorer

Scores text against each of the four authoritarian-language indicators.

For every keyword of every indicator, a case-insensitive, word-boundary
search is run over the text ("force" does not match inside "enforced").
Each occurrence is recorded with up to CONTEXT_WINDOW characters of
surrounding text; distinct matched strings are counted once.

Scoring:
    score = min(10, unique_matches * 2)
    +1 (still capped at 10) when there are matches and sentiment < -0.2

Indicators are scored independently, so a text can score high on
several at once. The scorer never raises: empty or non-string input
produces four zero-score results.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

from democracy_analyzer.analysis.indicators import INDICATORS, Indicator
from democracy_analyzer.analysis.sentiment import estimate_sentiment
from democracy_analyzer.config import (
    CONTEXT_WINDOW,
    MAX_SCORE,
    NEGATIVE_SENTIMENT_BOOST,
    NEGATIVE_SENTIMENT_THRESHOLD,
    POINTS_PER_MATCH,
    RISK_LEVEL_MAX,
    RISK_LEVELS,
)


@dataclass(frozen=True)
class MatchDetail:
    """A single keyword occurrence with the text around it."""
    original: str
    context: str


@dataclass
class AnalysisResult:
    """
    Scoring outcome for one indicator.

    Attributes:
        indicator: The indicator that was scored
        score: 0-10
        matches: Distinct matched strings, first spelling kept
        match_details: Every occurrence with context, deduplicated by (original, context)
    """
    indicator: Indicator
    score: int = 0
    matches: list[str] = field(default_factory=list)
    match_details: list[MatchDetail] = field(default_factory=list)


@lru_cache(maxsize=None)
def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf'\b{re.escape(keyword)}\b', re.IGNORECASE)


def _score_indicator(indicator: Indicator, text: str, negative_tone: bool) -> AnalysisResult:
    matches: list[str] = []
    seen_matches: set[str] = set()
    details: list[MatchDetail] = []
    seen_details: set[MatchDetail] = set()

    for keyword in indicator.keywords:
        for match in _keyword_pattern(keyword).finditer(text):
            original = match.group(0)
            folded = original.lower()
            if folded not in seen_matches:
                seen_matches.add(folded)
                matches.append(original)

            start = max(0, match.start() - CONTEXT_WINDOW)
            end = min(len(text), match.end() + CONTEXT_WINDOW)
            detail = MatchDetail(original=original, context=text[start:end])
            if detail not in seen_details:
                seen_details.add(detail)
                details.append(detail)

    score = min(MAX_SCORE, len(matches) * POINTS_PER_MATCH)
    if matches and negative_tone:
        score = min(MAX_SCORE, score + NEGATIVE_SENTIMENT_BOOST)

    return AnalysisResult(
        indicator=indicator,
        score=score,
        matches=matches,
        match_details=details,
    )


def analyze_text(text: str, indicators: tuple[Indicator, ...] = INDICATORS) -> list[AnalysisResult]:
    """
    Score text against every indicator.

    Args:
        text: Free-form text
        indicators: Indicators to score, defaults to the four fixed ones

    Returns:
        One AnalysisResult per indicator, in indicator order
    """
    if not isinstance(text, str) or not text.strip():
        return [AnalysisResult(indicator=indicator) for indicator in indicators]

    negative_tone = estimate_sentiment(text) < NEGATIVE_SENTIMENT_THRESHOLD
    return [_score_indicator(indicator, text, negative_tone) for indicator in indicators]


def top_indicator(results: list[AnalysisResult], threshold: int = 3) -> int:
    """
    Pick the dominant indicator from a set of results.

    Args:
        results: Output of analyze_text
        threshold: The best score must exceed this to count

    Returns:
        Id of the highest-scoring indicator (lowest id on ties), or 0
    """
    if not results:
        return 0
    best = max(results, key=lambda r: (r.score, -r.indicator.id))
    return best.indicator.id if best.score > threshold else 0


def overall_risk(results: list[AnalysisResult]) -> float:
    """Mean indicator score, 0.0 for no results."""
    if not results:
        return 0.0
    return sum(result.score for result in results) / len(results)


def risk_level(score: float) -> str:
    """
    Map an overall risk score to a label.

    Returns:
        'Low' below 2, 'Moderate' below 5, 'High' below 8, else 'Extreme'
    """
    for upper_bound, label in RISK_LEVELS:
        if score < upper_bound:
            return label
    return RISK_LEVEL_MAX
