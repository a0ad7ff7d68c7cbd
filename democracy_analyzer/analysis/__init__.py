"""
Indicator Analysis Package

Scores text against the four fixed authoritarian-language indicators.

Main Components:
- INDICATORS: The four immutable indicator definitions
- estimate_sentiment: Lexicon-based polarity used as a scoring boost
- analyze_text: Per-indicator keyword matching, context and scoring
- overall_risk / risk_level: Mean indicator score and its Low-Extreme label
- extract_key_phrases: Frequency-ranked content words
- extract_entities: Lexicon-based people, places, organizations and nouns

Usage:
    from democracy_analyzer.analysis import analyze_text

    for result in analyze_text(speech):
        print(result.indicator.name, result.score, result.matches)
"""

from .indicators import INDICATORS, Indicator, get_indicator
from .sentiment import estimate_sentiment
from .scorer import AnalysisResult, MatchDetail, analyze_text, overall_risk, risk_level, top_indicator
from .key_phrases import KeyPhrase, extract_key_phrases
from .entities import Entities, extract_entities

__all__ = [
    'INDICATORS',
    'Indicator',
    'get_indicator',
    'estimate_sentiment',
    'AnalysisResult',
    'MatchDetail',
    'analyze_text',
    'top_indicator',
    'overall_risk',
    'risk_level',
    'KeyPhrase',
    'extract_key_phrases',
    'Entities',
    'extract_entities',
]
