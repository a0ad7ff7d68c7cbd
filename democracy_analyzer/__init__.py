"""
Democracy Analyzer

Scores text against the four indicators of authoritarian behavior from
"How Democracies Die" and refines that scoring with a small classifier
trained on labeled sentences.

Usage:
    from democracy_analyzer import AnalyzerSession

    session = AnalyzerSession()
    results = session.analyze_text(speech)
"""

from .errors import (
    AnalyzerError,
    ExtractionError,
    InsufficientDataError,
    ModelBuildError,
    TrainingError,
)
from .analysis import INDICATORS, AnalysisResult, Indicator, analyze_text, estimate_sentiment
from .training import IndicatorClassifier, LabeledExample, Prediction
from .session import AnalyzerSession

__version__ = "0.1.0"

__all__ = [
    'AnalyzerError',
    'ExtractionError',
    'InsufficientDataError',
    'ModelBuildError',
    'TrainingError',
    'INDICATORS',
    'AnalysisResult',
    'Indicator',
    'analyze_text',
    'estimate_sentiment',
    'IndicatorClassifier',
    'LabeledExample',
    'Prediction',
    'AnalyzerSession',
]
