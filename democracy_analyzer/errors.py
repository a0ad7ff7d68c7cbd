"""
Exception taxonomy for the Democracy Analyzer.

Scoring and vectorizing never raise. Prediction failures are absorbed
by the classifier. Training failures surface as TrainingError after the
classifier has switched to its fallback network.
"""


class AnalyzerError(Exception):
    """Base class for all analyzer errors."""


class InsufficientDataError(AnalyzerError):
    """Raised when training is requested with too few examples."""

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"Not enough training data. Need at least {required} examples, have {available}."
        )


class ModelBuildError(AnalyzerError):
    """Raised when a classifier architecture cannot be constructed."""


class TrainingError(AnalyzerError):
    """Raised when fitting fails; the classifier is left on its fallback network."""


class ExtractionError(AnalyzerError):
    """Raised when there is no usable text to label."""
