"""
Classifier Training Package

Turns labeled text into a trained 5-class indicator classifier.

Main Components:
- ExampleLabeler: Splits corpus text into sentences and labels them by keyword
- TextVectorizer / VocabularyVectorizer: Fixed-length count vectors
- IndicatorClassifier: Feed-forward network with train/predict and a fallback network
- LocalModelStore / CsvTrainingDataStore: Optional best-effort persistence

Usage:
    from democracy_analyzer.training import ExampleLabeler, IndicatorClassifier

    classifier = IndicatorClassifier()
    classifier.add_training_data(ExampleLabeler().extract_training_data(text))
    classifier.train()
    prediction = classifier.predict("Postpone the election indefinitely.")
"""

from .result_types import EpochLog, LabeledExample, Prediction, TrainingHistory
from .example_labeler import ExampleLabeler, generate_synthetic_data
from .vectorizer import TextVectorizer, VocabularyVectorizer, tokenize
from .storage import CsvTrainingDataStore, LocalModelStore, ModelStore, TrainingDataStore
from .classifier import IndicatorClassifier, ModelState

__all__ = [
    'EpochLog',
    'LabeledExample',
    'Prediction',
    'TrainingHistory',
    'ExampleLabeler',
    'generate_synthetic_data',
    'TextVectorizer',
    'VocabularyVectorizer',
    'tokenize',
    'CsvTrainingDataStore',
    'LocalModelStore',
    'ModelStore',
    'TrainingDataStore',
    'IndicatorClassifier',
    'ModelState',
]
