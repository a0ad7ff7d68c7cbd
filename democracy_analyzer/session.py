"""
Analyzer Session

An explicit context object holding one classifier, one labeler and the
optional stores for a single analysis session. Create it once and pass it
to whatever needs the public operations; nothing here is global.

Public operations:
- analyze_text(text) -> list[AnalysisResult]       (total, synchronous)
- extract_training_data(text) -> list[LabeledExample]  (async, chunked)
- add_training_data(examples) -> int
- train(epochs, batch_size) -> TrainingHistory     (async, yields per epoch)
- predict(text) -> Prediction                      (async, total)
- get_training_data_size() -> int
- summarize_text, extract_key_phrases, extract_entities  (total, synchronous)

Training and prediction share one asyncio.Lock, so a predict issued while
training is in flight waits for the run to finish.

Usage:
    session = AnalyzerSession.with_local_storage(data_dir)
    examples = await session.extract_training_data(chapter_text)
    session.add_training_data(examples)
    await session.train()
    prediction = await session.predict("Lock them up!")
"""

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from democracy_analyzer.analysis.entities import Entities, extract_entities
from democracy_analyzer.analysis.key_phrases import KeyPhrase, extract_key_phrases
from democracy_analyzer.analysis.scorer import AnalysisResult, analyze_text
from democracy_analyzer.config import DEFAULT_BATCH_SIZE, DEFAULT_EPOCHS, KEY_PHRASE_DEFAULT_COUNT
from democracy_analyzer.logging_config import debug_log
from democracy_analyzer.training.classifier import IndicatorClassifier
from democracy_analyzer.training.example_labeler import ExampleLabeler
from democracy_analyzer.training.result_types import LabeledExample, Prediction, TrainingHistory
from democracy_analyzer.training.storage import (
    CsvTrainingDataStore,
    LocalModelStore,
    ModelStore,
    TrainingDataStore,
)
from democracy_analyzer.training.vectorizer import TextVectorizer
from democracy_analyzer.utils.text_utils import TextSummary, summarize_text


class AnalyzerSession:
    """
    Context object exposing the analyzer's public operations.

    Attributes:
        classifier: The session's IndicatorClassifier
        labeler: The session's ExampleLabeler

    When no classifier is given, one is built from vectorizer, model_store
    and data_store.
    """

    def __init__(
        self,
        classifier: IndicatorClassifier | None = None,
        labeler: ExampleLabeler | None = None,
        vectorizer: TextVectorizer | None = None,
        model_store: ModelStore | None = None,
        data_store: TrainingDataStore | None = None,
    ):
        self.classifier = classifier or IndicatorClassifier(
            vectorizer=vectorizer,
            model_store=model_store,
            data_store=data_store,
        )
        self.labeler = labeler or ExampleLabeler()
        self._model_lock = asyncio.Lock()

    @classmethod
    def with_local_storage(cls, directory: Path, **kwargs) -> "AnalyzerSession":
        """
        Create a session whose classifier persists to files under directory.

        Args:
            directory: Folder for training_data.csv and indicator_classifier.pkl
            **kwargs: Passed through to AnalyzerSession (labeler, vectorizer)
        """
        directory = Path(directory)
        return cls(
            model_store=LocalModelStore(directory / "indicator_classifier.pkl"),
            data_store=CsvTrainingDataStore(directory / "training_data.csv"),
            **kwargs,
        )

    def analyze_text(self, text: str) -> list[AnalysisResult]:
        return analyze_text(text)

    async def extract_training_data(self, text: str) -> list[LabeledExample]:
        """
        Label sentences of text without blocking the event loop.

        Raises:
            ExtractionError: If text is empty or has no usable sentences
        """
        return await self.labeler.extract_training_data_async(text)

    def add_training_data(self, examples: Iterable[Any]) -> int:
        return self.classifier.add_training_data(examples)

    def get_training_data_size(self) -> int:
        return self.classifier.get_training_data_size()

    @property
    def training_status(self) -> str:
        return self.classifier.training_status

    async def train(
        self,
        epochs: int = DEFAULT_EPOCHS,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> TrainingHistory:
        """
        Train the classifier, yielding to the event loop after every epoch.

        Raises:
            InsufficientDataError: Fewer than the minimum number of examples
            TrainingError: Fitting failed; the fallback network is now in place
        """
        async with self._model_lock:
            for _ in self.classifier.iter_training(epochs, batch_size):
                debug_log(f"[SESSION] {self.classifier.training_status}")
                await asyncio.sleep(0)
            return self.classifier.last_history

    async def predict(self, text: str) -> Prediction:
        async with self._model_lock:
            return self.classifier.predict(text)

    def summarize_text(self, text: str) -> TextSummary:
        return summarize_text(text)

    def extract_key_phrases(self, text: str, num_phrases: int = KEY_PHRASE_DEFAULT_COUNT) -> list[KeyPhrase]:
        return extract_key_phrases(text, num_phrases)

    def extract_entities(self, text: str) -> Entities:
        return extract_entities(text)
