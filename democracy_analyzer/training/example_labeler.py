"""
Training Example Labeler

Turns raw corpus text (a book chapter, a speech transcript) into labeled
sentences for the indicator classifier.

Labeling rules:
1. Text is split into paragraphs on blank lines; paragraphs of
   MIN_PARAGRAPH_LENGTH characters or fewer are skipped.
2. Paragraphs are split into sentences ending in '.', '!' or '?'.
   Trailing fragments without a terminator are dropped, as are
   sentences shorter than MIN_SENTENCE_LENGTH.
3. Indicators are scanned 1 -> 4 and each indicator's keywords in
   declaration order. The first keyword contained in the sentence
   (case-insensitive substring, looser than the scorer's word match)
   decides the label.
4. Sentences with no keyword become label-0 examples with probability
   NEGATIVE_SAMPLE_RATE and are otherwise discarded.

Example:
    labeler = ExampleLabeler()
    examples = labeler.extract_training_data(chapter_text)
    classifier.add_training_data(examples)
"""

import asyncio
import random

from democracy_analyzer.analysis.indicators import INDICATORS, Indicator
from democracy_analyzer.analysis.scorer import analyze_text, top_indicator
from democracy_analyzer.config import (
    LABELING_CHUNK_SIZE,
    MIN_PARAGRAPH_LENGTH,
    MIN_SENTENCE_LENGTH,
    NEGATIVE_SAMPLE_RATE,
    SYNTHETIC_DEFAULT_COUNT,
    SYNTHETIC_SCORE_THRESHOLD,
)
from democracy_analyzer.errors import ExtractionError
from democracy_analyzer.logging_config import Timer, debug_log
from democracy_analyzer.training.result_types import LabeledExample
from democracy_analyzer.utils.text_utils import split_paragraphs, split_sentences


class ExampleLabeler:
    """
    Sentence-level labeler driven by indicator keyword presence.

    Label assignment is deterministic for a given sentence; only the
    inclusion of unmatched (label 0) sentences is random. Pass a seeded
    random.Random for reproducible output.

    Attributes:
        indicators: Indicators in scan order
        negative_rate: Probability of keeping an unmatched sentence
    """

    def __init__(
        self,
        indicators: tuple[Indicator, ...] = INDICATORS,
        negative_rate: float = NEGATIVE_SAMPLE_RATE,
        rng: random.Random | None = None,
    ):
        if not 0.0 <= negative_rate <= 1.0:
            raise ValueError(f"negative_rate must be within [0, 1], got {negative_rate}")
        self.indicators = indicators
        self.negative_rate = negative_rate
        self._rng = rng or random.Random()
        # Pre-lowered keywords, preserving indicator and keyword order
        self._keywords = [
            (indicator.id, tuple(keyword.lower() for keyword in indicator.keywords))
            for indicator in indicators
        ]

    def label_sentence(self, sentence: str) -> int:
        """
        Return the label for a sentence: first indicator with a contained keyword, else 0.
        """
        lowered = sentence.lower()
        for indicator_id, keywords in self._keywords:
            for keyword in keywords:
                if keyword in lowered:
                    return indicator_id
        return 0

    def _label_paragraph(self, paragraph: str) -> tuple[list[LabeledExample], int]:
        """Label one paragraph. Returns (examples, sentences_considered)."""
        if len(paragraph.strip()) <= MIN_PARAGRAPH_LENGTH:
            return [], 0

        examples = []
        considered = 0
        for sentence in split_sentences(paragraph):
            stripped = sentence.strip()
            if len(stripped) < MIN_SENTENCE_LENGTH:
                continue
            considered += 1

            label = self.label_sentence(stripped)
            if label:
                examples.append(LabeledExample(text=stripped, label=label))
            elif self._rng.random() < self.negative_rate:
                examples.append(LabeledExample(text=stripped, label=0))

        return examples, considered

    @staticmethod
    def _require_text(text: str) -> list[str]:
        if not isinstance(text, str) or not text.strip():
            raise ExtractionError("No text to extract training data from")
        return split_paragraphs(text)

    def extract_training_data(self, text: str) -> list[LabeledExample]:
        """
        Label every usable sentence in text.

        Args:
            text: Raw corpus text with blank-line paragraph breaks

        Returns:
            Labeled examples in document order (may be empty when every
            usable sentence was unmatched and sampled out)

        Raises:
            ExtractionError: If text is empty or contains no usable sentences
        """
        paragraphs = self._require_text(text)
        debug_log(f"[LABELER] Found {len(paragraphs)} paragraphs for training data extraction")

        examples: list[LabeledExample] = []
        considered = 0
        with Timer("TrainingDataExtraction"):
            for paragraph in paragraphs:
                found, count = self._label_paragraph(paragraph)
                examples.extend(found)
                considered += count

        return self._finish(examples, considered)

    async def extract_training_data_async(
        self,
        text: str,
        chunk_size: int = LABELING_CHUNK_SIZE,
    ) -> list[LabeledExample]:
        """
        Same as extract_training_data, yielding to the event loop between chunks.

        Args:
            text: Raw corpus text
            chunk_size: Paragraphs labeled between yield points

        Raises:
            ExtractionError: If text is empty or contains no usable sentences
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

        paragraphs = self._require_text(text)
        total_chunks = (len(paragraphs) + chunk_size - 1) // chunk_size
        debug_log(f"[LABELER] Labeling {len(paragraphs)} paragraphs in {total_chunks} chunks")

        examples: list[LabeledExample] = []
        considered = 0
        for start in range(0, len(paragraphs), chunk_size):
            for paragraph in paragraphs[start:start + chunk_size]:
                found, count = self._label_paragraph(paragraph)
                examples.extend(found)
                considered += count
            await asyncio.sleep(0)

        return self._finish(examples, considered)

    @staticmethod
    def _finish(examples: list[LabeledExample], considered: int) -> list[LabeledExample]:
        if considered == 0:
            raise ExtractionError("No extractable sentences found in text")
        positives = sum(1 for example in examples if example.label)
        debug_log(
            f"[LABELER] Generated {len(examples)} training examples "
            f"({positives} indicator, {len(examples) - positives} negative) "
            f"from {considered} sentences"
        )
        return examples


def generate_synthetic_data(
    examples: list[str],
    count: int = SYNTHETIC_DEFAULT_COUNT,
    rng: random.Random | None = None,
) -> list[LabeledExample]:
    """
    Build labeled examples by sampling texts and labeling them with the scorer.

    Each draw picks a random text, scores it, and keeps it under its
    dominant indicator when that indicator scores above the threshold.
    Texts with no clear indicator are dropped, so the result may be
    shorter than count.

    Args:
        examples: Candidate texts
        count: Number of draws
        rng: Random source (defaults to a fresh random.Random)

    Returns:
        Labeled examples with labels 1-4 only
    """
    if not examples or count <= 0:
        return []

    rng = rng or random.Random()
    labels: dict[str, int] = {}
    synthetic = []
    for _ in range(count):
        text = rng.choice(examples)
        if text not in labels:
            labels[text] = top_indicator(analyze_text(text), SYNTHETIC_SCORE_THRESHOLD)
        if labels[text] > 0:
            synthetic.append(LabeledExample(text=text, label=labels[text]))

    debug_log(f"[LABELER] Generated {len(synthetic)} synthetic examples from {count} draws")
    return synthetic
