"""
Data types shared by the labeler, the classifier and the stores.

Contains:
- LabeledExample: A text with its indicator label (0 = no indicator)
- Prediction: Class probabilities and the arg-max class
- EpochLog / TrainingHistory: Per-epoch training metrics
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from democracy_analyzer.config import NUM_CLASSES


@dataclass(frozen=True)
class LabeledExample:
    """
    A single training example.

    Attributes:
        text: Sentence or passage
        label: 0 for "no indicator detected", 1-4 for the indicator id
    """
    text: str
    label: int

    def is_valid(self) -> bool:
        """Non-empty text and a label in 0..NUM_CLASSES-1."""
        return (
            isinstance(self.text, str)
            and bool(self.text)
            and isinstance(self.label, int)
            and not isinstance(self.label, bool)
            and 0 <= self.label < NUM_CLASSES
        )

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "label": self.label}

    @classmethod
    def coerce(cls, item: Any) -> "LabeledExample | None":
        """
        Build an example from a LabeledExample or a {text, label} mapping.

        Returns None when the item has neither shape. No range checking is
        done here; call is_valid() for that.
        """
        if isinstance(item, LabeledExample):
            return item
        if isinstance(item, Mapping) and "text" in item and "label" in item:
            return cls(text=item["text"], label=item["label"])
        return None


@dataclass(frozen=True)
class Prediction:
    """
    Classifier output.

    Attributes:
        class_probabilities: One probability per class, index 0 = not authoritarian
        predicted_class: Index of the largest probability (lowest index on ties)
    """
    class_probabilities: tuple[float, ...]
    predicted_class: int

    @classmethod
    def neutral(cls) -> "Prediction":
        """Degenerate prediction used when no trained model is available."""
        return cls(
            class_probabilities=(1.0,) + (0.0,) * (NUM_CLASSES - 1),
            predicted_class=0,
        )

    @property
    def not_authoritarian(self) -> float:
        return self.class_probabilities[0]

    def indicator_probability(self, indicator_id: int) -> float:
        return self.class_probabilities[indicator_id]

    def as_dict(self) -> dict[str, float | int]:
        result: dict[str, float | int] = {"not_authoritarian": self.class_probabilities[0]}
        for indicator_id in range(1, NUM_CLASSES):
            result[f"indicator{indicator_id}"] = self.class_probabilities[indicator_id]
        result["predicted_class"] = self.predicted_class
        return result


@dataclass(frozen=True)
class EpochLog:
    epoch: int
    loss: float
    accuracy: float
    val_accuracy: float | None = None


@dataclass
class TrainingHistory:
    """
    Record of one training run.

    Attributes:
        epochs: Epochs actually run (after clamping)
        batch_size: Batch size actually used (after clamping)
        example_count: Size of the training snapshot
        logs: One EpochLog per completed epoch
        duration_ms: Wall-clock training time, set when the run completes
    """
    epochs: int
    batch_size: int
    example_count: int
    logs: list[EpochLog] = field(default_factory=list)
    duration_ms: float | None = None

    @property
    def final_accuracy(self) -> float | None:
        return self.logs[-1].accuracy if self.logs else None
