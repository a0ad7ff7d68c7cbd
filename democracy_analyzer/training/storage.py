"""
Persistence capabilities for the indicator classifier.

The classifier never decides *whether* persistence is configured; it is
handed optional store objects and treats every call as best-effort.

Capabilities:
- ModelStore: save(blob) / load() -> blob | None for trained model weights
- TrainingDataStore: store(examples) / load() -> examples

Local implementations:
- LocalModelStore: one binary file holding the latest weights
- CsvTrainingDataStore: append-only CSV of labeled examples

CSV Schema:
- timestamp: ISO8601 datetime when the batch was stored
- batch_id: Identifier shared by all rows stored in one call
- text: Example text
- label: Integer label 0-4
"""

import csv
import uuid
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from democracy_analyzer.config import MODEL_WEIGHTS_PATH, TRAINING_DATA_CSV, TRAINING_DATA_LOAD_LIMIT
from democracy_analyzer.logging_config import debug_log
from democracy_analyzer.training.result_types import LabeledExample

# CSV columns
TRAINING_DATA_COLUMNS = [
    "timestamp",
    "batch_id",
    "text",
    "label",
]


@runtime_checkable
class ModelStore(Protocol):
    """Opaque storage for serialized model weights."""

    def save(self, blob: bytes) -> None: ...

    def load(self) -> bytes | None: ...


@runtime_checkable
class TrainingDataStore(Protocol):
    """Append-only storage for labeled examples."""

    def store(self, examples: list[LabeledExample]) -> str: ...

    def load(self) -> list[LabeledExample]: ...


class LocalModelStore:
    """
    Keeps the most recent model weights in a single file.

    Example:
        store = LocalModelStore(tmp_path / "model.pkl")
        store.save(blob)
        assert store.load() == blob
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else MODEL_WEIGHTS_PATH

    def save(self, blob: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename so a crash never leaves a truncated file
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(blob)
        tmp_path.replace(self.path)
        debug_log(f"[STORAGE] Saved {len(blob)} bytes of model weights to {self.path}")

    def load(self) -> bytes | None:
        if not self.path.exists():
            debug_log("[STORAGE] No stored model weights found")
            return None
        return self.path.read_bytes()


class CsvTrainingDataStore:
    """
    Stores labeled examples in a CSV file.

    Rows with a missing text or a non-integer label are skipped on load.
    At most `load_limit` rows are read back.
    """

    def __init__(self, path: Path | None = None, load_limit: int = TRAINING_DATA_LOAD_LIMIT):
        self.path = Path(path) if path else TRAINING_DATA_CSV
        self.load_limit = load_limit

    def store(self, examples: list[LabeledExample]) -> str:
        """
        Append a batch of examples.

        Returns:
            The batch id written with every row
        """
        batch_id = str(uuid.uuid4())
        timestamp = datetime.now().isoformat()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        file_exists = self.path.exists()
        with open(self.path, 'a', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=TRAINING_DATA_COLUMNS)
            if not file_exists:
                writer.writeheader()
            for example in examples:
                writer.writerow({
                    "timestamp": timestamp,
                    "batch_id": batch_id,
                    "text": example.text,
                    "label": example.label,
                })

        debug_log(f"[STORAGE] Stored {len(examples)} training examples (batch {batch_id})")
        return batch_id

    def load(self) -> list[LabeledExample]:
        if not self.path.exists():
            debug_log("[STORAGE] No existing training data file, starting fresh")
            return []

        examples = []
        with open(self.path, 'r', encoding='utf-8', newline='') as f:
            for row in csv.DictReader(f):
                if len(examples) >= self.load_limit:
                    break
                text = row.get("text") or ""
                try:
                    label = int(row.get("label", ""))
                except ValueError:
                    continue
                if text:
                    examples.append(LabeledExample(text=text, label=label))

        debug_log(f"[STORAGE] Loaded {len(examples)} training examples from {self.path}")
        return examples
