"""
Indicator Classifier

A small feed-forward network that refines keyword scoring with examples
labeled by the user or by the ExampleLabeler.

Architecture (from settings/classifier.yaml):
- Primary: input (vector size) -> 32 relu -> 16 relu -> 5-way softmax
- Fallback: input -> 10 relu -> 5-way softmax
Both use the Adam optimizer (learning rate 0.001) and categorical
cross-entropy. Classes are fixed to 0-4 up front, so the output layer is
always 5 wide even when some labels are absent from the training set.
MLPClassifier has no dropout layer, so the 0.3 dropout between the hidden
layers of the reference design is replaced by L2 regularization (alpha),
the network's only regularizer.

Lifecycle (ModelState):
    UNBUILT -> BUILDING -> READY <-> TRAINING -> READY

A network that cannot be built, or a training run that fails, moves the
classifier onto a freshly built fallback network. Only if the fallback
cannot be built either does the classifier return to UNBUILT.

Training protocol:
- At least MIN_TRAINING_EXAMPLES accumulated examples are required
- The training set is snapshotted when the run starts
- epochs and batch size are clamped down to MAX_EPOCHS / MAX_BATCH_SIZE
- The last VALIDATION_SPLIT of the snapshot is held out for validation
- Each epoch is one shuffled pass over the remaining examples

Example:
    classifier = IndicatorClassifier()
    classifier.add_training_data(examples)
    history = classifier.train(epochs=5, batch_size=4)
    prediction = classifier.predict("The election was stolen")
    print(prediction.predicted_class, prediction.class_probabilities)
"""

import pickle
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

import numpy as np
from sklearn.model_selection import train_test_split
from sklearn.neural_network import MLPClassifier

from democracy_analyzer.config import (
    CLASSIFIER_SETTINGS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_EPOCHS,
    MAX_BATCH_SIZE,
    MAX_EPOCHS,
    MIN_TRAINING_EXAMPLES,
    NUM_CLASSES,
    VALIDATION_SPLIT,
)
from democracy_analyzer.errors import InsufficientDataError, ModelBuildError, TrainingError
from democracy_analyzer.logging_config import Timer, debug_log, error, info, warning
from democracy_analyzer.training.result_types import (
    EpochLog,
    LabeledExample,
    Prediction,
    TrainingHistory,
)
from democracy_analyzer.training.storage import ModelStore, TrainingDataStore
from democracy_analyzer.training.vectorizer import TextVectorizer, VocabularyVectorizer

CLASSES = np.arange(NUM_CLASSES)
SUPPORTED_ACTIVATIONS = ('identity', 'logistic', 'tanh', 'relu')


class ModelState(Enum):
    UNBUILT = "unbuilt"
    BUILDING = "building"
    READY = "ready"
    TRAINING = "training"


class IndicatorClassifier:
    """
    Trainable 5-class classifier (0 = not authoritarian, 1-4 = indicator id).

    Owns the in-memory training set and the network. Stores are optional
    and best-effort: a failing store is logged and otherwise ignored.

    Attributes:
        vectorizer: Turns text into fixed-length feature vectors
    """

    def __init__(
        self,
        vectorizer: TextVectorizer | None = None,
        model_store: ModelStore | None = None,
        data_store: TrainingDataStore | None = None,
        settings: dict[str, Any] | None = None,
    ):
        """
        Build the primary network and restore stored state.

        Args:
            vectorizer: Feature extractor. Defaults to a positional TextVectorizer.
            model_store: Where trained weights are saved and loaded from
            data_store: Where added training examples are saved and loaded from
            settings: Architecture settings. Defaults to config.CLASSIFIER_SETTINGS.
        """
        self.vectorizer = vectorizer or TextVectorizer()
        self._settings = dict(settings or CLASSIFIER_SETTINGS)
        self._model_store = model_store
        self._data_store = data_store

        self._training_data: list[LabeledExample] = []
        self._model: MLPClassifier | None = None
        self._architecture: str | None = None
        self._fitted = False
        self._state = ModelState.UNBUILT
        self._training_status = ""
        self._last_history: TrainingHistory | None = None

        self._build()
        self._load_training_data()
        self._load_model()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def architecture(self) -> str | None:
        """'primary', 'fallback', or None when no network exists."""
        return self._architecture

    @property
    def is_ready(self) -> bool:
        """True when a trained network is available for prediction."""
        return self._state is ModelState.READY and self._model is not None and self._fitted

    @property
    def training_status(self) -> str:
        """Human-readable progress text, updated once per epoch."""
        return self._training_status

    @property
    def last_history(self) -> TrainingHistory | None:
        return self._last_history

    def get_training_data_size(self) -> int:
        return len(self._training_data)

    # ------------------------------------------------------------------
    # Network construction
    # ------------------------------------------------------------------

    def _create_network(self, kind: str) -> MLPClassifier:
        """
        Construct an untrained network from settings[kind].

        Raises:
            ModelBuildError: If the settings describe an impossible network
        """
        try:
            spec = self._settings[kind]
            hidden = tuple(int(units) for units in spec['hidden_layer_sizes'])
            activation = spec.get('activation', 'relu')
            alpha = float(spec.get('alpha', 0.0001))
            learning_rate = float(self._settings.get('learning_rate', 0.001))
        except (KeyError, TypeError, ValueError) as e:
            raise ModelBuildError(f"Invalid {kind} network settings: {e}") from e

        if not hidden or any(units < 1 for units in hidden):
            raise ModelBuildError(f"Invalid {kind} hidden layer sizes: {hidden}")
        if activation not in SUPPORTED_ACTIVATIONS:
            raise ModelBuildError(f"Unsupported activation for {kind} network: {activation!r}")
        if learning_rate <= 0 or alpha < 0:
            raise ModelBuildError(
                f"Invalid {kind} optimizer settings: learning_rate={learning_rate}, alpha={alpha}"
            )

        return MLPClassifier(
            hidden_layer_sizes=hidden,
            activation=activation,
            solver='adam',
            alpha=alpha,
            learning_rate_init=learning_rate,
            batch_size=MAX_BATCH_SIZE,
            shuffle=True,
        )

    def _build(self):
        """UNBUILT -> BUILDING -> READY, on the fallback network if the primary fails."""
        self._state = ModelState.BUILDING
        try:
            model = self._create_network('primary')
        except ModelBuildError as e:
            warning(f"[CLASSIFIER] Primary network could not be built: {e}")
            self._build_fallback()
            return

        self._model = model
        self._architecture = 'primary'
        self._fitted = False
        self._state = ModelState.READY
        debug_log("[CLASSIFIER] Primary network built")

    def _build_fallback(self) -> bool:
        """
        Replace the current network with a fresh fallback network.

        Returns:
            True if the fallback was built; False leaves the classifier UNBUILT
        """
        self._state = ModelState.BUILDING
        try:
            model = self._create_network('fallback')
        except ModelBuildError as e:
            error(f"[CLASSIFIER] Fallback network could not be built: {e}")
            self._model = None
            self._architecture = None
            self._fitted = False
            self._state = ModelState.UNBUILT
            return False

        self._model = model
        self._architecture = 'fallback'
        self._fitted = False
        self._state = ModelState.READY
        debug_log("[CLASSIFIER] Fallback network built")
        return True

    # ------------------------------------------------------------------
    # Training data
    # ------------------------------------------------------------------

    @staticmethod
    def _valid_examples(examples: Iterable[Any] | None) -> list[LabeledExample]:
        valid = []
        for item in examples or []:
            example = LabeledExample.coerce(item)
            if example is not None and example.is_valid():
                valid.append(example)
        return valid

    def add_training_data(self, examples: Iterable[Any]) -> int:
        """
        Append valid examples to the training set.

        Entries without text or with a label outside 0-4 are dropped silently.

        Args:
            examples: LabeledExample objects or {text, label} mappings

        Returns:
            Total number of accumulated examples
        """
        examples = list(examples or [])
        valid = self._valid_examples(examples)
        self._training_data.extend(valid)

        dropped = len(examples) - len(valid)
        if dropped:
            debug_log(f"[CLASSIFIER] Dropped {dropped} invalid training examples")

        if valid and self._data_store is not None:
            try:
                self._data_store.store(valid)
            except Exception as e:
                warning(f"[CLASSIFIER] Failed to store training data: {e}")

        return len(self._training_data)

    def _load_training_data(self):
        if self._data_store is None:
            return
        try:
            stored = self._data_store.load()
        except Exception as e:
            warning(f"[CLASSIFIER] Failed to load stored training data: {e}")
            return

        valid = self._valid_examples(stored)
        self._training_data.extend(valid)
        if valid:
            self._training_status = f"Loaded {len(valid)} training examples"
            info(f"[CLASSIFIER] Loaded {len(valid)} stored training examples")

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, epochs: int = DEFAULT_EPOCHS, batch_size: int = DEFAULT_BATCH_SIZE) -> TrainingHistory:
        """
        Fit the network on the accumulated training set.

        Args:
            epochs: Requested epochs (clamped to MAX_EPOCHS)
            batch_size: Requested batch size (clamped to MAX_BATCH_SIZE)

        Returns:
            TrainingHistory with one EpochLog per epoch

        Raises:
            InsufficientDataError: Fewer than MIN_TRAINING_EXAMPLES examples
            TrainingError: Fitting failed; the classifier now holds the fallback network
        """
        for _ in self.iter_training(epochs, batch_size):
            pass
        return self._last_history

    def iter_training(
        self,
        epochs: int = DEFAULT_EPOCHS,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> Iterator[EpochLog]:
        """
        Run the training protocol one epoch per iteration step.

        Yields an EpochLog after each epoch. The finished history is
        available from last_history once the iterator is exhausted. An
        iterator abandoned part-way leaves the partially trained network
        in place and unready.

        Raises:
            Same as train()
        """
        if epochs < 1 or batch_size < 1:
            raise ValueError(f"epochs and batch_size must be at least 1, got {epochs} and {batch_size}")

        available = len(self._training_data)
        if available < MIN_TRAINING_EXAMPLES:
            raise InsufficientDataError(available, MIN_TRAINING_EXAMPLES)

        if self._model is None:
            self._build()
            if self._model is None:
                raise TrainingError("Model not initialized. No network could be built.")

        snapshot = list(self._training_data)
        actual_epochs = min(epochs, MAX_EPOCHS)
        actual_batch_size = min(batch_size, MAX_BATCH_SIZE)
        history = TrainingHistory(
            epochs=actual_epochs,
            batch_size=actual_batch_size,
            example_count=len(snapshot),
        )

        self._state = ModelState.TRAINING
        self._fitted = False
        self._training_status = "Preparing training data..."
        info(
            f"[CLASSIFIER] Training {self._architecture} network on {len(snapshot)} examples "
            f"({actual_epochs} epochs, batch size {actual_batch_size})"
        )

        try:
            with Timer("ClassifierTraining") as timer:
                features = self.vectorizer.vectorize_batch([example.text for example in snapshot])
                labels = np.array([example.label for example in snapshot])
                x_train, x_val, y_train, y_val = train_test_split(
                    features, labels, test_size=VALIDATION_SPLIT, shuffle=False,
                )
                self._model.set_params(batch_size=actual_batch_size, shuffle=True)
                self._training_status = f"Training model with {len(snapshot)} examples..."

                for epoch in range(1, actual_epochs + 1):
                    self._training_status = f"Training epoch {epoch}/{actual_epochs}..."
                    self._model.partial_fit(x_train, y_train, classes=CLASSES)

                    log = EpochLog(
                        epoch=epoch,
                        loss=float(self._model.loss_),
                        accuracy=float(self._model.score(x_train, y_train)),
                        val_accuracy=float(self._model.score(x_val, y_val)),
                    )
                    history.logs.append(log)
                    self._training_status = (
                        f"Epoch {epoch}/{actual_epochs} complete - accuracy: {log.accuracy * 100:.1f}%"
                    )
                    debug_log(
                        f"[CLASSIFIER] Epoch {epoch}: loss = {log.loss:.4f}, "
                        f"accuracy = {log.accuracy:.4f}, val_accuracy = {log.val_accuracy:.4f}"
                    )
                    yield log
        except Exception as e:
            error(f"[CLASSIFIER] Training failed: {e}", exc_info=True)
            self._build_fallback()
            self._training_status = f"Training failed: {e}"
            raise TrainingError(f"Training failed: {e}") from e

        self._fitted = True
        self._state = ModelState.READY
        history.duration_ms = timer.get_duration_ms()
        self._last_history = history
        self._save_model()
        self._training_status = "Model trained successfully"
        info(
            f"[CLASSIFIER] Training complete: final accuracy {history.final_accuracy:.3f} "
            f"in {history.duration_ms:.0f} ms"
        )

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def predict(self, text: str) -> Prediction:
        """
        Predict the indicator class of text.

        Returns the neutral prediction (class 0 with probability 1) when no
        trained network is available or anything goes wrong. Never raises.
        """
        if not self.is_ready:
            return Prediction.neutral()

        try:
            vector = self.vectorizer.vectorize(text).reshape(1, -1)
            probabilities = self._model.predict_proba(vector)[0]
            # argmax returns the first occurrence on ties
            return Prediction(
                class_probabilities=tuple(float(p) for p in probabilities),
                predicted_class=int(np.argmax(probabilities)),
            )
        except Exception as e:
            error(f"[CLASSIFIER] Prediction error: {e}")
            return Prediction.neutral()

    # ------------------------------------------------------------------
    # Model persistence
    # ------------------------------------------------------------------

    def _fitted_vocabulary(self) -> dict[str, int] | None:
        if isinstance(self.vectorizer, VocabularyVectorizer) and self.vectorizer.is_fitted:
            return self.vectorizer.vocabulary
        return None

    def _restore_vocabulary(self, vocabulary: dict[str, int] | None) -> bool:
        """
        Check a stored vocabulary against the vectorizer's own.

        An unfitted VocabularyVectorizer adopts the stored table. Any other
        difference means the network's input features would be meaningless.
        """
        current = self._fitted_vocabulary()
        if vocabulary and current is None and isinstance(self.vectorizer, VocabularyVectorizer):
            try:
                self.vectorizer.load_vocabulary(vocabulary)
            except (TypeError, ValueError) as e:
                warning(f"[CLASSIFIER] Stored vocabulary could not be loaded: {e}")
                return False
            return True
        return vocabulary == current

    def _save_model(self) -> bool:
        """Best-effort save of the trained network. Returns True on success."""
        if self._model_store is None or not self.is_ready:
            return False
        try:
            blob = pickle.dumps({
                'model': self._model,
                'architecture': self._architecture,
                'vector_size': self.vectorizer.size,
                'vectorizer': type(self.vectorizer).__name__,
                'vocabulary': self._fitted_vocabulary(),
            })
            self._model_store.save(blob)
        except Exception as e:
            warning(f"[CLASSIFIER] Failed to save model: {e}")
            return False

        debug_log("[CLASSIFIER] Model saved")
        return True

    def _load_model(self) -> bool:
        """Restore a previously trained network. Returns True on success."""
        if self._model_store is None:
            return False
        try:
            blob = self._model_store.load()
            if blob is None:
                return False
            model_data = pickle.loads(blob)
            model = model_data.get('model')
            architecture = model_data.get('architecture')
            vector_size = model_data.get('vector_size')
            vectorizer_kind = model_data.get('vectorizer')
            vocabulary = model_data.get('vocabulary')
        except Exception as e:
            warning(f"[CLASSIFIER] Failed to load model: {e}")
            return False

        if (
            not isinstance(model, MLPClassifier)
            or vector_size != self.vectorizer.size
            or vectorizer_kind != type(self.vectorizer).__name__
            or list(getattr(model, 'classes_', [])) != list(CLASSES)
        ):
            warning("[CLASSIFIER] Stored model is incompatible, ignoring it")
            return False

        if not self._restore_vocabulary(vocabulary):
            warning("[CLASSIFIER] Stored model was trained on a different vocabulary, ignoring it")
            return False

        self._model = model
        self._architecture = architecture
        self._fitted = True
        self._state = ModelState.READY
        self._training_status = "Model loaded successfully"
        info(f"[CLASSIFIER] Restored {architecture} network from store")
        return True
