"""
Text Vectorizers

Map text to a fixed-length vector of token counts for the classifier.

Token rules (shared by both vectorizers):
- lower-case, remove every character that is neither a word character
  nor whitespace, split on whitespace
- discard tokens of length <= 2

TextVectorizer (default) writes counts positionally: the first distinct
token seen in the text goes to index 0, the next to index 1, and so on.
Tokens past `size` are dropped and unused positions stay 0. There is no
vocabulary table, so the same word lands at different indices in
different texts. Vectors are reproducible for identical text but not
comparable across texts.

VocabularyVectorizer keeps a fixed token -> index table fitted once from
a reference corpus, giving stable features across calls.
"""

import re
from collections import Counter

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from democracy_analyzer.config import MIN_TOKEN_LENGTH, VECTOR_SIZE
from democracy_analyzer.logging_config import debug_log

_STRIP = re.compile(r'[^\w\s]')


def tokenize(text: str) -> list[str]:
    """Lower-case, strip punctuation, split on whitespace, drop short tokens."""
    return [
        token for token in _STRIP.sub('', text.lower()).split()
        if len(token) >= MIN_TOKEN_LENGTH
    ]


class TextVectorizer:
    """
    Positional bag-of-words vectorizer.

    Example:
        vectorizer = TextVectorizer()
        vector = vectorizer.vectorize("The press is the enemy of the people")
        assert len(vector) == 50
    """

    def __init__(self, size: int = VECTOR_SIZE):
        if size < 1:
            raise ValueError(f"Vector size must be at least 1, got {size}")
        self.size = size

    def vectorize(self, text: str) -> np.ndarray:
        """
        Encode text as a float32 vector of length `size`.

        Non-string input produces a zero vector.
        """
        vector = np.zeros(self.size, dtype=np.float32)
        if not isinstance(text, str):
            return vector

        # Counter keeps first-occurrence order
        counts = Counter(tokenize(text))
        for index, count in enumerate(counts.values()):
            if index >= self.size:
                break
            vector[index] = count
        return vector

    def vectorize_batch(self, texts: list[str]) -> np.ndarray:
        """Encode several texts into a (len(texts), size) array."""
        matrix = np.zeros((len(texts), self.size), dtype=np.float32)
        for row, text in enumerate(texts):
            matrix[row] = self.vectorize(text)
        return matrix


class VocabularyVectorizer(TextVectorizer):
    """
    Bag-of-words vectorizer with a fixed vocabulary.

    The `size` most frequent tokens of the reference corpus each get a
    permanent index. Until fit() is called every vector is zero.

    Example:
        vectorizer = VocabularyVectorizer().fit(reference_texts)
        vector = vectorizer.vectorize("suspend the constitution")
    """

    def __init__(self, size: int = VECTOR_SIZE):
        super().__init__(size)
        self._counter: CountVectorizer | None = None

    @property
    def is_fitted(self) -> bool:
        return self._counter is not None

    @property
    def vocabulary(self) -> dict[str, int]:
        """Token -> index table (empty before fit)."""
        if self._counter is None:
            return {}
        return {token: int(index) for token, index in self._counter.vocabulary_.items()}

    def fit(self, corpus: list[str]) -> "VocabularyVectorizer":
        """
        Build the vocabulary from a reference corpus.

        A corpus with no usable tokens leaves the vectorizer unfitted.
        """
        counter = CountVectorizer(
            tokenizer=tokenize,
            lowercase=False,
            token_pattern=None,
            max_features=self.size,
        )
        try:
            counter.fit([text for text in corpus if isinstance(text, str)])
        except ValueError as e:
            # Raised by scikit-learn when the corpus has no tokens at all
            debug_log(f"[VECTORIZER] Vocabulary fit skipped: {e}")
            self._counter = None
            return self

        self._counter = counter
        debug_log(f"[VECTORIZER] Fitted vocabulary of {len(counter.vocabulary_)} tokens")
        return self

    def load_vocabulary(self, vocabulary: dict[str, int]) -> "VocabularyVectorizer":
        """
        Adopt a previously fitted token -> index table.

        Raises:
            ValueError: If the table does not fit in `size` or has index gaps
        """
        if len(vocabulary) > self.size:
            raise ValueError(f"Vocabulary of {len(vocabulary)} tokens exceeds vector size {self.size}")

        counter = CountVectorizer(
            tokenizer=tokenize,
            lowercase=False,
            token_pattern=None,
            vocabulary=dict(vocabulary),
        )
        # A fixed vocabulary is validated (not learned) by fit
        counter.fit(list(vocabulary))
        self._counter = counter
        debug_log(f"[VECTORIZER] Loaded vocabulary of {len(vocabulary)} tokens")
        return self

    def vectorize(self, text: str) -> np.ndarray:
        return self.vectorize_batch([text])[0]

    def vectorize_batch(self, texts: list[str]) -> np.ndarray:
        matrix = np.zeros((len(texts), self.size), dtype=np.float32)
        if self._counter is None or not texts:
            return matrix

        cleaned = [text if isinstance(text, str) else '' for text in texts]
        counts = self._counter.transform(cleaned).toarray()
        matrix[:, :counts.shape[1]] = counts
        return matrix
