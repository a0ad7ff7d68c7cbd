"""
Tests for the positional and fixed-vocabulary text vectorizers.
"""

import numpy as np
import pytest

from democracy_analyzer.training import TextVectorizer, VocabularyVectorizer, tokenize


class TestTokenize:
    """Tests for the shared token rules."""

    def test_strips_punctuation_and_short_tokens(self):
        assert tokenize("Don't ban the Press! It is OK.") == ["dont", "ban", "the", "press"]

    def test_empty(self):
        assert tokenize("") == []


class TestTextVectorizer:
    """Tests for the positional vectorizer."""

    @pytest.mark.parametrize("word_count", [0, 1, 49, 50, 51, 10_000])
    def test_length_always_fixed(self, word_count):
        text = " ".join(f"word{i}" for i in range(word_count))
        vector = TextVectorizer().vectorize(text)
        assert vector.shape == (50,)

    def test_counts_in_first_occurrence_order(self):
        vector = TextVectorizer().vectorize("press freedom press enemy press freedom")
        assert vector[:3].tolist() == [3.0, 2.0, 1.0]
        assert not vector[3:].any()

    def test_short_tokens_ignored(self):
        vector = TextVectorizer().vectorize("a an of to be")
        assert not vector.any()

    def test_extra_tokens_dropped(self):
        text = " ".join(f"token{i}" for i in range(80))
        vector = TextVectorizer().vectorize(text)
        assert vector.tolist() == [1.0] * 50

    def test_position_depends_on_text(self):
        """The same word can land at different indices in different texts."""
        vectorizer = TextVectorizer(size=5)
        first = vectorizer.vectorize("coup coup military")
        second = vectorizer.vectorize("military coup coup")
        assert first.tolist() == [2.0, 1.0, 0.0, 0.0, 0.0]
        assert second.tolist() == [1.0, 2.0, 0.0, 0.0, 0.0]

    def test_non_string_gives_zeros(self):
        vector = TextVectorizer().vectorize(None)
        assert vector.shape == (50,)
        assert not vector.any()

    def test_batch_shape(self):
        matrix = TextVectorizer(size=8).vectorize_batch(["one two three", "", "four"])
        assert matrix.shape == (3, 8)
        assert matrix.dtype == np.float32

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            TextVectorizer(size=0)


class TestVocabularyVectorizer:
    """Tests for the fixed-vocabulary vectorizer."""

    def test_unfitted_returns_zeros(self):
        vectorizer = VocabularyVectorizer()
        assert not vectorizer.is_fitted
        assert not vectorizer.vectorize("military coup").any()

    def test_stable_positions(self):
        vectorizer = VocabularyVectorizer(size=10).fit([
            "the military coup failed",
            "another coup attempt",
        ])
        index = vectorizer.vocabulary["coup"]

        first = vectorizer.vectorize("coup coup military")
        second = vectorizer.vectorize("military coup coup")
        assert first[index] == second[index] == 2.0
        assert first.tolist() == second.tolist()

    def test_length_fixed_with_small_vocabulary(self):
        vectorizer = VocabularyVectorizer(size=50).fit(["just three words"])
        assert len(vectorizer.vocabulary) == 3
        assert vectorizer.vectorize("just words").shape == (50,)

    def test_vocabulary_capped_at_size(self):
        corpus = [" ".join(f"term{i}" for i in range(100))]
        vectorizer = VocabularyVectorizer(size=20).fit(corpus)
        assert len(vectorizer.vocabulary) == 20
        assert vectorizer.vectorize_batch(corpus).shape == (1, 20)

    def test_empty_corpus_leaves_unfitted(self):
        vectorizer = VocabularyVectorizer().fit(["a b c", ""])
        assert not vectorizer.is_fitted

    def test_unknown_tokens_ignored(self):
        vectorizer = VocabularyVectorizer(size=5).fit(["election fraud"])
        assert not vectorizer.vectorize("completely different words").any()
