"""
Tests for AnalyzerSession, the public entry point.
"""

import asyncio

import pytest

from democracy_analyzer import AnalyzerSession, ExtractionError, InsufficientDataError, TrainingError
from democracy_analyzer.training import ExampleLabeler, VocabularyVectorizer

CORPUS = "\n\n".join([
    "The general threatened to suspend the constitution and delay the election. "
    "He insisted the election was rigged from the start.",
    "His allies described every critic as a traitor and a foreign agent. "
    "They said the opposition was controlled by enemies abroad.",
    "Supporters were told to fight back with force if needed. "
    "Crowds gathered to attack the offices of journalists.",
    "New laws would restrict the press and ban public assembly. "
    "Police were ordered to detain anyone who spoke out.",
])


@pytest.fixture
def session():
    return AnalyzerSession(labeler=ExampleLabeler(negative_rate=0.0))


class TestAnalyze:
    """Tests for the synchronous operations."""

    def test_analyze_text(self, session):
        results = session.analyze_text("military coup to suspend the constitution")
        assert len(results) == 4
        assert results[0].score > 0

    def test_analyze_empty_text(self, session):
        assert [result.score for result in session.analyze_text("")] == [0, 0, 0, 0]

    def test_summarize_and_key_phrases(self, session):
        assert session.summarize_text(CORPUS).paragraphs == 4
        assert session.extract_key_phrases(CORPUS, num_phrases=3)

    def test_extract_entities(self, session):
        entities = session.extract_entities("Senator McCarthy accused the State Department.")
        assert entities.people == ("Senator McCarthy",)
        assert entities.organizations == ("State Department",)
        assert entities.nouns == ()


class TestTrainingFlow:
    """Tests for the async labeling, training and prediction flow."""

    @pytest.mark.asyncio
    async def test_extract_training_data(self, session):
        examples = await session.extract_training_data(CORPUS)
        assert [example.label for example in examples] == [1, 1, 2, 2, 3, 3, 4, 4]

    @pytest.mark.asyncio
    async def test_extract_empty_raises(self, session):
        with pytest.raises(ExtractionError):
            await session.extract_training_data("")

    @pytest.mark.asyncio
    async def test_predict_before_training_is_neutral(self, session):
        prediction = await session.predict("lock them up")
        assert prediction.predicted_class == 0
        assert prediction.not_authoritarian == 1.0

    @pytest.mark.asyncio
    async def test_train_requires_ten_examples(self, session):
        examples = await session.extract_training_data(CORPUS)
        session.add_training_data(examples)
        assert session.get_training_data_size() == 8

        with pytest.raises(InsufficientDataError):
            await session.train()

    @pytest.mark.asyncio
    async def test_train_then_predict(self, session):
        examples = await session.extract_training_data(CORPUS)
        session.add_training_data(examples + examples)

        history = await session.train(epochs=5, batch_size=4)
        assert len(history.logs) == 5
        assert session.training_status == "Model trained successfully"

        prediction = await session.predict("They want to suspend the election.")
        assert sum(prediction.class_probabilities) == pytest.approx(1.0, abs=1e-3)

    @pytest.mark.asyncio
    async def test_predict_waits_for_training(self, session):
        examples = await session.extract_training_data(CORPUS)
        session.add_training_data(examples + examples)

        training = asyncio.create_task(session.train())
        await asyncio.sleep(0)
        prediction = await session.predict("restrict the press")
        await training

        assert session.classifier.is_ready
        assert sum(prediction.class_probabilities) == pytest.approx(1.0, abs=1e-3)

    @pytest.mark.asyncio
    async def test_training_failure_surfaces(self, session, monkeypatch):
        session.add_training_data([{"text": "some example text", "label": i % 5} for i in range(10)])

        def broken_fit(*args, **kwargs):
            raise RuntimeError("numeric failure")

        monkeypatch.setattr(session.classifier._model, "partial_fit", broken_fit)
        with pytest.raises(TrainingError, match="numeric failure"):
            await session.train()
        assert session.classifier.architecture == "fallback"


class TestLocalStorage:
    """Tests for AnalyzerSession.with_local_storage."""

    @pytest.mark.asyncio
    async def test_state_survives_new_session(self, tmp_path):
        first = AnalyzerSession.with_local_storage(tmp_path)
        first.add_training_data([{"text": f"example number {i}", "label": i % 5} for i in range(12)])
        await first.train()

        second = AnalyzerSession.with_local_storage(tmp_path)
        assert second.get_training_data_size() == 12
        assert second.classifier.is_ready
        assert (tmp_path / "training_data.csv").exists()
        assert (tmp_path / "indicator_classifier.pkl").exists()


class TestSessionWiring:
    """Tests for building the session's classifier from its parts."""

    def test_vectorizer_passed_to_classifier(self):
        vectorizer = VocabularyVectorizer(size=20).fit([CORPUS])
        session = AnalyzerSession(vectorizer=vectorizer)
        assert session.classifier.vectorizer is vectorizer

    def test_local_storage_accepts_labeler(self, tmp_path):
        labeler = ExampleLabeler(negative_rate=0.0)
        session = AnalyzerSession.with_local_storage(tmp_path, labeler=labeler)
        assert session.labeler is labeler
