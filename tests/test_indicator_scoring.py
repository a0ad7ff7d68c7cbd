"""
Tests for sentiment estimation, indicator scoring, overall risk and key phrase extraction.
"""

import pytest

from democracy_analyzer.analysis import (
    INDICATORS,
    AnalysisResult,
    analyze_text,
    estimate_sentiment,
    extract_key_phrases,
    get_indicator,
    overall_risk,
    risk_level,
    top_indicator,
)


class TestSentiment:
    """Tests for estimate_sentiment."""

    def test_positive_words(self):
        assert estimate_sentiment("good great wonderful") > 0

    def test_negative_words(self):
        assert estimate_sentiment("bad terrible awful") < 0

    def test_empty_text_is_neutral(self):
        assert estimate_sentiment("") == 0

    def test_case_and_punctuation_ignored(self):
        """Tokens are lower-cased and split on non-word characters."""
        assert estimate_sentiment("GOOD!!! Great, wonderful.") == pytest.approx(0.3)

    def test_clamped_to_range(self):
        """Many negative words cannot push the score below -1."""
        assert estimate_sentiment("evil " * 50) == -1.0
        assert estimate_sentiment("love " * 50) == 1.0


class TestIndicators:
    """Tests for the fixed indicator definitions."""

    def test_four_indicators_in_order(self):
        assert [indicator.id for indicator in INDICATORS] == [1, 2, 3, 4]

    def test_indicators_are_immutable(self):
        with pytest.raises(AttributeError):
            INDICATORS[0].name = "changed"

    def test_get_indicator(self):
        assert get_indicator(3).name == "Toleration of violence"
        with pytest.raises(KeyError):
            get_indicator(5)


class TestAnalyzeText:
    """Tests for the indicator scorer."""

    def test_empty_text_returns_four_zero_results(self):
        results = analyze_text("")
        assert len(results) == 4
        for result in results:
            assert result.score == 0
            assert result.matches == []
            assert result.match_details == []

    def test_non_string_input_is_total(self):
        results = analyze_text(None)
        assert [result.score for result in results] == [0, 0, 0, 0]

    def test_democratic_rules_keywords(self):
        """All four indicator-1 keywords are found, each with context."""
        text = "military coup to suspend the constitution"
        result = analyze_text(text)[0]

        assert result.indicator.id == 1
        assert result.score > 0
        assert set(result.matches) == {"military", "coup", "suspend", "constitution"}
        assert result.score == 8
        for match in result.matches:
            assert any(detail.original == match and match in detail.context
                       for detail in result.match_details)

    def test_word_boundary_matching(self):
        """'force' must not match inside 'enforced'."""
        result = analyze_text("The law was enforced yesterday.")[2]
        assert "force" not in [match.lower() for match in result.matches]
        assert result.score == 0

    def test_matches_deduplicated_case_insensitively(self):
        text = "Election day. The ELECTION was held. Another election follows."
        result = analyze_text(text)[0]

        assert len([m for m in result.matches if m.lower() == "election"]) == 1
        assert result.matches[0] == "Election"
        assert result.score == 2

    def test_every_occurrence_gets_context(self):
        """Distinct occurrences keep separate match details."""
        text = "The coup failed. " + "x" * 80 + " A second coup followed."
        result = analyze_text(text)[0]

        coup_details = [d for d in result.match_details if d.original == "coup"]
        assert len(coup_details) == 2
        assert coup_details[0].context != coup_details[1].context

    def test_identical_details_deduplicated(self):
        """Two keywords matching the same span with the same context collapse."""
        text = "enemy of the people"
        result = analyze_text(text)[1]
        pairs = [(d.original, d.context) for d in result.match_details]
        assert len(pairs) == len(set(pairs))

    def test_context_window_clipped(self):
        text = "a" * 50 + " coup " + "b" * 50
        detail = analyze_text(text)[0].match_details[0]

        assert detail.context == text[21:85]
        assert len(detail.context) == 30 + len("coup") + 30

    def test_context_clipped_at_text_start(self):
        detail = analyze_text("coup now")[0].match_details[0]
        assert detail.context == "coup now"

    def test_negative_sentiment_boost(self):
        """Sentiment below -0.2 adds one point to indicators with matches."""
        neutral = analyze_text("They plan a coup.")[0]
        hostile = analyze_text("They plan a coup. Bad, terrible, awful.")[0]

        assert neutral.score == 2
        assert hostile.score == 3

    def test_boost_requires_matches(self):
        results = analyze_text("bad terrible awful evil")
        assert all(result.score == 0 for result in results if not result.matches)

    def test_score_capped_at_ten(self):
        text = (
            "military coup suspend constitution election democracy overthrow "
            "nullify override rules reject. Evil, bad, terrible, awful, wrong."
        )
        assert analyze_text(text)[0].score == 10

    def test_multiple_indicators_score_independently(self):
        text = "The traitor called for violence against the press."
        scores = {result.indicator.id: result.score for result in analyze_text(text)}

        assert scores[2] > 0
        assert scores[3] > 0
        assert scores[4] > 0

    @pytest.mark.parametrize("text", [
        "",
        "plain words with nothing to see",
        "coup " * 200,
        "Enemy ENEMY enemy traitor Traitor. Bad bad bad bad.",
    ])
    def test_scores_always_in_range(self, text):
        for result in analyze_text(text):
            assert 0 <= result.score <= 10
            folded = [match.lower() for match in result.matches]
            assert len(folded) == len(set(folded))


class TestTopIndicator:
    """Tests for top_indicator."""

    def test_picks_highest_score_above_threshold(self):
        results = analyze_text("traitor enemy spy with nothing else")
        assert top_indicator(results) == 2

    def test_below_threshold_is_zero(self):
        results = analyze_text("a single coup")
        assert top_indicator(results) == 0

    def test_ties_go_to_lowest_id(self):
        results = analyze_text("coup military. traitor spy.")
        assert results[0].score == results[1].score == 4
        assert top_indicator(results) == 1


def results_with_scores(*scores):
    return [AnalysisResult(indicator=indicator, score=score) for indicator, score in zip(INDICATORS, scores)]


class TestOverallRisk:
    """Tests for overall_risk and risk_level."""

    def test_mean_of_indicator_scores(self):
        assert overall_risk(results_with_scores(2, 4, 6, 8)) == 5.0

    def test_no_results(self):
        assert overall_risk([]) == 0.0

    def test_from_analysis(self):
        results = analyze_text("coup military. traitor spy.")
        assert overall_risk(results) == 2.0
        assert risk_level(overall_risk(results)) == "Moderate"

    @pytest.mark.parametrize("score, level", [
        (0, "Low"),
        (1.99, "Low"),
        (2, "Moderate"),
        (4.99, "Moderate"),
        (5, "High"),
        (7.99, "High"),
        (8, "Extreme"),
        (10, "Extreme"),
    ])
    def test_level_boundaries(self, score, level):
        assert risk_level(score) == level


class TestKeyPhrases:
    """Tests for extract_key_phrases."""

    def test_ranked_by_frequency(self):
        text = "Freedom matters. Freedom of press. The press and freedom."
        phrases = extract_key_phrases(text, num_phrases=2)

        assert phrases[0].term == "freedom"
        assert phrases[0].frequency == 3
        assert phrases[1].term == "press"

    def test_stopwords_and_short_words_skipped(self):
        phrases = extract_key_phrases("this that with the and of are")
        assert phrases == []

    def test_empty_text(self):
        assert extract_key_phrases("") == []
