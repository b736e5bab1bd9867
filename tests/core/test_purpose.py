"""Tests for audiolex content purpose analysis."""

from __future__ import annotations

import pytest

from audiolex.core.intent import (
    ActionabilityAssessor,
    ActionabilityLevel,
    AudienceAnalyzer,
    ContentPurpose,
    ContentPurposeAnalyzer,
    PurposeClassifier,
    QualityAssessor,
    SentimentAnalyzer,
    SentimentLabel,
    TargetAudience,
    TimeSensitivity,
    UrgencyAnalyzer,
)
from audiolex.core.intent.purpose import _first_rule, count_sentences

# ============================================================================
# Rule Classifier Tests
# ============================================================================


class TestPurposeClassifier:
    """Tests for first-match purpose rules."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("This tutorial covers gain staging", ContentPurpose.INSTRUCTIONAL),
            ("There is a problem with the mix", ContentPurpose.TROUBLESHOOTING),
            ("Please approve the budget", ContentPurpose.DECISION_MAKING),
            ("Reference sheet for the console", ContentPurpose.REFERENCE),
            ("Just some notes", ContentPurpose.INFORMATIVE),
        ],
    )
    def test_rules(self, text: str, expected: ContentPurpose) -> None:
        assert PurposeClassifier().classify(text) == expected

    def test_first_rule_wins(self) -> None:
        """An earlier rule hides a later one."""
        assert PurposeClassifier().classify("A tutorial about this issue") == ContentPurpose.INSTRUCTIONAL

    def test_first_rule_helper(self) -> None:
        """The helper returns the first matching rule's result, else the default."""
        rules = ((("alpha",), "first"), (("beta", "alpha"), "second"))
        assert _first_rule("beta alpha", rules, "none") == "first"
        assert _first_rule("beta", rules, "none") == "second"
        assert _first_rule("gamma", rules, "none") == "none"


class TestAudienceAnalyzer:
    """Tests for audience rules."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("The client wants changes", TargetAudience.CLIENT),
            ("Notes for the student", TargetAudience.STUDENT),
            ("Ideas for the producer", TargetAudience.PRODUCER),
            ("Cues for each performer", TargetAudience.MUSICIAN),
            ("Engineering handover", TargetAudience.ENGINEER),
            ("Hello", TargetAudience.GENERAL),
        ],
    )
    def test_rules(self, text: str, expected: TargetAudience) -> None:
        assert AudienceAnalyzer().analyze(text) == expected

    def test_first_rule_wins(self) -> None:
        assert AudienceAnalyzer().analyze("Student work for a client") == TargetAudience.CLIENT


class TestActionabilityAssessor:
    """Tests for actionability rules."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Fix this immediately", ActionabilityLevel.IMMEDIATE_ACTION),
            ("Schedule the session", ActionabilityLevel.SCHEDULED_ACTION),
            ("Call me when ready", ActionabilityLevel.CONDITIONAL_ACTION),
            ("Plain notes", ActionabilityLevel.REFERENCE_ONLY),
        ],
    )
    def test_rules(self, text: str, expected: ActionabilityLevel) -> None:
        assert ActionabilityAssessor().assess(text) == expected

    def test_substring_match(self) -> None:
        """The trigger word if also matches inside longer words."""
        assert ActionabilityAssessor().assess("Specific notes") == ActionabilityLevel.CONDITIONAL_ACTION


# ============================================================================
# Urgency Tests
# ============================================================================


class TestUrgencyAnalyzer:
    """Tests for urgency analysis."""

    @pytest.fixture
    def analyzer(self) -> UrgencyAnalyzer:
        return UrgencyAnalyzer()

    def test_urgent(self, analyzer: UrgencyAnalyzer) -> None:
        urgency = analyzer.analyze("Urgent: need this ASAP today")

        assert urgency.level == pytest.approx(0.8)
        assert urgency.time_sensitivity == TimeSensitivity.IMMEDIATE
        assert urgency.critical_issues == ("urgent", "asap")

    def test_same_day(self, analyzer: UrgencyAnalyzer) -> None:
        urgency = analyzer.analyze("Finish it today")
        assert urgency.level == pytest.approx(0.2)
        assert urgency.time_sensitivity == TimeSensitivity.SAME_DAY
        assert urgency.critical_issues == ()

    def test_this_week(self, analyzer: UrgencyAnalyzer) -> None:
        urgency = analyzer.analyze("Mix due tomorrow")
        assert urgency.level == pytest.approx(0.4)
        assert urgency.time_sensitivity == TimeSensitivity.THIS_WEEK

    def test_routine(self, analyzer: UrgencyAnalyzer) -> None:
        urgency = analyzer.analyze("")
        assert urgency.level == 0.0
        assert urgency.time_sensitivity == TimeSensitivity.ROUTINE

    def test_level_capped(self, analyzer: UrgencyAnalyzer) -> None:
        urgency = analyzer.analyze("urgent asap immediately emergency today tomorrow deadline due")
        assert urgency.level == 1.0
        assert urgency.critical_issues == ("urgent", "asap", "immediately", "emergency")


# ============================================================================
# Sentiment and Quality Tests
# ============================================================================


class TestSentimentAnalyzer:
    """Tests for word-list sentiment."""

    @pytest.fixture
    def analyzer(self) -> SentimentAnalyzer:
        return SentimentAnalyzer()

    def test_positive(self, analyzer: SentimentAnalyzer) -> None:
        sentiment = analyzer.analyze("Great mix")
        assert sentiment.score == pytest.approx(0.5)
        assert sentiment.label == SentimentLabel.POSITIVE
        assert sentiment.confidence == 0.7

    def test_negative(self, analyzer: SentimentAnalyzer) -> None:
        sentiment = analyzer.analyze("This is bad")
        assert sentiment.score == pytest.approx(-1 / 3)
        assert sentiment.label == SentimentLabel.NEGATIVE

    def test_words_counted_once(self, analyzer: SentimentAnalyzer) -> None:
        """Each list word counts once however often it appears."""
        assert analyzer.analyze("great great").score == pytest.approx(0.5)

    def test_neutral_when_balanced(self, analyzer: SentimentAnalyzer) -> None:
        assert analyzer.analyze("good but bad").label == SentimentLabel.NEUTRAL

    def test_diluted_by_length(self, analyzer: SentimentAnalyzer) -> None:
        text = "good " + "word " * 19
        sentiment = analyzer.analyze(text)
        assert sentiment.score == pytest.approx(0.05)
        assert sentiment.label == SentimentLabel.NEUTRAL

    def test_empty(self, analyzer: SentimentAnalyzer) -> None:
        sentiment = analyzer.analyze("")
        assert sentiment.score == 0.0
        assert sentiment.label == SentimentLabel.NEUTRAL


class TestQualityAssessor:
    """Tests for the quality estimate."""

    def test_empty(self) -> None:
        quality = QualityAssessor().assess("")
        assert quality.completeness == 0.0
        assert quality.organization == 0.0
        assert quality.clarity == 0.8
        assert quality.technical_accuracy == 0.9

    def test_counts(self) -> None:
        quality = QualityAssessor().assess("One. Two! Three?")
        assert quality.completeness == pytest.approx(0.03)
        assert quality.organization == pytest.approx(0.3)

    def test_capped(self) -> None:
        quality = QualityAssessor().assess("Word. " * 120)
        assert quality.completeness == 1.0
        assert quality.organization == 1.0

    def test_sentence_count_ignores_blank_pieces(self) -> None:
        assert count_sentences("...") == 0
        assert count_sentences("Done.  ") == 1


# ============================================================================
# ContentPurposeAnalyzer Tests
# ============================================================================


class TestContentPurposeAnalyzer:
    """Tests for the composed purpose pipeline."""

    def test_full_result(self) -> None:
        result = ContentPurposeAnalyzer().analyze(
            "Urgent: the client reported a problem with the master. Fix it today."
        )

        assert result.purpose == ContentPurpose.TROUBLESHOOTING
        assert result.audience == TargetAudience.CLIENT
        assert result.actionability == ActionabilityLevel.IMMEDIATE_ACTION
        assert result.urgency.time_sensitivity == TimeSensitivity.IMMEDIATE
        assert result.quality.organization == pytest.approx(0.2)

    def test_empty_text(self) -> None:
        result = ContentPurposeAnalyzer().analyze("")

        assert result.purpose == ContentPurpose.INFORMATIVE
        assert result.audience == TargetAudience.GENERAL
        assert result.actionability == ActionabilityLevel.REFERENCE_ONLY
        assert result.urgency.time_sensitivity == TimeSensitivity.ROUTINE
        assert result.sentiment.label == SentimentLabel.NEUTRAL

    def test_to_dict(self) -> None:
        data = ContentPurposeAnalyzer().analyze("Please approve the budget").to_dict()

        assert data["purpose"] == "decision_making"
        assert data["audience"] == "general"
        assert data["urgency"]["critical_issues"] == []
        assert set(data["quality"]) == {"completeness", "clarity", "organization", "technical_accuracy"}
