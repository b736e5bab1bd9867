"""Content purpose pipeline for audiolex.

Purpose, audience and actionability use fixed-priority rules: the first
rule that matches wins and later matches are ignored. That loss of
information is accepted; the rule order is part of the behaviour.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from .context import ClassificationContext, find_terms
from .query import count_words
from .taxonomy import (
    ActionabilityLevel,
    ContentPurpose,
    SentimentLabel,
    TargetAudience,
    TimeSensitivity,
)

# (trigger words, result) checked in order, first hit wins
PURPOSE_RULES: tuple[tuple[tuple[str, ...], ContentPurpose], ...] = (
    (("tutorial", "how to"), ContentPurpose.INSTRUCTIONAL),
    (("problem", "issue"), ContentPurpose.TROUBLESHOOTING),
    (("decision", "approve"), ContentPurpose.DECISION_MAKING),
    (("reference", "information"), ContentPurpose.REFERENCE),
)

AUDIENCE_RULES: tuple[tuple[tuple[str, ...], TargetAudience], ...] = (
    (("client", "customer"), TargetAudience.CLIENT),
    (("student", "learn"), TargetAudience.STUDENT),
    (("producer", "creative"), TargetAudience.PRODUCER),
    (("musician", "performer"), TargetAudience.MUSICIAN),
    (("technical", "engineering"), TargetAudience.ENGINEER),
)

ACTIONABILITY_RULES: tuple[tuple[tuple[str, ...], ActionabilityLevel], ...] = (
    (("urgent", "immediately"), ActionabilityLevel.IMMEDIATE_ACTION),
    (("schedule", "deadline"), ActionabilityLevel.SCHEDULED_ACTION),
    (("if", "when"), ActionabilityLevel.CONDITIONAL_ACTION),
)

URGENT_WORDS: tuple[str, ...] = ("urgent", "asap", "immediately", "emergency")
TIME_WORDS: tuple[str, ...] = ("today", "tomorrow", "deadline", "due")

POSITIVE_WORDS: tuple[str, ...] = ("good", "great", "excellent", "love", "happy")
NEGATIVE_WORDS: tuple[str, ...] = ("bad", "terrible", "hate", "angry", "frustrated")

SENTIMENT_CONFIDENCE = 0.7
# Not computed; reported as fixed estimates
CLARITY_ESTIMATE = 0.8
TECHNICAL_ACCURACY_ESTIMATE = 0.9

RuleResult = TypeVar("RuleResult")

_SENTENCE_SPLIT = re.compile(r"[.!?]")


def _first_rule(
    text_lower: str,
    rules: Sequence[tuple[tuple[str, ...], RuleResult]],
    default: RuleResult,
) -> RuleResult:
    """Return the result of the first rule with a trigger in text_lower, else default."""
    for triggers, result in rules:
        if any(trigger in text_lower for trigger in triggers):
            return result
    return default


def count_sentences(text: str) -> int:
    """Number of non-blank pieces between sentence terminators."""
    return sum(1 for piece in _SENTENCE_SPLIT.split(text) if piece.strip())


@dataclass(frozen=True)
class UrgencyAnalysis:
    """Urgency signals.

    Attributes:
        level: Weighted urgent/time word count, capped at 1.0
        time_sensitivity: Coarse deadline bucket
        critical_issues: Urgent words found, in list order
    """

    level: float
    time_sensitivity: TimeSensitivity
    critical_issues: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "time_sensitivity": self.time_sensitivity.value,
            "critical_issues": list(self.critical_issues),
        }


@dataclass(frozen=True)
class SentimentAnalysis:
    score: float
    confidence: float
    label: SentimentLabel

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "confidence": self.confidence, "label": self.label.value}


@dataclass(frozen=True)
class QualityAssessment:
    """Content quality estimate.

    clarity and technical_accuracy are fixed estimates, not measurements.
    """

    completeness: float
    clarity: float
    organization: float
    technical_accuracy: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "completeness": self.completeness,
            "clarity": self.clarity,
            "organization": self.organization,
            "technical_accuracy": self.technical_accuracy,
        }


@dataclass(frozen=True)
class PurposeResult:
    purpose: ContentPurpose
    audience: TargetAudience
    actionability: ActionabilityLevel
    urgency: UrgencyAnalysis
    sentiment: SentimentAnalysis
    quality: QualityAssessment

    def to_dict(self) -> dict[str, Any]:
        return {
            "purpose": self.purpose.value,
            "audience": self.audience.value,
            "actionability": self.actionability.value,
            "urgency": self.urgency.to_dict(),
            "sentiment": self.sentiment.to_dict(),
            "quality": self.quality.to_dict(),
        }


class PurposeClassifier:
    def classify(self, text: str) -> ContentPurpose:
        return _first_rule(text.lower(), PURPOSE_RULES, ContentPurpose.INFORMATIVE)


class AudienceAnalyzer:
    def analyze(self, text: str) -> TargetAudience:
        return _first_rule(text.lower(), AUDIENCE_RULES, TargetAudience.GENERAL)


class ActionabilityAssessor:
    def assess(self, text: str) -> ActionabilityLevel:
        # "if" also matches inside words such as "specific"
        return _first_rule(text.lower(), ACTIONABILITY_RULES, ActionabilityLevel.REFERENCE_ONLY)


class UrgencyAnalyzer:
    def analyze(self, text: str) -> UrgencyAnalysis:
        text_lower = text.lower()
        urgent = find_terms(text_lower, URGENT_WORDS)
        timed = find_terms(text_lower, TIME_WORDS)

        level = min(len(urgent) * 0.3 + len(timed) * 0.2, 1.0)

        if urgent:
            sensitivity = TimeSensitivity.IMMEDIATE
        elif "today" in text_lower:
            sensitivity = TimeSensitivity.SAME_DAY
        elif timed:
            sensitivity = TimeSensitivity.THIS_WEEK
        else:
            sensitivity = TimeSensitivity.ROUTINE

        return UrgencyAnalysis(
            level=level,
            time_sensitivity=sensitivity,
            critical_issues=tuple(urgent),
        )


class SentimentAnalyzer:
    """Word-list sentiment normalised by word count."""

    def analyze(self, text: str) -> SentimentAnalysis:
        text_lower = text.lower()
        positive = len(find_terms(text_lower, POSITIVE_WORDS))
        negative = len(find_terms(text_lower, NEGATIVE_WORDS))
        score = (positive - negative) / max(count_words(text), 1)

        if score > 0.1:
            label = SentimentLabel.POSITIVE
        elif score < -0.1:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        return SentimentAnalysis(score=score, confidence=SENTIMENT_CONFIDENCE, label=label)


class QualityAssessor:
    def assess(self, text: str) -> QualityAssessment:
        return QualityAssessment(
            completeness=min(count_words(text) / 100.0, 1.0),
            clarity=CLARITY_ESTIMATE,
            organization=min(count_sentences(text) / 10.0, 1.0),
            technical_accuracy=TECHNICAL_ACCURACY_ESTIMATE,
        )


class ContentPurposeAnalyzer:
    """Compose the purpose analyzers into a single PurposeResult."""

    def __init__(self) -> None:
        self.purpose_classifier = PurposeClassifier()
        self.audience_analyzer = AudienceAnalyzer()
        self.actionability_assessor = ActionabilityAssessor()
        self.urgency_analyzer = UrgencyAnalyzer()
        self.sentiment_analyzer = SentimentAnalyzer()
        self.quality_assessor = QualityAssessor()

    def analyze(
        self,
        text: str,
        context: ClassificationContext | Mapping[str, Any] | None = None,
    ) -> PurposeResult:
        """Analyze the purpose and character of a piece of content.

        Args:
            text: Content text
            context: Caller context, not read by the purpose rules

        Returns:
            PurposeResult
        """
        return PurposeResult(
            purpose=self.purpose_classifier.classify(text),
            audience=self.audience_analyzer.analyze(text),
            actionability=self.actionability_assessor.assess(text),
            urgency=self.urgency_analyzer.analyze(text),
            sentiment=self.sentiment_analyzer.analyze(text),
            quality=self.quality_assessor.assess(text),
        )
