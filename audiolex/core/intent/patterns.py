"""Weighted keyword pattern matching for audiolex intent classification.

Each intent owns one pattern of keywords, multi-word phrases, a weight and
optional required words. The table is an ordered tuple declared in Intent
order; when two intents score the same, the earlier entry wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .context import ClassificationContext, ConfidenceCalculator, ContextAnalyzer
from .taxonomy import (
    ContextFeatures,
    Intent,
    IntentAlternative,
    IntentConfidence,
    IntentResult,
)

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.6
PHRASE_WEIGHT = 0.4
CONTEXT_WEIGHT = 0.2


@dataclass(frozen=True)
class IntentPattern:
    """Scoring pattern for a single intent.

    Attributes:
        intent: Intent this pattern scores
        keywords: Single words, each counted once if present
        phrases: Multi-word strings, each counted once if present
        weight: Multiplier in (0, 1] applied to the summed score
        required_words: All must be present or the pattern scores 0
    """

    intent: Intent
    keywords: tuple[str, ...]
    phrases: tuple[str, ...]
    weight: float = 1.0
    required_words: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 0.0 < self.weight <= 1.0:
            raise ValueError(f"Pattern weight for {self.intent.value} must be in (0, 1]")
        # Matching is against lowercased text
        object.__setattr__(self, "keywords", tuple(k.lower() for k in self.keywords))
        object.__setattr__(self, "phrases", tuple(p.lower() for p in self.phrases))
        object.__setattr__(
            self, "required_words", tuple(w.lower() for w in self.required_words)
        )

    def has_required_words(self, text_lower: str) -> bool:
        """Check the all-of required word gate."""
        return all(word in text_lower for word in self.required_words)

    def score(self, text_lower: str, features: ContextFeatures) -> float:
        """Score lowercased text against this pattern.

        Args:
            text_lower: Input text, already lowercased
            features: Context features of the input

        Returns:
            Raw score 0.0-1.0
        """
        if not self.has_required_words(text_lower):
            return 0.0

        score = 0.0
        if self.keywords:
            matched = sum(1 for keyword in self.keywords if keyword in text_lower)
            score += matched / len(self.keywords) * KEYWORD_WEIGHT
        if self.phrases:
            matched = sum(1 for phrase in self.phrases if phrase in text_lower)
            score += matched / len(self.phrases) * PHRASE_WEIGHT
        score += features.domain_relevance * CONTEXT_WEIGHT

        return min(score * self.weight, 1.0)


# Pattern Table, one entry per Intent in declaration order.
INTENT_PATTERNS: tuple[IntentPattern, ...] = (
    IntentPattern(
        intent=Intent.START_RECORDING,
        keywords=("record", "start", "capture", "begin"),
        phrases=("start recording", "begin recording", "record audio"),
        weight=1.0,
        required_words=("record",),
    ),
    IntentPattern(
        intent=Intent.STOP_RECORDING,
        keywords=("stop", "end", "finish", "cease"),
        phrases=("stop recording", "end recording", "finish recording"),
        weight=1.0,
        required_words=("stop",),
    ),
    IntentPattern(
        intent=Intent.SETUP_MICROPHONE,
        keywords=("microphone", "mic", "setup", "position", "placement"),
        phrases=(
            "set up the mic",
            "setup microphone",
            "mic placement",
            "position the microphone",
        ),
        weight=0.9,
        required_words=("mic",),
    ),
    IntentPattern(
        intent=Intent.APPLY_EQ,
        keywords=("eq", "equalize", "frequency", "boost", "cut", "hz"),
        phrases=("apply eq", "equalize", "boost frequency", "cut frequency"),
        weight=0.9,
        required_words=("eq",),
    ),
    IntentPattern(
        intent=Intent.ADD_COMPRESSION,
        keywords=("compress", "compression", "dynamics", "ratio", "threshold"),
        phrases=("add compression", "compress audio", "apply compression"),
        weight=0.9,
        required_words=("compress",),
    ),
    IntentPattern(
        intent=Intent.EXPORT_AUDIO,
        keywords=("export", "bounce", "render", "save"),
        phrases=("export audio", "bounce mix", "render project"),
        weight=0.8,
    ),
    IntentPattern(
        intent=Intent.GET_INFO,
        keywords=("what", "tell me", "information", "explain"),
        phrases=("what is", "tell me about", "get information"),
        weight=0.7,
    ),
    IntentPattern(
        intent=Intent.RECOMMEND_SETTINGS,
        keywords=("recommend", "suggest", "best", "optimal", "settings"),
        phrases=("recommend settings", "suggest configuration", "best settings"),
        weight=0.8,
    ),
    IntentPattern(
        intent=Intent.TROUBLESHOOT,
        keywords=("problem", "issue", "fix", "troubleshoot", "why", "wrong"),
        phrases=(
            "fix problem",
            "troubleshoot issue",
            "solve problem",
            "how can i fix",
            "fix it",
        ),
        weight=0.9,
    ),
    IntentPattern(
        intent=Intent.CREATE_PLAN,
        keywords=("plan", "workflow", "steps", "checklist", "create"),
        phrases=("create a plan", "create a checklist", "plan steps"),
        weight=0.8,
    ),
)


def _coerce_intents(allowed: Iterable[Intent | str]) -> set[Intent]:
    """Convert an allow-list of intents or tokens, skipping unknown tokens."""
    intents: set[Intent] = set()
    for item in allowed:
        try:
            intents.add(Intent(item))
        except ValueError:
            logger.debug("Ignoring unknown intent %r in allow-list", item)
    return intents


class IntentClassifier:
    """Score every pattern and pick the best intent.

    Attributes:
        patterns: Ordered Pattern Table used for scoring
    """

    def __init__(self, patterns: tuple[IntentPattern, ...] = INTENT_PATTERNS) -> None:
        """Initialize the classifier.

        Args:
            patterns: Ordered Pattern Table, defaults to INTENT_PATTERNS
        """
        self.patterns = patterns
        self._context_analyzer = ContextAnalyzer()
        self._confidence = ConfidenceCalculator()

    def score_all(
        self,
        text: str,
        features: ContextFeatures,
        allowed_intents: Iterable[Intent | str] | None = None,
    ) -> list[tuple[Intent, float]]:
        """Raw score for every (allowed) pattern, in table order."""
        allowed = _coerce_intents(allowed_intents) if allowed_intents is not None else None
        text_lower = text.lower()
        return [
            (pattern.intent, pattern.score(text_lower, features))
            for pattern in self.patterns
            if allowed is None or pattern.intent in allowed
        ]

    def classify(
        self,
        text: str,
        context: ClassificationContext | Mapping[str, Any] | None = None,
        allowed_intents: Iterable[Intent | str] | None = None,
    ) -> IntentResult:
        """Classify text into a single intent with ranked alternatives.

        Args:
            text: User input text
            context: Caller context, not read by intent scoring
            allowed_intents: Optional subset of intents to consider

        Returns:
            IntentResult, the get_info fallback if nothing scores above 0.3
        """
        features = self._context_analyzer.analyze(text)
        scores = self.score_all(text, features, allowed_intents)

        best_intent: Intent | None = None
        best_score = 0.0
        for intent, score in scores:
            # Strict comparison keeps the earliest entry on ties
            if best_intent is None or score > best_score:
                best_intent, best_score = intent, score

        if best_intent is None or best_score <= IntentConfidence.MINIMUM:
            logger.debug("No intent above minimum (best=%.3f), using fallback", best_score)
            return IntentResult.fallback(features)

        runners_up = [
            (intent, score)
            for intent, score in scores
            if intent != best_intent and score > IntentConfidence.ALTERNATIVE
        ]
        # sorted() is stable, so equal scores keep table order
        runners_up.sort(key=lambda item: item[1], reverse=True)
        alternatives = tuple(
            IntentAlternative(intent=intent, confidence=score)
            for intent, score in runners_up[: IntentConfidence.MAX_ALTERNATIVES]
        )

        confidence = self._confidence.calculate(best_score, features, alternatives)
        logger.debug(
            "Classified intent %s (score=%.3f, confidence=%.3f)",
            best_intent.value,
            best_score,
            confidence,
        )

        return IntentResult(
            intent=best_intent,
            confidence=confidence,
            alternatives=alternatives,
            context=features,
            score=best_score,
        )
