"""Context feature extraction and confidence adjustment for audiolex.

The context analyzer turns raw text into a small feature vector that both
the intent classifier and the confidence calculator consume. Matching is
plain case-insensitive substring presence against fixed term lists.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .taxonomy import ContextFeatures, ExpertiseLevel, IntentAlternative

logger = logging.getLogger(__name__)

AUDIO_KEYWORDS: tuple[str, ...] = (
    "audio",
    "sound",
    "music",
    "recording",
    "mixing",
    "mastering",
    "microphone",
    "speaker",
    "studio",
    "production",
    "daw",
)

TECHNICAL_TERMS: tuple[str, ...] = (
    "frequency",
    "khz",
    "hz",
    "db",
    "compression",
    "eq",
    "threshold",
    "ratio",
    "attack",
    "release",
    "reverb",
    "delay",
)

EQUIPMENT_BRANDS: tuple[str, ...] = (
    "neumann",
    "akg",
    "sennheiser",
    "shure",
    "api",
    "neve",
    "ssl",
    "waves",
    "fabfilter",
    "pro tools",
    "logic",
    "ableton",
)


def find_terms(text_lower: str, terms: Sequence[str]) -> list[str]:
    """Return the terms present in already-lowercased text, in list order."""
    return [term for term in terms if term in text_lower]


def term_ratio(text_lower: str, terms: Sequence[str]) -> float:
    """Fraction of terms present in already-lowercased text."""
    if not terms:
        return 0.0
    return len(find_terms(text_lower, terms)) / len(terms)


def domain_relevance(text: str) -> float:
    """Share of the audio keyword list found in text."""
    return term_ratio(text.lower(), AUDIO_KEYWORDS)


class ClassificationContext(BaseModel):
    """Explicit caller context for the classifiers.

    Replaces a free-form key/value map. Only the fields below have meaning;
    any other key is ignored.

    Attributes:
        expertise: Caller-declared expertise, overrides the estimator when set
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    expertise: Optional[ExpertiseLevel] = None

    @classmethod
    def from_mapping(
        cls, data: "ClassificationContext | Mapping[str, Any] | None"
    ) -> "ClassificationContext":
        """Build a context from a mapping, dropping malformed entries.

        A recognised key holding a value of the wrong type, or a string that
        names no known level, is treated as absent rather than an error.

        Args:
            data: Existing context, a plain mapping, or None

        Returns:
            ClassificationContext with only the valid fields set
        """
        if data is None:
            return cls()
        if isinstance(data, ClassificationContext):
            return data
        if not isinstance(data, Mapping):
            logger.debug("Ignoring non-mapping context of type %s", type(data).__name__)
            return cls()

        expertise: Optional[ExpertiseLevel] = None
        raw = data.get("expertise")
        if isinstance(raw, ExpertiseLevel):
            expertise = raw
        elif isinstance(raw, str):
            try:
                expertise = ExpertiseLevel(raw.strip().lower())
            except ValueError:
                logger.debug("Ignoring unknown expertise level %r", raw)
        elif raw is not None:
            logger.debug("Ignoring expertise of type %s", type(raw).__name__)

        return cls(expertise=expertise)


class ContextAnalyzer:
    """Compute ContextFeatures from raw text.

    No thresholds and no errors: empty text yields all-zero features.
    """

    def analyze(self, text: str) -> ContextFeatures:
        """Analyze text for domain and technical signals.

        Args:
            text: Raw input text

        Returns:
            ContextFeatures for the text
        """
        text_lower = text.lower()
        audio_matches = find_terms(text_lower, AUDIO_KEYWORDS)
        technical_matches = find_terms(text_lower, TECHNICAL_TERMS)

        return ContextFeatures(
            domain_relevance=len(audio_matches) / len(AUDIO_KEYWORDS),
            technical_complexity=len(technical_matches) / len(TECHNICAL_TERMS),
            matched_audio_keywords=tuple(audio_matches),
            matched_equipment=tuple(find_terms(text_lower, EQUIPMENT_BRANDS)),
        )


class ConfidenceCalculator:
    """Turn a winning raw score into a confidence value.

    Domain relevance and technical density raise confidence; a small gap to
    the best alternative pulls it back towards the raw score.
    """

    DOMAIN_BOOST = 0.2
    TECHNICAL_BOOST = 0.1
    GAP_FACTOR = 0.3

    def calculate(
        self,
        score: float,
        features: ContextFeatures,
        alternatives: Sequence[IntentAlternative],
    ) -> float:
        """Adjust a raw score into a confidence clamped to [0, 1].

        Args:
            score: Raw score of the winning intent
            features: Context features of the input
            alternatives: Runners-up, highest first

        Returns:
            Confidence 0.0-1.0
        """
        confidence = score
        confidence += features.domain_relevance * self.DOMAIN_BOOST
        confidence += features.technical_complexity * self.TECHNICAL_BOOST

        if alternatives:
            gap = score - alternatives[0].confidence
            confidence += gap * self.GAP_FACTOR

        return min(max(confidence, 0.0), 1.0)
