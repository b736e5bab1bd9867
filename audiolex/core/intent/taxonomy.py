"""Intent taxonomy and result records for audiolex.

This module defines the closed enumerations shared by every classifier in the
engine, plus the records produced by intent classification. The string value
of each member is the token callers persist and display, so values must never
change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Intent(str, Enum):
    """Audio domain actions recognised by the intent classifier.

    Declaration order is also the Pattern Table order, which decides ties.
    """

    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    SETUP_MICROPHONE = "setup_microphone"
    APPLY_EQ = "apply_eq"
    ADD_COMPRESSION = "add_compression"
    EXPORT_AUDIO = "export_audio"
    GET_INFO = "get_info"
    RECOMMEND_SETTINGS = "recommend_settings"
    TROUBLESHOOT = "troubleshoot"
    CREATE_PLAN = "create_plan"

    @property
    def description(self) -> str:
        """Human readable description of the intent."""
        return INTENT_DESCRIPTIONS[self]


INTENT_DESCRIPTIONS: dict[Intent, str] = {
    Intent.START_RECORDING: "Start recording audio on specified track",
    Intent.STOP_RECORDING: "Stop current recording operation",
    Intent.SETUP_MICROPHONE: "Configure microphone settings and placement",
    Intent.APPLY_EQ: "Apply equalization to audio track",
    Intent.ADD_COMPRESSION: "Add compression to audio track",
    Intent.EXPORT_AUDIO: "Export audio to file",
    Intent.GET_INFO: "Get information about audio topics",
    Intent.RECOMMEND_SETTINGS: "Recommend settings for a task",
    Intent.TROUBLESHOOT: "Diagnose and fix an audio problem",
    Intent.CREATE_PLAN: "Create a plan or workflow",
}


class QueryCategory(str, Enum):
    """Broad category of a user query."""

    FACTUAL = "factual"
    TECHNICAL = "technical"
    PROCEDURAL = "procedural"
    COMPARATIVE = "comparative"
    CREATIVE = "creative"
    TROUBLESHOOTING = "troubleshooting"
    RECOMMENDATION = "recommendation"
    COST = "cost"
    WORKFLOW = "workflow"


class ComplexityLevel(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"
    EXPERT = "expert"


class ExpertiseLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"
    EXPERT = "expert"


class AudioSubdomain(str, Enum):
    """Audio production subdomains.

    Only the first six members are scored by the domain analyzer; the rest
    exist so persisted tokens from other producers stay parseable.
    """

    RECORDING = "recording"
    MIXING = "mixing"
    MASTERING = "mastering"
    EDITING = "editing"
    LIVE_SOUND = "live_sound"
    POST_PRODUCTION = "post_production"
    SOUND_DESIGN = "sound_design"
    BROADCAST = "broadcast"
    GAME_AUDIO = "game_audio"
    FILM_AUDIO = "film_audio"
    MUSIC_PRODUCTION = "music_production"
    PODCASTING = "podcasting"
    STREAMING = "streaming"
    FORENSICS = "audio_forensics"
    RESTORATION = "audio_restoration"


class EntityType(str, Enum):
    BRAND = "brand"
    EQUIPMENT = "equipment"
    SOFTWARE = "software"
    PARAMETER = "parameter"
    PERSON = "person"
    ORGANIZATION = "organization"
    LOCATION = "location"
    DATE = "date"
    TIME = "time"
    MONEY = "money"


class ContentPurpose(str, Enum):
    INFORMATIVE = "informative"
    INSTRUCTIONAL = "instructional"
    TROUBLESHOOTING = "troubleshooting"
    REFERENCE = "reference"
    ARCHIVAL = "archival"
    DECISION_MAKING = "decision_making"
    COMMUNICATION = "communication"
    PLANNING = "planning"
    EVALUATION = "evaluation"
    DOCUMENTATION = "documentation"


class TargetAudience(str, Enum):
    ENGINEER = "engineer"
    PRODUCER = "producer"
    CLIENT = "client"
    MUSICIAN = "musician"
    STUDENT = "student"
    TECHNICIAN = "technician"
    MANAGER = "manager"
    GENERAL = "general"
    LEGAL = "legal"
    ARCHIVIST = "archivist"


class ActionabilityLevel(str, Enum):
    IMMEDIATE_ACTION = "immediate_action"
    SCHEDULED_ACTION = "scheduled_action"
    CONDITIONAL_ACTION = "conditional_action"
    REFERENCE_ONLY = "reference_only"
    ARCHIVAL = "archival"
    INFORMATIONAL = "informational"


class TimeSensitivity(str, Enum):
    IMMEDIATE = "immediate"
    SAME_DAY = "same_day"
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"
    THIS_MONTH = "this_month"
    ROUTINE = "routine"
    NO_DEADLINE = "no_deadline"


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class IntentConfidence:
    """Score thresholds used by the intent classifier.

    - MINIMUM (0.30): the best raw score must exceed this or the result
      falls back to get_info with zero confidence
    - ALTERNATIVE (0.20): runners-up must exceed this to be listed
    """

    MINIMUM = 0.30
    ALTERNATIVE = 0.20
    MAX_ALTERNATIVES = 3


@dataclass(frozen=True)
class ContextFeatures:
    """Lightweight signals derived from the raw text.

    Attributes:
        domain_relevance: Share of the audio keyword list present, 0.0-1.0
        technical_complexity: Share of the technical term list present, 0.0-1.0
        matched_audio_keywords: Audio keywords found, in list order
        matched_equipment: Equipment brands found, in list order
    """

    domain_relevance: float = 0.0
    technical_complexity: float = 0.0
    matched_audio_keywords: tuple[str, ...] = ()
    matched_equipment: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain_relevance": self.domain_relevance,
            "technical_complexity": self.technical_complexity,
            "matched_audio_keywords": list(self.matched_audio_keywords),
            "matched_equipment": list(self.matched_equipment),
        }


@dataclass(frozen=True)
class IntentAlternative:
    """A runner-up intent and its raw score."""

    intent: Intent
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {"intent": self.intent.value, "confidence": self.confidence}


@dataclass(frozen=True)
class IntentResult:
    """Result of intent classification.

    Attributes:
        intent: Winning intent, or get_info when nothing scored high enough
        confidence: Adjusted confidence 0.0-1.0 (0.0 for the fallback)
        alternatives: Up to three runners-up, highest raw score first
        context: Features the score was computed from
        score: Raw pattern score of the winner (0.0 for the fallback)
    """

    intent: Intent
    confidence: float
    alternatives: tuple[IntentAlternative, ...] = ()
    context: ContextFeatures = field(default_factory=ContextFeatures)
    score: float = 0.0

    @classmethod
    def fallback(cls, context: ContextFeatures) -> "IntentResult":
        """Create the get_info fallback used when no pattern clears the minimum.

        Args:
            context: Features computed for the input text

        Returns:
            IntentResult with GET_INFO intent, zero confidence, no alternatives
        """
        return cls(intent=Intent.GET_INFO, confidence=0.0, context=context)

    @property
    def is_fallback(self) -> bool:
        """Check whether this is the no-match fallback result."""
        return self.intent == Intent.GET_INFO and self.confidence == 0.0 and not self.alternatives

    def to_dict(self) -> dict[str, Any]:
        return {
            "intent": self.intent.value,
            "confidence": self.confidence,
            "alternatives": [alt.to_dict() for alt in self.alternatives],
            "context": self.context.to_dict(),
        }
