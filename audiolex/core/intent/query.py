"""Query analysis pipeline for audiolex.

Four independent analyzers (category, complexity, expertise, domain) and
the entity/keyword extractors are composed into one QueryResult. All
lookup tables are ordered tuples; the first highest score wins.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .context import ClassificationContext, domain_relevance, find_terms, term_ratio
from .entities import EntityExtractor, QueryEntity
from .taxonomy import AudioSubdomain, ComplexityLevel, ExpertiseLevel, QueryCategory

logger = logging.getLogger(__name__)

CATEGORY_PATTERNS: tuple[tuple[QueryCategory, tuple[str, ...]], ...] = (
    (QueryCategory.FACTUAL, ("what is", "tell me about", "define", "explain")),
    (
        QueryCategory.TECHNICAL,
        ("how to", "settings", "parameters", "configure", "frequency", "hz", "db"),
    ),
    (QueryCategory.PROCEDURAL, ("steps", "process", "workflow", "how do i", "checklist")),
    (QueryCategory.COMPARATIVE, ("compare", "versus", "vs", "difference")),
    (QueryCategory.CREATIVE, ("creative", "opinion", "feel", "style")),
    (QueryCategory.TROUBLESHOOTING, ("problem", "issue", "fix", "troubleshoot")),
    (QueryCategory.RECOMMENDATION, ("recommend", "suggest", "best", "should")),
    (QueryCategory.COST, ("price", "cost", "budget", "cheap", "expensive", "$")),
)

COMPLEXITY_TERMS: tuple[str, ...] = (
    "frequency",
    "spectrum",
    "compression",
    "eq",
    "threshold",
    "ratio",
    "attack",
    "release",
    "automation",
    "plugin",
)

# (upper bound, level); scores at or above the last bound are expert
COMPLEXITY_LEVELS: tuple[tuple[float, ComplexityLevel], ...] = (
    (0.2, ComplexityLevel.BASIC),
    (0.4, ComplexityLevel.INTERMEDIATE),
    (0.6, ComplexityLevel.ADVANCED),
    (0.8, ComplexityLevel.PROFESSIONAL),
)

BASIC_MARKERS: tuple[str, ...] = ("help", "how to", "what is", "explain simply")
ADVANCED_MARKERS: tuple[str, ...] = (
    "optimize",
    "fine-tune",
    "professional",
    "industry standard",
)
EXPERT_MARKERS: tuple[str, ...] = ("vintage", "boutique", "esoteric", "specialized")

SUBDOMAIN_KEYWORDS: tuple[tuple[AudioSubdomain, tuple[str, ...]], ...] = (
    (AudioSubdomain.RECORDING, ("record", "microphone", "preamp", "tracking", "capture")),
    (AudioSubdomain.MIXING, ("mix", "balance", "eq", "compression", "reverb", "effects")),
    (AudioSubdomain.MASTERING, ("master", "final", "loudness", "limiting", "delivery")),
    (AudioSubdomain.EDITING, ("edit", "trim", "comp", "arrange", "timing")),
    (AudioSubdomain.LIVE_SOUND, ("live", "venue", "concert", "reinforcement", "stage")),
    (AudioSubdomain.POST_PRODUCTION, ("film", "video", "adr", "foley", "post")),
)

CATEGORY_THRESHOLD = 0.1
SUBDOMAIN_THRESHOLD = 0.2
DEFAULT_SUBDOMAIN_CONFIDENCE = 0.1


@dataclass(frozen=True)
class ComplexityAnalysis:
    level: ComplexityLevel
    score: float
    word_count: int
    technical_terms_found: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "score": self.score,
            "word_count": self.word_count,
            "technical_terms_found": self.technical_terms_found,
        }


@dataclass(frozen=True)
class DomainAnalysis:
    """Best matching subdomain plus overall audio relevance.

    Attributes:
        subdomain: Winning subdomain, recording when nothing clears 0.2
        confidence: Keyword ratio of the winner (0.1 for the default)
        relevance: Share of the audio keyword list present in the text
    """

    subdomain: AudioSubdomain
    confidence: float
    relevance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "subdomain": self.subdomain.value,
            "confidence": self.confidence,
            "relevance": self.relevance,
        }


@dataclass(frozen=True)
class QueryResult:
    """Full query analysis."""

    category: QueryCategory
    complexity: ComplexityAnalysis
    expertise: ExpertiseLevel
    domain: DomainAnalysis
    entities: tuple[QueryEntity, ...] = ()
    keywords: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "complexity": self.complexity.to_dict(),
            "expertise": self.expertise.value,
            "domain": self.domain.to_dict(),
            "entities": [entity.to_dict() for entity in self.entities],
            "keywords": list(self.keywords),
        }


def count_words(text: str) -> int:
    """Number of whitespace separated words."""
    return len(text.split())


class CategoryClassifier:
    """Pick the query category with the highest phrase match ratio."""

    def classify(self, text: str) -> QueryCategory:
        text_lower = text.lower()
        best = QueryCategory.FACTUAL
        best_score = 0.0
        for category, phrases in CATEGORY_PATTERNS:
            score = term_ratio(text_lower, phrases)
            if score > best_score:
                best, best_score = category, score

        if best_score > CATEGORY_THRESHOLD:
            return best
        logger.debug("No category above threshold, defaulting to factual")
        return QueryCategory.FACTUAL


class ComplexityAnalyzer:
    def analyze(self, text: str) -> ComplexityAnalysis:
        text_lower = text.lower()
        found = len(find_terms(text_lower, COMPLEXITY_TERMS))
        score = found / len(COMPLEXITY_TERMS)

        level = ComplexityLevel.EXPERT
        for bound, candidate in COMPLEXITY_LEVELS:
            if score < bound:
                level = candidate
                break

        return ComplexityAnalysis(
            level=level,
            score=score,
            word_count=count_words(text),
            technical_terms_found=found,
        )


class ExpertiseEstimator:
    """Estimate user expertise from marker phrases.

    An expertise level supplied in the context always wins.
    """

    def estimate(self, text: str, context: ClassificationContext) -> ExpertiseLevel:
        if context.expertise is not None:
            return context.expertise

        text_lower = text.lower()
        basic = len(find_terms(text_lower, BASIC_MARKERS))
        advanced = len(find_terms(text_lower, ADVANCED_MARKERS))
        expert = len(find_terms(text_lower, EXPERT_MARKERS))

        if expert > 0:
            return ExpertiseLevel.EXPERT
        if advanced > basic:
            return ExpertiseLevel.ADVANCED
        if basic > 0:
            return ExpertiseLevel.BEGINNER
        return ExpertiseLevel.INTERMEDIATE


class DomainAnalyzer:
    def analyze(self, text: str) -> DomainAnalysis:
        text_lower = text.lower()
        relevance = domain_relevance(text)

        best: AudioSubdomain | None = None
        best_score = 0.0
        for subdomain, keywords in SUBDOMAIN_KEYWORDS:
            score = term_ratio(text_lower, keywords)
            if best is None or score > best_score:
                best, best_score = subdomain, score

        if best is not None and best_score > SUBDOMAIN_THRESHOLD:
            return DomainAnalysis(subdomain=best, confidence=best_score, relevance=relevance)

        logger.debug("No subdomain above threshold, defaulting to recording")
        return DomainAnalysis(
            subdomain=AudioSubdomain.RECORDING,
            confidence=DEFAULT_SUBDOMAIN_CONFIDENCE,
            relevance=relevance,
        )


class QueryAnalyzer:
    """Compose the query analyzers into a single QueryResult."""

    def __init__(self) -> None:
        self.category_classifier = CategoryClassifier()
        self.complexity_analyzer = ComplexityAnalyzer()
        self.expertise_estimator = ExpertiseEstimator()
        self.domain_analyzer = DomainAnalyzer()
        self.entity_extractor = EntityExtractor()

    def analyze(
        self,
        text: str,
        context: ClassificationContext | Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Analyze a user query.

        Args:
            text: Query text
            context: Caller context; an explicit expertise overrides estimation

        Returns:
            QueryResult with defaults for anything that did not match
        """
        ctx = ClassificationContext.from_mapping(context)
        return QueryResult(
            category=self.category_classifier.classify(text),
            complexity=self.complexity_analyzer.analyze(text),
            expertise=self.expertise_estimator.estimate(text, ctx),
            domain=self.domain_analyzer.analyze(text),
            entities=tuple(self.entity_extractor.extract(text)),
            keywords=tuple(self.entity_extractor.extract_keywords(text)),
        )
