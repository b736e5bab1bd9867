"""Model manager and validation harness for audiolex.

The manager is the single entry point callers hold on to. It owns one
instance of each pipeline, applies the input length cap, and can replay the
fixed labelled corpus to report per-task accuracy.

Example usage:
    ```python
    from audiolex.core.intent import ModelManager

    manager = ModelManager()
    result = manager.classify("Start recording the lead vocals")
    report = manager.validate()
    print(report.intent_accuracy)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .context import ClassificationContext
from .patterns import IntentClassifier
from .purpose import ContentPurposeAnalyzer, PurposeResult
from .query import QueryAnalyzer, QueryResult
from .taxonomy import AudioSubdomain, ExpertiseLevel, Intent, IntentResult, QueryCategory

if TYPE_CHECKING:
    from ...config import EngineSettings

logger = logging.getLogger(__name__)

# Matches the EngineSettings default
MAX_INPUT_LENGTH = 50_000

ContextArg = ClassificationContext | Mapping[str, Any] | None


@dataclass(frozen=True)
class TrainingExample:
    """A hand-labelled example used by the validation harness."""

    text: str
    expected_intent: Intent
    expected_category: QueryCategory
    expected_expertise: ExpertiseLevel
    expected_subdomain: AudioSubdomain


TRAINING_EXAMPLES: tuple[TrainingExample, ...] = (
    TrainingExample(
        text="Start recording the lead vocals with the Neumann U87",
        expected_intent=Intent.START_RECORDING,
        expected_category=QueryCategory.PROCEDURAL,
        expected_expertise=ExpertiseLevel.INTERMEDIATE,
        expected_subdomain=AudioSubdomain.RECORDING,
    ),
    TrainingExample(
        text="Apply EQ to the bass track with a boost at 80Hz",
        expected_intent=Intent.APPLY_EQ,
        expected_category=QueryCategory.TECHNICAL,
        expected_expertise=ExpertiseLevel.ADVANCED,
        expected_subdomain=AudioSubdomain.MIXING,
    ),
    TrainingExample(
        text="What's the best microphone for recording acoustic guitar under $500?",
        expected_intent=Intent.GET_INFO,
        expected_category=QueryCategory.RECOMMENDATION,
        expected_expertise=ExpertiseLevel.INTERMEDIATE,
        expected_subdomain=AudioSubdomain.RECORDING,
    ),
    TrainingExample(
        text="Why is my mix sounding muddy and how can I fix it?",
        expected_intent=Intent.TROUBLESHOOT,
        expected_category=QueryCategory.TROUBLESHOOTING,
        expected_expertise=ExpertiseLevel.INTERMEDIATE,
        expected_subdomain=AudioSubdomain.MIXING,
    ),
    TrainingExample(
        text="Create a checklist for the mastering session",
        expected_intent=Intent.CREATE_PLAN,
        expected_category=QueryCategory.PROCEDURAL,
        expected_expertise=ExpertiseLevel.ADVANCED,
        expected_subdomain=AudioSubdomain.MASTERING,
    ),
)


@dataclass(frozen=True)
class ValidationMiss:
    """A single wrong prediction recorded by the harness."""

    text: str
    task: str
    expected: str
    predicted: str

    def to_dict(self) -> dict[str, str]:
        return {
            "text": self.text,
            "task": self.task,
            "expected": self.expected,
            "predicted": self.predicted,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Accuracy of each task over the labelled corpus.

    Attributes:
        intent_accuracy: Share of examples with the expected intent
        category_accuracy: Share of examples with the expected query category
        expertise_accuracy: Share of examples with the expected expertise
        subdomain_accuracy: Share of examples with the expected subdomain
        total_examples: Number of examples replayed
        misses: Every wrong prediction, in corpus then task order
    """

    intent_accuracy: float
    category_accuracy: float
    expertise_accuracy: float
    subdomain_accuracy: float
    total_examples: int
    misses: tuple[ValidationMiss, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "intent_accuracy": self.intent_accuracy,
            "category_accuracy": self.category_accuracy,
            "expertise_accuracy": self.expertise_accuracy,
            "subdomain_accuracy": self.subdomain_accuracy,
            "total_examples": self.total_examples,
            "misses": [miss.to_dict() for miss in self.misses],
        }


class ModelManager:
    """Façade over the intent, query and content purpose pipelines.

    Holds no mutable state after construction, so one instance can be shared
    by any number of concurrent callers.

    Attributes:
        max_input_length: Inputs longer than this are truncated before analysis
        examples: Labelled corpus replayed by validate()
    """

    def __init__(
        self,
        max_input_length: int = MAX_INPUT_LENGTH,
        examples: tuple[TrainingExample, ...] = TRAINING_EXAMPLES,
    ) -> None:
        """Initialize the manager and its pipelines.

        Args:
            max_input_length: Truncation limit for every entry point
            examples: Labelled corpus for the validation harness
        """
        self.max_input_length = max_input_length
        self.examples = examples
        self._intent_classifier = IntentClassifier()
        self._query_analyzer = QueryAnalyzer()
        self._purpose_analyzer = ContentPurposeAnalyzer()

    @classmethod
    def from_settings(cls, settings: "EngineSettings") -> "ModelManager":
        """Create a manager configured from EngineSettings."""
        return cls(max_input_length=settings.max_input_length)

    def _prepare(self, text: str) -> str:
        # Security: truncate excessively long input
        if len(text) > self.max_input_length:
            logger.warning(
                f"Input truncated from {len(text)} to {self.max_input_length} chars"
            )
            return text[: self.max_input_length]
        return text

    def classify(
        self,
        text: str,
        context: ContextArg = None,
        allowed_intents: Iterable[Intent | str] | None = None,
    ) -> IntentResult:
        """Classify the intent of text.

        Args:
            text: User input text
            context: Caller context
            allowed_intents: Optional subset of intents to consider

        Returns:
            IntentResult
        """
        return self._intent_classifier.classify(self._prepare(text), context, allowed_intents)

    def analyze_query(self, text: str, context: ContextArg = None) -> QueryResult:
        """Run the query analysis pipeline on text."""
        return self._query_analyzer.analyze(self._prepare(text), context)

    def analyze_purpose(self, text: str, context: ContextArg = None) -> PurposeResult:
        """Run the content purpose pipeline on text."""
        return self._purpose_analyzer.analyze(self._prepare(text), context)

    def validate(self) -> ValidationReport:
        """Replay the labelled corpus and report accuracy per task.

        Pure and repeatable: identical tables and corpus give identical reports.

        Returns:
            ValidationReport, all accuracies 0.0 for an empty corpus
        """
        correct = {"intent": 0, "category": 0, "expertise": 0, "subdomain": 0}
        misses: list[ValidationMiss] = []

        for example in self.examples:
            intent_result = self.classify(example.text)
            query_result = self.analyze_query(example.text)

            checks = (
                ("intent", example.expected_intent, intent_result.intent),
                ("category", example.expected_category, query_result.category),
                ("expertise", example.expected_expertise, query_result.expertise),
                ("subdomain", example.expected_subdomain, query_result.domain.subdomain),
            )
            for task, expected, predicted in checks:
                if expected == predicted:
                    correct[task] += 1
                else:
                    misses.append(
                        ValidationMiss(
                            text=example.text,
                            task=task,
                            expected=expected.value,
                            predicted=predicted.value,
                        )
                    )

        total = len(self.examples)

        def accuracy(task: str) -> float:
            return correct[task] / total if total else 0.0

        report = ValidationReport(
            intent_accuracy=accuracy("intent"),
            category_accuracy=accuracy("category"),
            expertise_accuracy=accuracy("expertise"),
            subdomain_accuracy=accuracy("subdomain"),
            total_examples=total,
            misses=tuple(misses),
        )
        logger.debug("Validation finished: %d examples, %d misses", total, len(misses))
        return report


def create_manager(settings: "EngineSettings | None" = None) -> ModelManager:
    """Factory function to create a ModelManager.

    Args:
        settings: Optional engine settings; defaults are used when omitted

    Returns:
        Configured ModelManager instance
    """
    if settings is None:
        return ModelManager()
    return ModelManager.from_settings(settings)
