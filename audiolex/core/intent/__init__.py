"""Lexical intent and content classification for audio production text.

This package scores caller supplied text against fixed keyword tables to
produce three independent views:

1. Intent (weighted keyword/phrase patterns) - what action the user wants
2. Query profile - category, complexity, expertise, subdomain, entities
3. Content purpose - purpose, audience, actionability, urgency, sentiment

Nothing is learned at runtime; every result is a deterministic function of
the text and the tables built at construction.

Example usage:
    ```python
    from audiolex.core.intent import Intent, ModelManager

    manager = ModelManager()

    result = manager.classify("Start recording the lead vocals with the Neumann U87")
    assert result.intent == Intent.START_RECORDING

    query = manager.analyze_query("Why is my mix sounding muddy?")
    print(query.category, query.domain.subdomain)
    ```
"""

from .context import (
    AUDIO_KEYWORDS,
    EQUIPMENT_BRANDS,
    TECHNICAL_TERMS,
    ClassificationContext,
    ConfidenceCalculator,
    ContextAnalyzer,
)
from .entities import (
    ENTITY_BRANDS,
    QUERY_KEYWORDS,
    EntityExtractor,
    QueryEntity,
    extract_entities,
)
from .manager import (
    TRAINING_EXAMPLES,
    ModelManager,
    TrainingExample,
    ValidationMiss,
    ValidationReport,
    create_manager,
)
from .patterns import (
    INTENT_PATTERNS,
    IntentClassifier,
    IntentPattern,
)
from .purpose import (
    ActionabilityAssessor,
    AudienceAnalyzer,
    ContentPurposeAnalyzer,
    PurposeClassifier,
    PurposeResult,
    QualityAssessment,
    QualityAssessor,
    SentimentAnalysis,
    SentimentAnalyzer,
    UrgencyAnalysis,
    UrgencyAnalyzer,
)
from .query import (
    CategoryClassifier,
    ComplexityAnalysis,
    ComplexityAnalyzer,
    DomainAnalysis,
    DomainAnalyzer,
    ExpertiseEstimator,
    QueryAnalyzer,
    QueryResult,
)
from .taxonomy import (
    ActionabilityLevel,
    AudioSubdomain,
    ComplexityLevel,
    ContentPurpose,
    ContextFeatures,
    EntityType,
    ExpertiseLevel,
    Intent,
    IntentAlternative,
    IntentConfidence,
    IntentResult,
    QueryCategory,
    SentimentLabel,
    TargetAudience,
    TimeSensitivity,
)

__all__ = [
    # Facade
    "ModelManager",
    "create_manager",
    # Validation
    "TRAINING_EXAMPLES",
    "TrainingExample",
    "ValidationMiss",
    "ValidationReport",
    # Intent classification
    "INTENT_PATTERNS",
    "IntentClassifier",
    "IntentPattern",
    "ContextAnalyzer",
    "ConfidenceCalculator",
    "ClassificationContext",
    "AUDIO_KEYWORDS",
    "TECHNICAL_TERMS",
    "EQUIPMENT_BRANDS",
    # Query analysis
    "QueryAnalyzer",
    "QueryResult",
    "CategoryClassifier",
    "ComplexityAnalyzer",
    "ComplexityAnalysis",
    "ExpertiseEstimator",
    "DomainAnalyzer",
    "DomainAnalysis",
    "EntityExtractor",
    "QueryEntity",
    "extract_entities",
    "ENTITY_BRANDS",
    "QUERY_KEYWORDS",
    # Content purpose
    "ContentPurposeAnalyzer",
    "PurposeResult",
    "PurposeClassifier",
    "AudienceAnalyzer",
    "ActionabilityAssessor",
    "UrgencyAnalyzer",
    "UrgencyAnalysis",
    "SentimentAnalyzer",
    "SentimentAnalysis",
    "QualityAssessor",
    "QualityAssessment",
    # Taxonomy
    "Intent",
    "IntentConfidence",
    "IntentResult",
    "IntentAlternative",
    "ContextFeatures",
    "QueryCategory",
    "ComplexityLevel",
    "ExpertiseLevel",
    "AudioSubdomain",
    "EntityType",
    "ContentPurpose",
    "TargetAudience",
    "ActionabilityLevel",
    "TimeSensitivity",
    "SentimentLabel",
]
