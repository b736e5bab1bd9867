"""Entity and keyword extraction for audiolex query analysis.

This module pulls equipment brands and technical parameters (frequencies,
levels) out of a query, and filters a fixed audio term list down to the
terms the query mentions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .taxonomy import EntityType

# Brands recognised as entities (substring match, lowercased)
ENTITY_BRANDS: tuple[str, ...] = (
    "neumann",
    "akg",
    "api",
    "ssl",
    "waves",
    "fabfilter",
)

# Terms reported by keyword extraction
QUERY_KEYWORDS: tuple[str, ...] = (
    "microphone",
    "recording",
    "mixing",
    "mastering",
    "eq",
    "compression",
    "reverb",
    "delay",
    "plugin",
    "daw",
    "interface",
    "preamp",
)

BRAND_CONFIDENCE = 0.9
PARAMETER_CONFIDENCE = 0.95


@dataclass(frozen=True)
class QueryEntity:
    """An entity found in a query.

    Attributes:
        text: Matched text (brand name lowercased, parameters as written)
        type: Entity type
        confidence: Fixed confidence for the matching rule
    """

    text: str
    type: EntityType
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "type": self.type.value, "confidence": self.confidence}


class EntityExtractor:
    """Extract brand and parameter entities from text."""

    PATTERNS = {
        # Parameter: "80Hz", "10 kHz", "-3 dB" (sign not captured)
        "parameter": re.compile(r"(\d+)\s*(hz|khz|db)", re.IGNORECASE),
    }

    def __init__(self, brands: tuple[str, ...] = ENTITY_BRANDS) -> None:
        self._brands = tuple(brand.lower() for brand in brands)

    def extract(self, text: str) -> list[QueryEntity]:
        """Extract entities, brands first then parameters in text order.

        Args:
            text: Query text

        Returns:
            List of QueryEntity
        """
        text_lower = text.lower()
        entities = [
            QueryEntity(text=brand, type=EntityType.BRAND, confidence=BRAND_CONFIDENCE)
            for brand in self._brands
            if brand in text_lower
        ]

        for match in self.PATTERNS["parameter"].finditer(text):
            entities.append(
                QueryEntity(
                    text=match.group(0),
                    type=EntityType.PARAMETER,
                    confidence=PARAMETER_CONFIDENCE,
                )
            )

        return entities

    def extract_keywords(self, text: str) -> list[str]:
        """Return the fixed audio terms present in text, in list order."""
        text_lower = text.lower()
        return [keyword for keyword in QUERY_KEYWORDS if keyword in text_lower]


# Module-level instance for convenience
_extractor = EntityExtractor()


def extract_entities(text: str) -> list[QueryEntity]:
    """Extract entities from text using the default extractor.

    Args:
        text: Query text

    Returns:
        List of QueryEntity
    """
    return _extractor.extract(text)
