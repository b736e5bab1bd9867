"""Core components for audiolex."""

from __future__ import annotations

from .intent import (
    ClassificationContext,
    Intent,
    IntentResult,
    ModelManager,
    PurposeResult,
    QueryResult,
    ValidationReport,
    create_manager,
)

__all__ = [
    "ClassificationContext",
    "Intent",
    "IntentResult",
    "ModelManager",
    "PurposeResult",
    "QueryResult",
    "ValidationReport",
    "create_manager",
]
