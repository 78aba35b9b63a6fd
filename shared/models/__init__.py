"""
Data models for the prompt generation pipeline.

This module exports all Pydantic models used across pipeline modules.
"""

from .prompt import (
    AUTO_STYLE_LABEL,
    DEFAULT_COUNT,
    MAX_REFERENCE_IMAGES,
    SUPPORTED_COUNTS,
    AutoStyle,
    ExplicitStyle,
    GenerationRequest,
    PromptAnalysis,
    PromptSet,
    ReferenceImage,
    StyleKind,
    StyleSelection,
)

__all__ = [
    # Constants
    "AUTO_STYLE_LABEL",
    "DEFAULT_COUNT",
    "MAX_REFERENCE_IMAGES",
    "SUPPORTED_COUNTS",
    # Style models
    "StyleKind",
    "ExplicitStyle",
    "AutoStyle",
    "StyleSelection",
    # Request models
    "ReferenceImage",
    "GenerationRequest",
    # Result models
    "PromptAnalysis",
    "PromptSet",
]
