"""
Structured output schemas for the PromptSet payload.
Supports both Gemini and GPT structured output.

Key difference: Gemini includes propertyOrdering (non-standard),
GPT has strict additionalProperties: false on all nested objects.
Cardinality is not expressed here; the validator enforces it per request.
"""

from typing import Any, Dict

GEMINI_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "imagePrompts": {
            "type": "ARRAY",
            "items": {"type": "STRING"}
        },
        "videoPrompts": {
            "type": "ARRAY",
            "items": {"type": "STRING"}
        },
        "analysis": {
            "type": "OBJECT",
            "properties": {
                "subject": {"type": "STRING"},
                "actionType": {"type": "STRING"},
                "progression": {"type": "STRING"}
            },
            "required": ["subject", "actionType", "progression"],
            "propertyOrdering": ["subject", "actionType", "progression"]
        }
    },
    "required": ["imagePrompts", "videoPrompts", "analysis"],
    "propertyOrdering": ["analysis", "imagePrompts", "videoPrompts"]
}

GPT_SCHEMA = {
    "type": "object",
    "properties": {
        "imagePrompts": {
            "type": "array",
            "items": {"type": "string"}
        },
        "videoPrompts": {
            "type": "array",
            "items": {"type": "string"}
        },
        "analysis": {
            "type": "object",
            "properties": {
                "subject": {"type": "string"},
                "actionType": {"type": "string"},
                "progression": {"type": "string"}
            },
            "required": ["subject", "actionType", "progression"],
            "additionalProperties": False
        }
    },
    "required": ["imagePrompts", "videoPrompts", "analysis"],
    "additionalProperties": False
}


def get_schema(model_type: str) -> Dict[str, Any]:
    """
    Return the PromptSet schema for a model type ("gemini" or "gpt").

    Raises:
        ValueError: If model_type is invalid
    """
    if model_type == "gemini":
        return GEMINI_SCHEMA
    if model_type == "gpt":
        return GPT_SCHEMA
    raise ValueError(f"Invalid model_type: {model_type}. Must be 'gemini' or 'gpt'.")
