"""
Model invocation boundary.

Each invoker performs exactly one model call per instruction and returns
the raw response text. No retries, timeouts or rate limiting happen here;
any failure propagates to the caller for classification.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from google import genai
from google.genai import types
from openai import AsyncOpenAI

from shared.config import settings
from shared.errors import CredentialError
from shared.logging import get_logger

from .composer import ModelInstruction
from .schemas import get_schema

logger = get_logger("prompt_master")


class ModelInvoker(Protocol):
    provider: str
    model: str

    async def invoke(self, instruction: ModelInstruction) -> str:
        ...


class GeminiInvoker:
    """Gemini structured-output call through google-genai."""

    provider = "gemini"

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model or settings.prompt_master_gemini_model
        self.temperature = (
            settings.prompt_master_temperature if temperature is None else temperature
        )
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise CredentialError("Gemini API key is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _build_contents(self, instruction: ModelInstruction) -> List[Any]:
        contents: List[Any] = [
            types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type)
            for image in instruction.reference_images
        ]
        contents.append(instruction.prompt)
        return contents

    async def invoke(self, instruction: ModelInstruction) -> str:
        client = self._get_client()
        logger.info(
            "Calling Gemini for prompt set",
            extra={
                "model": self.model,
                "image_count": instruction.image_count,
                "reference_images": len(instruction.reference_images),
            },
        )
        response = await client.aio.models.generate_content(
            model=self.model,
            contents=self._build_contents(instruction),
            config=types.GenerateContentConfig(
                system_instruction=instruction.system_instruction,
                temperature=self.temperature,
                response_mime_type="application/json",
                response_schema=get_schema("gemini"),
            ),
        )

        usage = getattr(response, "usage_metadata", None)
        logger.info(
            "Gemini call completed",
            extra={
                "model": self.model,
                "input_tokens": getattr(usage, "prompt_token_count", None),
                "output_tokens": getattr(usage, "candidates_token_count", None),
            },
        )
        return response.text or ""


class OpenAIInvoker:
    """GPT structured-output call through the OpenAI SDK."""

    provider = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model or settings.prompt_master_openai_model
        self.temperature = (
            settings.prompt_master_temperature if temperature is None else temperature
        )
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise CredentialError("OpenAI API key is not configured")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    def _build_messages(self, instruction: ModelInstruction) -> List[Dict[str, Any]]:
        content: List[Dict[str, Any]] = [{"type": "text", "text": instruction.prompt}]
        for image in instruction.reference_images:
            content.append({"type": "image_url", "image_url": {"url": image.data_url}})
        return [
            {"role": "system", "content": instruction.system_instruction},
            {"role": "user", "content": content},
        ]

    async def invoke(self, instruction: ModelInstruction) -> str:
        client = self._get_client()
        logger.info(
            "Calling OpenAI for prompt set",
            extra={
                "model": self.model,
                "image_count": instruction.image_count,
                "reference_images": len(instruction.reference_images),
            },
        )
        response = await client.chat.completions.create(
            model=self.model,
            messages=self._build_messages(instruction),
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "prompt_set",
                    "schema": get_schema("gpt"),
                    "strict": True,
                },
            },
            temperature=self.temperature,
        )

        usage = getattr(response, "usage", None)
        logger.info(
            "OpenAI call completed",
            extra={
                "model": self.model,
                "finish_reason": getattr(response.choices[0], "finish_reason", None),
                "input_tokens": getattr(usage, "prompt_tokens", None),
                "output_tokens": getattr(usage, "completion_tokens", None),
            },
        )
        return response.choices[0].message.content or ""


def build_invoker(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
) -> ModelInvoker:
    """
    Create the invoker for a provider, defaulting to the configured one.

    Args:
        provider: "gemini" or "openai"
        api_key: Key to use; falls back to the key configured for the provider
    """
    provider = provider or settings.prompt_master_provider
    if provider == "gemini":
        return GeminiInvoker(api_key=api_key or settings.gemini_api_key)
    if provider == "openai":
        return OpenAIInvoker(api_key=api_key or settings.openai_api_key)
    raise ValueError(f"Unknown model provider: {provider}")
