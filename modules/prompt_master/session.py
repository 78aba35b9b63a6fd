"""
Caller-side session state.

Holds the credential-known flag, the last result and the busy flag as one
immutable SessionState value that is replaced on every transition.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Sequence
from uuid import uuid4

from shared.errors import GenerationInProgressError, PipelineError
from shared.logging import get_logger, set_request_id
from shared.models.prompt import PromptSet

from .credentials import CredentialBroker
from .error_classifier import classify, requires_credential_reset
from .invoker import ModelInvoker, build_invoker
from .normalizer import ImageInput, StyleInput, normalize
from .process import ensure_typed, generate

logger = get_logger("prompt_master")

InvokerFactory = Callable[[Optional[str]], ModelInvoker]


@dataclass(frozen=True)
class SessionState:
    # Assumed true until the broker says otherwise
    credential_known: bool = True
    last_result: Optional[PromptSet] = None
    busy: bool = False


def _default_invoker_factory(api_key: Optional[str]) -> ModelInvoker:
    return build_invoker(api_key=api_key)


class PromptSession:
    """One user's generation session."""

    def __init__(
        self,
        broker: CredentialBroker,
        invoker_factory: Optional[InvokerFactory] = None,
    ):
        self.broker = broker
        self._invoker_factory = invoker_factory or _default_invoker_factory
        self.state = SessionState()

    async def initialize(self) -> SessionState:
        """Seed the credential flag from the broker."""
        try:
            selected = await self.broker.has_selected_api_key()
        except Exception:
            logger.error("Error checking key selection status", exc_info=True)
            return self.state
        self.state = replace(self.state, credential_known=selected)
        logger.info("Session initialized", extra={"credential_known": selected})
        return self.state

    async def select_key(self, api_key: Optional[str] = None) -> SessionState:
        """Trigger key selection and optimistically mark the credential as known."""
        try:
            await self.broker.open_select_key(api_key)
        except Exception:
            logger.error("Error opening key selector", exc_info=True)
            return self.state
        self.state = replace(self.state, credential_known=True)
        return self.state

    async def generate(
        self,
        title: Optional[str],
        count: Any,
        style: StyleInput,
        images: Optional[Sequence[ImageInput]] = None,
    ) -> PromptSet:
        """
        Run one generation and record its outcome in the session state.

        Invalid input leaves the previous result in place. Any attempt that
        reaches the model clears it first, and a failure leaves no result.

        Raises:
            GenerationInProgressError: Another generation is running
            PipelineError: Typed failure from the pipeline
        """
        if self.state.busy:
            raise GenerationInProgressError("A generation is already in progress")

        request_id = uuid4()
        set_request_id(request_id)
        try:
            request = normalize(title, count, style, images)
            self.state = replace(self.state, busy=True, last_result=None)
            try:
                invoker = self._invoker_factory(getattr(self.broker, "api_key", None))
                result = await generate(request, invoker, request_id=request_id)
            except Exception as exc:
                error = ensure_typed(exc, request_id=request_id)
                if requires_credential_reset(classify(error)):
                    logger.warning("Credential rejected; key selection required")
                    self.state = replace(self.state, credential_known=False)
                if error is exc:
                    raise
                raise error from exc
            finally:
                self.state = replace(self.state, busy=False)

            self.state = replace(self.state, last_result=result)
            return result
        except PipelineError as exc:
            if exc.request_id is None:
                exc.request_id = request_id
            raise
        finally:
            set_request_id(None)
