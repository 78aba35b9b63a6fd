"""
Prompt generation API routes.

The app holds a single PromptSession shared by every client. The API assumes
a single user, like the browser app it serves.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from api_gateway.dependencies import get_session
from modules.prompt_master.error_classifier import ErrorKind, classify, user_message
from modules.prompt_master.session import PromptSession
from shared.errors import GenerationInProgressError, PipelineError
from shared.logging import get_logger
from shared.models.prompt import AUTO_STYLE_LABEL, DEFAULT_COUNT

logger = get_logger(__name__)

router = APIRouter()

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.MISSING_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.SCHEMA: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class GeneratePromptsRequest(BaseModel):
    title: str = ""
    count: Any = Field(default=DEFAULT_COUNT, description="Checked by the normalizer, never coerced")
    style: str = AUTO_STYLE_LABEL
    images: List[str] = Field(default_factory=list, description="Base64 image data URLs")


def _error_response(error: PipelineError, session: PromptSession) -> JSONResponse:
    kind = classify(error)
    content = {
        "code": error.code,
        "message": user_message(kind, error),
        "detail": error.message,
    }
    if kind is ErrorKind.MISSING_CREDENTIAL:
        content["has_key"] = session.state.credential_known
    if error.request_id:
        content["request_id"] = str(error.request_id)
    return JSONResponse(status_code=_STATUS_BY_KIND[kind], content=content)


@router.post("/prompts")
async def generate_prompt_set(
    body: GeneratePromptsRequest,
    session: PromptSession = Depends(get_session),
):
    """
    Generate a prompt set from a title and/or reference images.

    Returns 409 while another request on the shared session is running.
    """
    try:
        result = await session.generate(body.title, body.count, body.style, body.images)
    except GenerationInProgressError as exc:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"code": exc.code, "message": exc.message},
        )
    except PipelineError as exc:
        logger.warning(
            "Prompt generation request failed",
            extra={"error_code": exc.code, "error": exc.message},
        )
        return _error_response(exc, session)
    return result.model_dump(by_alias=True)


@router.get("/prompts/latest")
async def get_latest_prompt_set(session: PromptSession = Depends(get_session)):
    """
    Return the last successful prompt set of the shared session.
    """
    result = session.state.last_result
    if result is None:
        raise HTTPException(status_code=404, detail="No prompt set generated yet")
    return result.model_dump(by_alias=True)
