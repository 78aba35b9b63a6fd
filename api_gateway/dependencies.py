"""
FastAPI dependencies.

Access to the prompt session owned by the application.
"""

from fastapi import HTTPException, Request, status

from modules.prompt_master.session import PromptSession
from shared.logging import get_logger

logger = get_logger(__name__)


def get_session(request: Request) -> PromptSession:
    """
    Return the PromptSession stored on the application state.

    Raises:
        HTTPException: If the application has not started a session
    """
    session = getattr(request.app.state, "prompt_session", None)
    if session is None:
        logger.error("Prompt session requested before startup")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Prompt session is not initialized",
        )
    return session
