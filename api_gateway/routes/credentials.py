"""
Credential selection API routes.

The credential flag belongs to the app-wide PromptSession and is shared by
every client.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api_gateway.dependencies import get_session
from modules.prompt_master.session import PromptSession

router = APIRouter()


class SelectKeyRequest(BaseModel):
    api_key: Optional[str] = Field(default=None, description="Key to use; omit to reload configuration")


@router.get("/credentials")
async def get_credential_status(session: PromptSession = Depends(get_session)):
    """
    Report whether an API key is currently considered usable.
    """
    return {"has_key": session.state.credential_known}


@router.post("/credentials/select")
async def select_credential(
    body: SelectKeyRequest,
    session: PromptSession = Depends(get_session),
):
    """
    Trigger key selection. The key is treated as usable right away.
    """
    state = await session.select_key(body.api_key)
    return {"has_key": state.credential_known}
