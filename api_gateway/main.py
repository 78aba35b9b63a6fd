"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api_gateway.routes import credentials, prompts
from modules.prompt_master.credentials import SettingsCredentialBroker
from modules.prompt_master.session import PromptSession
from shared.config import settings
from shared.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One session for the whole app: the API serves a single user
    session = PromptSession(SettingsCredentialBroker())
    await session.initialize()
    app.state.prompt_session = session
    logger.info(
        "Prompt Master API started",
        extra={
            "environment": settings.environment,
            "provider": settings.prompt_master_provider,
            "model": settings.active_model,
        },
    )
    yield
    app.state.prompt_session = None


app = FastAPI(title="Veo Prompt Master", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(prompts.router, prefix="/api/v1", tags=["prompts"])
app.include_router(credentials.router, prefix="/api/v1", tags=["credentials"])


@app.get("/health")
async def health():
    return {"status": "ok"}
