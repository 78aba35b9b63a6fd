"""
Prompt Master module public API.

Exposes the high-level generation functions and session for callers.
"""

from shared.logging import get_logger

from .main import generate_prompts
from .process import generate
from .session import PromptSession, SessionState

__all__ = ["generate_prompts", "generate", "PromptSession", "SessionState"]

# Configure module-level logger early so submodules can import it
logger = get_logger("prompt_master")
