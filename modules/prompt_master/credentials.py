"""
Credential broker.

Exposes whether an API key is selected and a selection flow. The core only
queries and triggers it; it never chooses a key on its own.
"""

from __future__ import annotations

from typing import Optional, Protocol

from shared.config import settings
from shared.logging import get_logger

logger = get_logger("prompt_master")


class CredentialBroker(Protocol):
    async def has_selected_api_key(self) -> bool:
        ...

    async def open_select_key(self, api_key: Optional[str] = None) -> None:
        ...


class SettingsCredentialBroker:
    """Broker seeded from configuration; a key can be supplied at selection time."""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key if api_key is not None else settings.active_api_key

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    async def has_selected_api_key(self) -> bool:
        return bool(self._api_key)

    async def open_select_key(self, api_key: Optional[str] = None) -> None:
        if api_key is not None:
            api_key = api_key.strip()
            if not api_key:
                raise ValueError("API key must not be empty")
            self._api_key = api_key
            logger.info("API key selected", extra={"provider": settings.prompt_master_provider})
        else:
            # Re-read configuration, e.g. after the environment was updated
            self._api_key = settings.active_api_key
            logger.info("API key reloaded from configuration")
