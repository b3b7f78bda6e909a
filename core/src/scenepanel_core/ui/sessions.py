from __future__ import annotations

import logging
import secrets
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

import httpx

from scenepanel_core.config import UiConfig
from scenepanel_core.ui.controller import ClientFactory, PanelController
from scenepanel_core.ui.forms import FormRegistry

logger = logging.getLogger(__name__)


class PanelSessions:
    """In-memory panel sessions, one per page load.

    Oldest sessions are dropped once ``max_sessions`` is reached.
    """

    def __init__(
        self,
        config: UiConfig,
        client_factory: ClientFactory,
        *,
        new_session_id: Callable[[], str] = lambda: secrets.token_urlsafe(12),
    ) -> None:
        self._config = config
        self._client_factory = client_factory
        self._forms = FormRegistry.from_config(config)
        self._new_session_id = new_session_id
        self._sessions: OrderedDict[str, PanelController] = OrderedDict()

    @property
    def forms(self) -> FormRegistry:
        return self._forms

    def open(self) -> str:
        session_id = self._new_session_id()
        self._sessions[session_id] = PanelController(
            self._client_factory,
            forms=self._forms,
            delete_endpoint=self._config.delete_endpoint,
        )
        while len(self._sessions) > self._config.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted panel session %s", evicted)
        return session_id

    def get(self, session_id: str) -> PanelController:
        return self._sessions[session_id]

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


def build_client_factory(app: Any, config: UiConfig) -> ClientFactory:
    """HTTP clients for the panel's requests to the scene API.

    Without ``api_base_url`` the panel calls ``app`` in-process. Requests never time out.
    """

    base_url = config.api_base_url
    if base_url:
        return lambda: httpx.AsyncClient(base_url=base_url, timeout=None)
    return lambda: httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://scenepanel",
        timeout=None,
    )
