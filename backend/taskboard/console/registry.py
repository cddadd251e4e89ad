from __future__ import annotations

import logging
import uuid
from collections import OrderedDict

from fastapi import Request

from ..client import AdminService
from .panel import AdminPanel

logger = logging.getLogger(__name__)

SESSION_KEY = "panel_id"


class PanelRegistry:
    """
    One AdminPanel per browser session, all sharing one AdminService.

    Holds at most `max_panels`; the least recently used panel is dropped
    first, and its session simply mounts a fresh one on the next visit.
    """

    def __init__(self, service: AdminService, max_panels: int = 256):
        if max_panels < 1:
            raise ValueError("max_panels must be at least 1")
        self.service = service
        self.max_panels = max_panels
        self._panels: OrderedDict[str, AdminPanel] = OrderedDict()

    def __len__(self) -> int:
        return len(self._panels)

    def __contains__(self, panel_id: str) -> bool:
        return panel_id in self._panels

    async def for_request(self, request: Request) -> AdminPanel:
        """The session's panel; a new one is mounted on first use."""
        panel_id = request.session.get(SESSION_KEY)
        panel = self._panels.get(panel_id) if panel_id else None
        if panel is not None:
            self._panels.move_to_end(panel_id)
            return panel

        panel_id = uuid.uuid4().hex
        panel = AdminPanel(self.service)
        self._panels[panel_id] = panel
        while len(self._panels) > self.max_panels:
            dropped, _ = self._panels.popitem(last=False)
            logger.info("Dropping idle admin panel %s", dropped)
        request.session[SESSION_KEY] = panel_id
        logger.info("Mounting admin panel %s", panel_id)
        await panel.mount()
        return panel
