"""
app_state.py — Client application state: progress, the routing gate, and reloads.

AppState holds the session's progress as last read from the API and the
views (controllers) that depend on it. Failure handling follows one rule per
kind of call:

    reads   -> logged, treated as "no data"
    writes  -> logged warning, method returns False; nothing is retried
    onboarding completion failure -> flow aborted, user stays on /onboarding

reload() is the explicit "reload progress and every dependent view" command
used after an area switch.
"""
import logging
from datetime import date
from typing import Any, Optional, Protocol

from fives.client.gateway import GatewayError, PersistenceGateway
from fives.client.routing import resolve_route

logger = logging.getLogger(__name__)


class View(Protocol):
    def reset(self) -> None: ...

    async def load(self) -> None: ...


class AppState:
    def __init__(self, gateway: PersistenceGateway) -> None:
        self.gateway = gateway
        self.progress: Optional[dict[str, Any]] = None
        self.areas: list[dict[str, Any]] = []
        self.loading = True
        self._views: list[View] = []

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self.gateway.session_id

    @property
    def needs_onboarding(self) -> bool:
        return self.progress is None or bool(self.progress.get("needs_onboarding", True))

    @property
    def current_area(self) -> Optional[dict[str, Any]]:
        """None while onboarding, or when the area id is not in the catalog."""
        if self.progress is None:
            return None
        return self.progress.get("area")

    @property
    def current_step(self) -> Optional[str]:
        return self.progress.get("current_step") if self.progress else None

    def resolve(self, path: str) -> str:
        return resolve_route(path, self.needs_onboarding)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        self.loading = True
        try:
            self.progress = await self.gateway.get("/api/progress")
        except GatewayError as exc:
            logger.error("Error loading session session_id=%s: %s", self.session_id, exc)
            self.progress = None
        self.loading = False

    async def load_areas(self) -> list[dict[str, Any]]:
        try:
            self.areas = await self.gateway.get("/api/areas") or []
        except GatewayError as exc:
            logger.error("Error loading life areas: %s", exc)
            self.areas = []
        return self.areas

    def register_view(self, view: View) -> None:
        self._views.append(view)

    async def reload(self) -> None:
        """Drop all in-memory state and read it again from the API."""
        await self.load()
        for view in self._views:
            view.reset()
            await view.load()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def complete_onboarding(self, area_id: str, on: Optional[date] = None) -> bool:
        """
        Persist the chosen area and generate today's actions.
        Returns False (and stays on onboarding) if the API refused or failed.
        """
        payload: dict[str, Any] = {"area_id": area_id}
        if on is not None:
            payload["on"] = on.isoformat()
        try:
            self.progress = await self.gateway.post("/api/onboarding", json=payload)
        except GatewayError as exc:
            logger.error(
                "Error saving session session_id=%s area_id=%s: %s",
                self.session_id, area_id, exc,
            )
            return False
        await self.reload()
        return True

    async def switch_area(self, area_id: str) -> bool:
        try:
            await self.gateway.patch("/api/progress/area", json={"area_id": area_id})
        except GatewayError as exc:
            logger.warning(
                "Area switch failed session_id=%s area_id=%s: %s",
                self.session_id, area_id, exc,
            )
            return False
        await self.reload()
        return True

    async def advance_step(self) -> bool:
        try:
            self.progress = await self.gateway.post("/api/progress/advance")
        except GatewayError as exc:
            logger.warning("Step advance failed session_id=%s: %s", self.session_id, exc)
            return False
        return True
