"""
navigation.py — Navigation shell: top-level links, step links, area switcher.
"""
from dataclasses import dataclass
from typing import Any, Optional

from fives.client.app_state import AppState
from fives.client.routing import DAILY, DASHBOARD, REVIEW, step_path
from fives.progress.state import STEP_TITLES, Step


@dataclass(frozen=True)
class NavLink:
    label: str
    path: str
    active: bool = False


class NavigationShell:
    def __init__(self, app_state: AppState) -> None:
        self.app_state = app_state

    def links(self, current_path: Optional[str] = None) -> list[NavLink]:
        """
        Dashboard, daily mode and weekly review, then the five step pages
        for the focus area. Step links are omitted while the area is unknown.
        """
        entries = [("Home", DASHBOARD), ("Daily", DAILY), ("Weekly review", REVIEW)]
        area = self.app_state.current_area
        if area is not None:
            entries += [
                (f"{step.value.upper()} {STEP_TITLES[step]}", step_path(area["name"], step))
                for step in Step
            ]
        return [NavLink(label, path, active=(path == current_path)) for label, path in entries]

    def area_choices(self) -> list[dict[str, Any]]:
        """Catalog entries other than the current focus area."""
        current = self.app_state.current_area
        current_id = current["id"] if current else None
        return [area for area in self.app_state.areas if area["id"] != current_id]

    async def switch_area(self, area: dict[str, Any]) -> bool:
        """Persist the new focus area, then reload all area-scoped state."""
        return await self.app_state.switch_area(area["id"])
