"""
controllers.py — Client view-models for the step pages, daily mode and weekly review.

Each controller mirrors stored rows in memory. Mutations are optimistic:
the local list changes first, then the write is sent. A failed write is
logged as a warning and the local change is kept; a failed create adds
nothing, since there is no row id to show.
"""
import logging
from datetime import date
from typing import Any, Optional

from fives.client.gateway import GatewayError, PersistenceGateway
from fives.progress.state import Step
from fives.steps.grouping import bucket_by_priority, partition_by_keep
from fives.steps.registry import StageSpec, get_stage

logger = logging.getLogger(__name__)


def _iso(on: Optional[date]) -> Optional[str]:
    return on.isoformat() if on is not None else None


def _stripped(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value.strip() if isinstance(value, str) else value for key, value in fields.items()}


# ---------------------------------------------------------------------------
# Step pages
# ---------------------------------------------------------------------------

class StageController:
    """Load / create / update / delete for one (session, area, stage) list."""

    stage: Step

    def __init__(self, gateway: PersistenceGateway, area_name: str) -> None:
        self.gateway = gateway
        self.area_name = area_name
        self.spec: StageSpec = get_stage(self.stage)
        self.area: Optional[dict[str, Any]] = None
        self.items: list[dict[str, Any]] = []

    @property
    def path(self) -> str:
        return f"/api/areas/{self.area_name}/{self.stage.value}"

    def reset(self) -> None:
        self.area = None
        self.items = []

    async def load(self) -> None:
        try:
            data = await self.gateway.get(self.path)
        except GatewayError as exc:
            logger.error("Error loading %s area=%s: %s", self.spec.collection, self.area_name, exc)
            self.reset()
            return
        self.area = data.get("area")
        self.items = list(data.get("items", []))

    async def create(self, **fields: Any) -> Optional[dict[str, Any]]:
        """
        Insert a row and prepend it. Blank or whitespace-only text is a
        silent no-op: nothing is sent and None is returned.
        """
        payload = _stripped(fields)
        if any(not payload.get(name) for name in self.spec.text_fields):
            return None
        try:
            row = await self.gateway.post(self.path, json=payload)
        except GatewayError as exc:
            logger.warning("Create failed on %s area=%s: %s", self.spec.collection, self.area_name, exc)
            return None
        self.items.insert(0, row)
        return row

    async def update(self, item_id: str, **fields: Any) -> None:
        """
        Mirror the change locally, then send it. Blanking a required text
        field is a no-op, like a blank create.
        """
        changes = _stripped(fields)
        if any(not changes[name] for name in self.spec.text_fields if name in changes):
            return
        for item in self.items:
            if item["id"] == item_id:
                item.update(changes)
        try:
            await self.gateway.patch(f"{self.path}/{item_id}", json=changes)
        except GatewayError as exc:
            logger.warning("Update failed on %s id=%s: %s", self.spec.collection, item_id, exc)

    async def delete(self, item_id: str) -> None:
        self.items = [item for item in self.items if item["id"] != item_id]
        try:
            await self.gateway.delete(f"{self.path}/{item_id}")
        except GatewayError as exc:
            logger.warning("Delete failed on %s id=%s: %s", self.spec.collection, item_id, exc)


class FilterController(StageController):
    stage = Step.s1

    async def add(self, item_text: str) -> Optional[dict[str, Any]]:
        return await self.create(item_text=item_text, should_keep=True)

    async def toggle_keep(self, item_id: str, should_keep: bool) -> None:
        await self.update(item_id, should_keep=should_keep)

    @property
    def keep_items(self) -> list[dict[str, Any]]:
        return partition_by_keep(self.items)["keep"]

    @property
    def remove_items(self) -> list[dict[str, Any]]:
        return partition_by_keep(self.items)["remove"]


class OrganizeController(StageController):
    stage = Step.s2

    async def add(self, item_text: str) -> Optional[dict[str, Any]]:
        return await self.create(item_text=item_text, priority_level="medium", fixed_position="")

    async def set_priority(self, item_id: str, priority_level: str) -> None:
        await self.update(item_id, priority_level=priority_level)

    async def set_position(self, item_id: str, fixed_position: str) -> None:
        await self.update(item_id, fixed_position=fixed_position)

    def buckets(self) -> dict[str, list[dict[str, Any]]]:
        return bucket_by_priority(self.items)


class CleanController(StageController):
    stage = Step.s3

    async def add(self, reflection_text: str, on: Optional[date] = None) -> Optional[dict[str, Any]]:
        fields: dict[str, Any] = {"reflection_text": reflection_text, "action_taken": ""}
        if on is not None:
            fields["reflection_date"] = on.isoformat()
        return await self.create(**fields)

    async def set_action_taken(self, item_id: str, action_taken: str) -> None:
        await self.update(item_id, action_taken=action_taken)


class StandardController(StageController):
    stage = Step.s4

    async def add(self, trigger: str, action: str) -> Optional[dict[str, Any]]:
        return await self.create(trigger=trigger, action=action)


class SustainController(StageController):
    stage = Step.s5

    async def add(self, why_text: str) -> Optional[dict[str, Any]]:
        return await self.create(why_text=why_text)


STAGE_CONTROLLERS: dict[Step, type[StageController]] = {
    Step.s1: FilterController,
    Step.s2: OrganizeController,
    Step.s3: CleanController,
    Step.s4: StandardController,
    Step.s5: SustainController,
}


def controller_for(gateway: PersistenceGateway, area_name: str, step: Step) -> StageController:
    return STAGE_CONTROLLERS[Step(step)](gateway, area_name)


# ---------------------------------------------------------------------------
# Dashboard / daily mode
# ---------------------------------------------------------------------------

class DailyActionsController:
    """
    Today's actions for the active area. Loading either endpoint generates the
    day's actions on first visit. The counter counts only 'done' as completed.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        dashboard: bool = False,
        on: Optional[date] = None,
    ) -> None:
        self.gateway = gateway
        self.path = "/api/dashboard" if dashboard else "/api/daily"
        self.on = on
        self.data: dict[str, Any] = {}
        self.actions: list[dict[str, Any]] = []

    def reset(self) -> None:
        self.data = {}
        self.actions = []

    async def load(self) -> None:
        try:
            self.data = await self.gateway.get(self.path, params={"on": _iso(self.on)})
        except GatewayError as exc:
            logger.error("Error loading %s: %s", self.path, exc)
            self.reset()
            return
        self.actions = list(self.data.get("actions", []))

    @property
    def area(self) -> Optional[dict[str, Any]]:
        return self.data.get("area")

    @property
    def completed_count(self) -> int:
        return sum(1 for action in self.actions if action["status"] == "done")

    @property
    def total_count(self) -> int:
        return len(self.actions)

    @property
    def progress_label(self) -> str:
        return f"{self.completed_count}/{self.total_count}"

    async def set_status(self, action_id: str, status: str) -> None:
        for action in self.actions:
            if action["id"] == action_id:
                action["status"] = status
        try:
            await self.gateway.patch(f"/api/daily/{action_id}", json={"status": status})
        except GatewayError as exc:
            logger.warning("Status update failed action_id=%s: %s", action_id, exc)

    async def mark_done(self, action_id: str) -> None:
        await self.set_status(action_id, "done")

    async def skip(self, action_id: str) -> None:
        await self.set_status(action_id, "skipped")

    async def reset_action(self, action_id: str) -> None:
        await self.set_status(action_id, "pending")


# ---------------------------------------------------------------------------
# Weekly review
# ---------------------------------------------------------------------------

class WeeklyReviewController:
    """This week's editable review plus the five most recent, read-only."""

    def __init__(self, gateway: PersistenceGateway, on: Optional[date] = None) -> None:
        self.gateway = gateway
        self.on = on
        self.week_start: Optional[str] = None
        self.current: Optional[dict[str, Any]] = None
        self.recent: list[dict[str, Any]] = []

    def reset(self) -> None:
        self.week_start = None
        self.current = None
        self.recent = []

    def _apply(self, data: dict[str, Any]) -> None:
        self.week_start = data.get("week_start")
        self.current = data.get("current")
        self.recent = list(data.get("recent", []))

    async def load(self) -> None:
        try:
            data = await self.gateway.get("/api/review", params={"on": _iso(self.on)})
        except GatewayError as exc:
            logger.error("Error loading weekly review: %s", exc)
            self.reset()
            return
        self._apply(data)

    async def save(self, what_clearer: str = "", what_lighter: str = "", what_adjust: str = "") -> bool:
        payload: dict[str, Any] = {
            "what_clearer": what_clearer,
            "what_lighter": what_lighter,
            "what_adjust": what_adjust,
        }
        if self.on is not None:
            payload["on"] = self.on.isoformat()
        try:
            data = await self.gateway.put("/api/review", json=payload)
        except GatewayError as exc:
            logger.warning("Weekly review save failed: %s", exc)
            return False
        self._apply(data)
        return True
