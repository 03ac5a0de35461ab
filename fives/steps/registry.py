"""
registry.py — One StageSpec per 5S step.

The step routes and store functions are generic; everything stage-specific
(table, payload schemas, ordering column, grouping) is looked up here.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from pydantic import BaseModel

from fives.models.step_items import (
    CleanReflectionORM,
    FilterItemORM,
    OrganizeItemORM,
    StandardORM,
    SustainReminderORM,
)
from fives.progress.state import Step
from fives.steps import schemas
from fives.steps.grouping import bucket_by_priority, no_groups, partition_by_keep

Grouper = Callable[[List[Dict[str, Any]]], Dict[str, List[Dict[str, Any]]]]


@dataclass(frozen=True)
class StageSpec:
    step: Step
    collection: str
    orm: Type[Any]
    item_schema: Type[BaseModel]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    order_by: str
    text_fields: tuple
    group: Grouper = no_groups


STAGES: Dict[Step, StageSpec] = {
    Step.s1: StageSpec(
        step=Step.s1,
        collection="s1_filter_items",
        orm=FilterItemORM,
        item_schema=schemas.FilterItem,
        create_schema=schemas.FilterItemCreate,
        update_schema=schemas.FilterItemUpdate,
        order_by="created_at",
        text_fields=("item_text",),
        group=partition_by_keep,
    ),
    Step.s2: StageSpec(
        step=Step.s2,
        collection="s2_organize_items",
        orm=OrganizeItemORM,
        item_schema=schemas.OrganizeItem,
        create_schema=schemas.OrganizeItemCreate,
        update_schema=schemas.OrganizeItemUpdate,
        order_by="created_at",
        text_fields=("item_text",),
        group=bucket_by_priority,
    ),
    Step.s3: StageSpec(
        step=Step.s3,
        collection="s3_clean_reflections",
        orm=CleanReflectionORM,
        item_schema=schemas.CleanReflection,
        create_schema=schemas.CleanReflectionCreate,
        update_schema=schemas.CleanReflectionUpdate,
        order_by="reflection_date",
        text_fields=("reflection_text",),
    ),
    Step.s4: StageSpec(
        step=Step.s4,
        collection="s4_standards",
        orm=StandardORM,
        item_schema=schemas.Standard,
        create_schema=schemas.StandardCreate,
        update_schema=schemas.StandardUpdate,
        order_by="created_at",
        text_fields=("trigger", "action"),
    ),
    Step.s5: StageSpec(
        step=Step.s5,
        collection="s5_sustain_reminders",
        orm=SustainReminderORM,
        item_schema=schemas.SustainReminder,
        create_schema=schemas.SustainReminderCreate,
        update_schema=schemas.SustainReminderUpdate,
        order_by="created_at",
        text_fields=("why_text",),
    ),
}


def get_stage(step: Step) -> StageSpec:
    return STAGES[Step(step)]
