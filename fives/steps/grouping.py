"""
grouping.py — Partition helpers for step item lists.

Used by the step routes (server-side groups) and by the client controllers
(local partitions after optimistic updates). Both work on plain row dicts.
Every item lands in exactly one group, decided by a single field.
"""
from typing import Any, Dict, List

PRIORITY_LEVELS = ("high", "medium", "low")


def partition_by_keep(items: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """S1: split into keep / remove by should_keep."""
    groups: Dict[str, List[Dict[str, Any]]] = {"keep": [], "remove": []}
    for item in items:
        groups["keep" if item["should_keep"] else "remove"].append(item)
    return groups


def bucket_by_priority(items: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """S2: split into high / medium / low buckets, preserving list order."""
    groups: Dict[str, List[Dict[str, Any]]] = {level: [] for level in PRIORITY_LEVELS}
    for item in items:
        groups[item["priority_level"]].append(item)
    return groups


def no_groups(items: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    return {}
