"""
weeks.py — Calendar helpers for weekly reviews.
"""
from datetime import date, timedelta
from typing import Optional


def get_week_start(reference_date: Optional[date] = None) -> str:
    """
    Return the Monday of the ISO week containing reference_date as YYYY-MM-DD.

    Weekday numbering is Sunday=0 .. Saturday=6: a Sunday belongs to the week
    that started six days earlier; any other day goes back (weekday - 1) days.
    """
    reference_date = reference_date or date.today()
    weekday = reference_date.isoweekday() % 7
    offset = 6 if weekday == 0 else weekday - 1
    return (reference_date - timedelta(days=offset)).isoformat()
