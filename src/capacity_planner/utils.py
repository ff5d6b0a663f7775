"""Utility functions for capacity planning."""

from datetime import date, timedelta

from .constants import DAYS_PER_WEEK, MONTH_NAMES_FR, PRACTICAL_KEYWORD, THEORETICAL_KEYWORD
from .models import Module, ModuleType, Trainer


def specialty_matches(specialty: str, module: Module) -> bool:
    """Check whether one specialty tag qualifies a trainer for a module.

    A specialty matches when, case-insensitively:
    - it is a substring of the module name, or the module name is a substring of it
    - it contains "pratique" and the module is practical
    - it contains "théorique" and the module is theoretical

    Args:
        specialty: Free-text specialty tag, e.g. "Python" or "Formation pratique"
        module: Module to match against

    Returns:
        True if the specialty qualifies the trainer for the module
    """
    spec = specialty.strip().lower()
    if not spec:
        return False

    name = module.name.lower()
    if spec in name or name in spec:
        return True

    if module.type == ModuleType.PRACTICAL and PRACTICAL_KEYWORD in spec:
        return True
    if module.type == ModuleType.THEORETICAL and THEORETICAL_KEYWORD in spec:
        return True

    return False


def trainer_matches_module(trainer: Trainer, module: Module) -> bool:
    """Check whether any of the trainer's specialties matches the module."""
    return any(specialty_matches(spec, module) for spec in trainer.specialties)


def occupation_rate(used: float, capacity: float) -> int:
    """Percentage of capacity consumed, rounded half up (0 when capacity is 0)."""
    if capacity <= 0:
        return 0
    return int(used / capacity * 100 + 0.5)


def add_weeks(start: date, weeks: int) -> date:
    """Date `weeks` whole weeks after `start`."""
    return start + timedelta(days=weeks * DAYS_PER_WEEK)


def module_end_date(start: date, duration_weeks: int) -> date:
    """Last day of a module that runs `duration_weeks` from `start`.

    A module with no duration ends the day it starts.
    """
    if duration_weeks <= 0:
        return start
    return start + timedelta(days=duration_weeks * DAYS_PER_WEEK - 1)


def weeks_between(anchor: date, day: date) -> int:
    """Whole weeks from `anchor` to `day` (negative when `day` is earlier)."""
    return (day - anchor).days // DAYS_PER_WEEK


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def next_month(day: date) -> date:
    """First day of the month following `day`."""
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def iter_months(start: date, end: date):
    """Yield (year, month) for every calendar month touched by [start, end]."""
    current = first_of_month(start)
    while current <= end:
        yield current.year, current.month
        current = next_month(current)


def month_name(month: int) -> str:
    """French name of a month (1-12)."""
    return MONTH_NAMES_FR[month - 1]


def format_hours(hours: float) -> str:
    """Render an hour count without a trailing .0 (e.g. 4.0 -> '4', 2.5 -> '2.5')."""
    if float(hours).is_integer():
        return str(int(hours))
    return f"{hours:g}"
