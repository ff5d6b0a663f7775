"""Planning settings loader."""

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path

from .constants import (
    OVERLOAD_THRESHOLD,
    PLANNING_MONTHS,
    ROOM_HOURS_PER_WEEK,
    WEEKS_PER_MONTH,
    ModuleOrder,
)
from .exceptions import ConfigError


@dataclass
class PlanningSettings:
    """Tunable assumptions of the capacity computations.

    Attributes:
        room_hours_per_week: Weekly opening hours of every room
        weeks_per_month: Flat weeks-per-month factor of the monthly projection
        planning_months: Number of months in the monthly projection
        module_order: Order in which modules are walked when assigning a group
        overload_threshold: Occupation rate (percent) above which a trainer
                            or room is reported as overloaded
    """

    room_hours_per_week: int = ROOM_HOURS_PER_WEEK
    weeks_per_month: int = WEEKS_PER_MONTH
    planning_months: int = PLANNING_MONTHS
    module_order: ModuleOrder = ModuleOrder.INSERTION
    overload_threshold: int = OVERLOAD_THRESHOLD

    @classmethod
    def from_file(cls, path: Path) -> "PlanningSettings":
        """Load settings from a JSON object, keeping defaults for absent keys."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(str(e), path=str(path)) from e

        if not isinstance(data, dict):
            raise ConfigError("expected a JSON object", path=str(path))

        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(unknown)}", path=str(path))

        settings = cls(**data)
        try:
            settings.module_order = ModuleOrder(settings.module_order)
        except ValueError as e:
            raise ConfigError(str(e), path=str(path)) from e
        for name in ("room_hours_per_week", "weeks_per_month", "planning_months"):
            if not isinstance(getattr(settings, name), int) or getattr(settings, name) < 0:
                raise ConfigError(f"'{name}' must be a non-negative integer", path=str(path))
        return settings
