"""Trainer workload and room occupancy calculations."""

import logging
from collections import defaultdict

from .models import ROOM_OCCUPYING_STATUSES, RoomOccupancy, TrainerWorkload
from .settings import PlanningSettings
from .store import EntityStore
from .utils import occupation_rate

logger = logging.getLogger(__name__)


class WorkloadCalculator:
    """Derives weekly trainer load and room occupancy from schedules.

    Schedules are the source of truth. ``Trainer.current_hours_per_week`` is
    only a cache and is rebuilt by ``refresh_trainer_loads`` before every
    read.
    """

    def __init__(self, store: EntityStore, settings: PlanningSettings | None = None):
        self.store = store
        self.settings = settings or PlanningSettings()

    def compute_trainer_hours(self) -> dict[str, float]:
        """Sum the weekly load of planned/active schedules per trainer id."""
        hours: dict[str, float] = defaultdict(float)
        for schedule in self.store.get_live_schedules():
            if not schedule.is_load_bearing:
                continue
            module = self.store.get_module(schedule.module_id)
            if module is None:
                continue
            hours[schedule.trainer_id] += module.weekly_load
        return hours

    def refresh_trainer_loads(self) -> None:
        """Reset every trainer's load cache and recompute it from schedules."""
        hours = self.compute_trainer_hours()
        for trainer in self.store.trainers.values():
            trainer.current_hours_per_week = hours.get(trainer.id, 0.0)
        logger.debug(f"Refreshed load cache for {len(self.store.trainers)} trainers")

    def trainer_workload(self) -> list[TrainerWorkload]:
        """Weekly load and occupation rate of every active trainer."""
        self.refresh_trainer_loads()

        return [
            TrainerWorkload(
                trainer_id=trainer.id,
                name=trainer.name,
                current_hours=trainer.current_hours_per_week,
                max_hours=trainer.max_hours_per_week,
                occupation_rate=occupation_rate(
                    trainer.current_hours_per_week, trainer.max_hours_per_week
                ),
            )
            for trainer in self.store.get_all_trainers()
        ]

    def room_hours(self) -> dict[str, float]:
        """Weekly hours booked per room id by planned/active groups."""
        hours: dict[str, float] = defaultdict(float)
        for schedule in self.store.get_live_schedules():
            if not schedule.is_load_bearing:
                continue
            group = self.store.get_training_group(schedule.group_id)
            if group.room_id is None or group.status not in ROOM_OCCUPYING_STATUSES:
                continue
            module = self.store.get_module(schedule.module_id)
            if module is None:
                continue
            hours[group.room_id] += module.weekly_load
        return hours

    def room_occupancy(self) -> list[RoomOccupancy]:
        """Booked hours and occupation rate of every active room."""
        available = self.settings.room_hours_per_week
        hours = self.room_hours()

        return [
            RoomOccupancy(
                room_id=room.id,
                name=room.name,
                occupied_hours=hours.get(room.id, 0.0),
                available_hours=available,
                occupation_rate=occupation_rate(hours.get(room.id, 0.0), available),
            )
            for room in self.store.get_all_rooms()
        ]
