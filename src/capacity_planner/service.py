"""Capacity service: the operations exposed to callers of the planner."""

import logging
import threading
from datetime import date
from typing import Any

from .analysis import CapacityAnalyzer
from .assignment import AutoAssigner
from .models import (
    AssignmentReport,
    CapacityAnalysis,
    DashboardSummary,
    GroupModuleSchedule,
    GroupStatus,
    Module,
    ModuleTrainerAssignment,
    MonthBucket,
    Room,
    RoomOccupancy,
    Trainer,
    TrainerWorkload,
    TrainingGroup,
    WeekBucket,
)
from .planning import TemporalPlanner
from .settings import PlanningSettings
from .store import EntityStore
from .workload import WorkloadCalculator

logger = logging.getLogger(__name__)


class CapacityService:
    """
    Entry point wiring the store to the planning components.

    Every operation runs under one reentrant lock, so neither the
    read-then-write sequence of an assignment pass nor a read that walks the
    store can interleave with a write when the service is shared between
    threads.

    Missing ids are reported as None / False. Overloads are reported as data
    by the analysis operations, never raised.
    """

    def __init__(
        self,
        store: EntityStore | None = None,
        settings: PlanningSettings | None = None,
    ):
        self.store = store if store is not None else EntityStore()
        self.settings = settings or PlanningSettings()
        self.workload = WorkloadCalculator(self.store, self.settings)
        self.assigner = AutoAssigner(self.store, self.settings, self.workload)
        self.planner = TemporalPlanner(self.store, self.settings)
        self.analyzer = CapacityAnalyzer(
            self.store, self.settings, self.workload, self.planner
        )
        self._lock = threading.RLock()
        self.last_assignment: AssignmentReport | None = None

    # Trainers

    def create_trainer(self, data: dict[str, Any]) -> Trainer:
        with self._lock:
            return self.store.create_trainer(data)

    def update_trainer(self, trainer_id: str, changes: dict[str, Any]) -> Trainer | None:
        with self._lock:
            return self.store.update_trainer(trainer_id, changes)

    def delete_trainer(self, trainer_id: str) -> bool:
        """Soft delete: the trainer is kept but no longer listed or assigned."""
        with self._lock:
            return self.store.delete_trainer(trainer_id)

    def get_all_trainers(self) -> list[Trainer]:
        with self._lock:
            return self.store.get_all_trainers()

    # Modules

    def create_module(self, data: dict[str, Any]) -> Module:
        with self._lock:
            return self.store.create_module(data)

    def update_module(self, module_id: str, changes: dict[str, Any]) -> Module | None:
        with self._lock:
            return self.store.update_module(module_id, changes)

    def delete_module(self, module_id: str) -> bool:
        """Soft delete. Existing schedules of the module stay queryable."""
        with self._lock:
            return self.store.delete_module(module_id)

    def get_all_modules(self) -> list[Module]:
        with self._lock:
            return self.store.get_all_modules()

    # Rooms

    def create_room(self, data: dict[str, Any]) -> Room:
        with self._lock:
            return self.store.create_room(data)

    def update_room(self, room_id: str, changes: dict[str, Any]) -> Room | None:
        with self._lock:
            return self.store.update_room(room_id, changes)

    def delete_room(self, room_id: str) -> bool:
        with self._lock:
            return self.store.delete_room(room_id)

    def get_all_rooms(self) -> list[Room]:
        with self._lock:
            return self.store.get_all_rooms()

    # Training groups

    def create_training_group(self, data: dict[str, Any]) -> TrainingGroup:
        """Create a group and run the auto-assignment pass for it.

        Besides creating schedules, the pass may add competency rows
        (see AutoAssigner). The pass report is kept in ``last_assignment``.
        """
        with self._lock:
            group = self.store.create_training_group(data)
            self.last_assignment = self.assigner.assign_modules_to_group(group)
            return group

    def update_training_group(
        self, group_id: str, changes: dict[str, Any]
    ) -> TrainingGroup | None:
        with self._lock:
            return self.store.update_training_group(group_id, changes)

    def delete_training_group(self, group_id: str) -> bool:
        """Hard delete without cascade; orphaned schedules are ignored by computations."""
        with self._lock:
            return self.store.delete_training_group(group_id)

    def get_all_training_groups(self) -> list[TrainingGroup]:
        with self._lock:
            return self.store.get_all_training_groups()

    # Competency matrix and schedules

    def set_module_trainer_assignment(
        self, module_id: str, trainer_id: str, can_teach: bool
    ) -> ModuleTrainerAssignment:
        with self._lock:
            return self.store.upsert_module_trainer_assignment(module_id, trainer_id, can_teach)

    def list_schedules_for_group(self, group_id: str) -> list[GroupModuleSchedule]:
        with self._lock:
            return self.store.get_group_module_schedules_by_group(group_id)

    def update_schedule_progress(
        self,
        schedule_id: str,
        progress: int | None = None,
        hours_completed: float | None = None,
        status: str | None = None,
    ) -> GroupModuleSchedule | None:
        """Record delivery progress on a schedule row."""
        changes: dict[str, Any] = {}
        if progress is not None:
            changes["progress"] = max(0, min(100, progress))
        if hours_completed is not None:
            changes["hours_completed"] = hours_completed
        if status is not None:
            changes["status"] = status
        with self._lock:
            return self.store.update_group_module_schedule(schedule_id, changes)

    # Capacity computations

    def trainer_workload(self) -> list[TrainerWorkload]:
        with self._lock:
            return self.workload.trainer_workload()

    def room_occupancy(self) -> list[RoomOccupancy]:
        with self._lock:
            return self.workload.room_occupancy()

    def weekly_planning(self) -> list[WeekBucket]:
        with self._lock:
            return self.planner.weekly_planning()

    def monthly_planning(self, today: date | None = None) -> list[MonthBucket]:
        with self._lock:
            return self.planner.monthly_planning(today)

    def capacity_analysis(self, today: date | None = None) -> CapacityAnalysis:
        with self._lock:
            return self.analyzer.capacity_analysis(today)

    def dashboard_summary(self) -> DashboardSummary:
        with self._lock:
            return self.analyzer.dashboard_summary()

    def auto_assign_all_trainers_to_modules(self) -> int:
        with self._lock:
            return self.assigner.auto_assign_all_trainers_to_modules()

    def recalculate_capacity(self) -> int:
        """Re-run the assignment pass for every planned or active group.

        Returns:
            Number of groups recalculated
        """
        recalculated = 0
        with self._lock:
            for group in self.store.get_all_training_groups():
                if group.status not in (GroupStatus.PLANNED, GroupStatus.ACTIVE):
                    continue
                self.assigner.recalculate_group(group)
                recalculated += 1

        logger.info(f"Recalculated {recalculated} group(s)")
        return recalculated
