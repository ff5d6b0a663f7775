"""In-memory entity store for trainers, modules, rooms, groups and schedules."""

import dataclasses
import uuid
from typing import Any, TypeVar

from .exceptions import InvalidRecordError
from .models import (
    GroupModuleSchedule,
    Module,
    ModuleTrainerAssignment,
    Room,
    Trainer,
    TrainingGroup,
    normalize_keys,
)

T = TypeVar("T")


def _new_id() -> str:
    return str(uuid.uuid4())


class EntityStore:
    """Keyed record collections for the capacity planner.

    Collections keep insertion order, which is the iteration order used by
    the assignment engine for tie-breaking. Lookups of unknown ids return
    None (or False for deletes) instead of raising.

    Trainers, modules and rooms are soft-deleted (``is_active=False``) and
    disappear from the ``get_all_*`` listings while staying reachable by id.
    Training groups are hard-deleted without touching their schedules; use
    ``get_live_schedules`` to skip schedules whose group no longer exists.
    """

    def __init__(self) -> None:
        self.trainers: dict[str, Trainer] = {}
        self.modules: dict[str, Module] = {}
        self.rooms: dict[str, Room] = {}
        self.training_groups: dict[str, TrainingGroup] = {}
        self.module_trainer_assignments: dict[str, ModuleTrainerAssignment] = {}
        self.group_module_schedules: dict[str, GroupModuleSchedule] = {}

    # Generic helpers

    def _build(self, cls: type[T], data: dict[str, Any], source: str) -> T:
        """Build an entity from a record, assigning an id when missing."""
        record = normalize_keys(data)
        self._check_fields(cls, record, source)
        if not record.get("id"):
            record["id"] = _new_id()
        try:
            return cls.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidRecordError(f"{type(e).__name__}: {e}", source=source) from e

    def _merge(self, cls: type[T], current: T, changes: dict[str, Any], source: str) -> T:
        """Return a new entity with `changes` applied on top of `current`."""
        record = normalize_keys(changes)
        self._check_fields(cls, record, source)
        record.pop("id", None)
        merged = {**current.to_dict(), **record}
        try:
            return cls.from_dict(merged)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidRecordError(f"{type(e).__name__}: {e}", source=source) from e

    @staticmethod
    def _check_fields(cls: type, record: dict[str, Any], source: str) -> None:
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(record) - known)
        if unknown:
            raise InvalidRecordError(f"unknown field(s): {', '.join(unknown)}", source=source)

    # Trainers

    def get_all_trainers(self) -> list[Trainer]:
        """Active trainers in insertion order."""
        return [t for t in self.trainers.values() if t.is_active]

    def get_trainer(self, trainer_id: str) -> Trainer | None:
        return self.trainers.get(trainer_id)

    def create_trainer(self, data: dict[str, Any]) -> Trainer:
        """Create a trainer. The load cache always starts at zero."""
        trainer = self._build(Trainer, data, "trainer")
        trainer.current_hours_per_week = 0.0
        self.trainers[trainer.id] = trainer
        return trainer

    def update_trainer(self, trainer_id: str, changes: dict[str, Any]) -> Trainer | None:
        trainer = self.trainers.get(trainer_id)
        if trainer is None:
            return None
        updated = self._merge(Trainer, trainer, changes, "trainer")
        self.trainers[trainer_id] = updated
        return updated

    def delete_trainer(self, trainer_id: str) -> bool:
        trainer = self.trainers.get(trainer_id)
        if trainer is None:
            return False
        trainer.is_active = False
        return True

    # Modules

    def get_all_modules(self) -> list[Module]:
        """Active modules in insertion order."""
        return [m for m in self.modules.values() if m.is_active]

    def get_module(self, module_id: str) -> Module | None:
        return self.modules.get(module_id)

    def create_module(self, data: dict[str, Any]) -> Module:
        module = self._build(Module, data, "module")
        self.modules[module.id] = module
        return module

    def update_module(self, module_id: str, changes: dict[str, Any]) -> Module | None:
        module = self.modules.get(module_id)
        if module is None:
            return None
        updated = self._merge(Module, module, changes, "module")
        self.modules[module_id] = updated
        return updated

    def delete_module(self, module_id: str) -> bool:
        module = self.modules.get(module_id)
        if module is None:
            return False
        module.is_active = False
        return True

    # Rooms

    def get_all_rooms(self) -> list[Room]:
        """Active rooms in insertion order."""
        return [r for r in self.rooms.values() if r.is_active]

    def get_room(self, room_id: str) -> Room | None:
        return self.rooms.get(room_id)

    def create_room(self, data: dict[str, Any]) -> Room:
        room = self._build(Room, data, "room")
        self.rooms[room.id] = room
        return room

    def update_room(self, room_id: str, changes: dict[str, Any]) -> Room | None:
        room = self.rooms.get(room_id)
        if room is None:
            return None
        updated = self._merge(Room, room, changes, "room")
        self.rooms[room_id] = updated
        return updated

    def delete_room(self, room_id: str) -> bool:
        room = self.rooms.get(room_id)
        if room is None:
            return False
        room.is_active = False
        return True

    # Training groups

    def get_all_training_groups(self) -> list[TrainingGroup]:
        return list(self.training_groups.values())

    def get_training_group(self, group_id: str) -> TrainingGroup | None:
        return self.training_groups.get(group_id)

    def create_training_group(self, data: dict[str, Any]) -> TrainingGroup:
        """Store a group. Auto-assignment is triggered by the service, not here."""
        group = self._build(TrainingGroup, data, "training group")
        if group.start_date is None:
            raise InvalidRecordError("start_date is required", source="training group")
        self.training_groups[group.id] = group
        return group

    def update_training_group(
        self, group_id: str, changes: dict[str, Any]
    ) -> TrainingGroup | None:
        group = self.training_groups.get(group_id)
        if group is None:
            return None
        updated = self._merge(TrainingGroup, group, changes, "training group")
        if updated.start_date is None:
            raise InvalidRecordError("start_date is required", source="training group")
        self.training_groups[group_id] = updated
        return updated

    def delete_training_group(self, group_id: str) -> bool:
        """Hard delete. Schedules referencing the group are left in place."""
        return self.training_groups.pop(group_id, None) is not None

    # Competency matrix

    def get_module_trainer_assignments(self) -> list[ModuleTrainerAssignment]:
        return list(self.module_trainer_assignments.values())

    def find_assignment(
        self, module_id: str, trainer_id: str
    ) -> ModuleTrainerAssignment | None:
        """Get the competency row for a (module, trainer) pair, if any."""
        for assignment in self.module_trainer_assignments.values():
            if assignment.module_id == module_id and assignment.trainer_id == trainer_id:
                return assignment
        return None

    def upsert_module_trainer_assignment(
        self, module_id: str, trainer_id: str, can_teach: bool = True
    ) -> ModuleTrainerAssignment:
        """Create the competency row for a pair, or update the existing one.

        At most one row exists per (module_id, trainer_id).
        """
        existing = self.find_assignment(module_id, trainer_id)
        if existing is not None:
            existing.can_teach = can_teach
            return existing

        assignment = ModuleTrainerAssignment(
            id=_new_id(),
            module_id=module_id,
            trainer_id=trainer_id,
            can_teach=can_teach,
        )
        self.module_trainer_assignments[assignment.id] = assignment
        return assignment

    def delete_module_trainer_assignment(self, module_id: str, trainer_id: str) -> bool:
        assignment = self.find_assignment(module_id, trainer_id)
        if assignment is None:
            return False
        del self.module_trainer_assignments[assignment.id]
        return True

    # Group module schedules

    def get_group_module_schedules(self) -> list[GroupModuleSchedule]:
        return list(self.group_module_schedules.values())

    def get_live_schedules(self) -> list[GroupModuleSchedule]:
        """Schedules whose owning group still exists."""
        return [
            s
            for s in self.group_module_schedules.values()
            if s.group_id in self.training_groups
        ]

    def get_group_module_schedules_by_group(self, group_id: str) -> list[GroupModuleSchedule]:
        """Schedules of one group, sorted by curriculum position."""
        schedules = [
            s for s in self.group_module_schedules.values() if s.group_id == group_id
        ]
        return sorted(schedules, key=lambda s: s.scheduled_order)

    def create_group_module_schedule(self, data: dict[str, Any]) -> GroupModuleSchedule:
        schedule = self._build(GroupModuleSchedule, data, "schedule")
        self.group_module_schedules[schedule.id] = schedule
        return schedule

    def add_group_module_schedule(self, schedule: GroupModuleSchedule) -> GroupModuleSchedule:
        """Store an already-built schedule row."""
        self.group_module_schedules[schedule.id] = schedule
        return schedule

    def update_group_module_schedule(
        self, schedule_id: str, changes: dict[str, Any]
    ) -> GroupModuleSchedule | None:
        schedule = self.group_module_schedules.get(schedule_id)
        if schedule is None:
            return None
        updated = self._merge(GroupModuleSchedule, schedule, changes, "schedule")
        self.group_module_schedules[schedule_id] = updated
        return updated

    def delete_group_module_schedule(self, schedule_id: str) -> bool:
        return self.group_module_schedules.pop(schedule_id, None) is not None

    def new_id(self) -> str:
        """Generate an id for a record built outside the store."""
        return _new_id()
