"""Data models for the training capacity planner."""

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


class ModuleType(str, Enum):
    """Teaching style of a course module."""

    THEORETICAL = "theoretical"
    PRACTICAL = "practical"


class RoomType(str, Enum):
    """Kind of room a group can be hosted in."""

    CLASSROOM = "classroom"
    WORKSHOP = "workshop"


class GroupStatus(str, Enum):
    """Lifecycle status of a training group."""

    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"
    DELAYED = "delayed"


class ScheduleStatus(str, Enum):
    """Status of one module slot in a group's curriculum."""

    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"


# Schedules in these statuses still consume trainer and room time
LOAD_BEARING_STATUSES = (ScheduleStatus.PLANNED, ScheduleStatus.ACTIVE)

# Groups in these statuses still occupy their room
ROOM_OCCUPYING_STATUSES = (GroupStatus.PLANNED, GroupStatus.ACTIVE)


_TRUE_STRINGS = ("true", "yes", "oui", "1")
_FALSE_STRINGS = ("false", "no", "non", "0")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _get(data: dict[str, Any], name: str, default: Any = None) -> Any:
    """Read a field by its snake_case name, falling back to camelCase."""
    if name in data:
        return data[name]
    return data.get(_camel(name), default)


def normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a record with camelCase keys turned into snake_case."""
    return {re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower(): value for key, value in data.items()}


def parse_date(value: Any) -> date | None:
    """Coerce an ISO string, datetime or date into a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_bool(value: Any) -> bool:
    """Coerce a JSON boolean, 0/1 or a "true"/"false" string into a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class Trainer:
    """A trainer who can be assigned to course modules."""

    id: str
    name: str
    max_hours_per_week: int
    specialties: list[str] = field(default_factory=list)
    email: str = ""
    # Cache of the weekly load, recomputed from schedules before use
    current_hours_per_week: float = 0.0
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trainer":
        """Create a Trainer from a dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            max_hours_per_week=int(_get(data, "max_hours_per_week")),
            specialties=list(_get(data, "specialties") or []),
            email=_get(data, "email") or "",
            current_hours_per_week=float(_get(data, "current_hours_per_week", 0) or 0),
            is_active=parse_bool(_get(data, "is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert trainer to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "specialties": self.specialties,
            "max_hours_per_week": self.max_hours_per_week,
            "current_hours_per_week": self.current_hours_per_week,
            "is_active": self.is_active,
        }


@dataclass
class Module:
    """A course module that makes up part of a group's curriculum."""

    id: str
    name: str
    total_hours: int
    sessions_per_week: int
    hours_per_session: float
    type: ModuleType
    description: str | None = None
    is_active: bool = True

    @property
    def weekly_load(self) -> float:
        """Hours per week the module demands from its trainer and room."""
        return self.sessions_per_week * float(self.hours_per_session)

    @property
    def duration_weeks(self) -> int:
        """Number of weeks needed to deliver all hours (0 for a module with no load)."""
        weekly = self.weekly_load
        if weekly <= 0:
            return 0
        return math.ceil(self.total_hours / weekly)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Module":
        """Create a Module from a dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            total_hours=int(_get(data, "total_hours")),
            sessions_per_week=int(_get(data, "sessions_per_week")),
            hours_per_session=float(_get(data, "hours_per_session")),
            type=ModuleType(data["type"]),
            description=data.get("description"),
            is_active=parse_bool(_get(data, "is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert module to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "total_hours": self.total_hours,
            "sessions_per_week": self.sessions_per_week,
            "hours_per_session": self.hours_per_session,
            "type": self.type.value,
            "is_active": self.is_active,
        }


@dataclass
class Room:
    """A physical room that hosts training groups."""

    id: str
    name: str
    type: RoomType
    capacity: int
    equipment: list[str] = field(default_factory=list)
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        """Create a Room from a dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            type=RoomType(data["type"]),
            capacity=int(data["capacity"]),
            equipment=list(data.get("equipment") or []),
            is_active=parse_bool(_get(data, "is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert room to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "capacity": self.capacity,
            "equipment": self.equipment,
            "is_active": self.is_active,
        }


@dataclass
class TrainingGroup:
    """A cohort of participants following the module curriculum."""

    id: str
    name: str
    participant_count: int
    start_date: date
    end_date: date | None = None
    estimated_end_date: date | None = None
    status: GroupStatus = GroupStatus.PLANNED
    delay_days: int = 0
    room_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrainingGroup":
        """Create a TrainingGroup from a dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            participant_count=int(_get(data, "participant_count")),
            start_date=parse_date(_get(data, "start_date")),
            end_date=parse_date(_get(data, "end_date")),
            estimated_end_date=parse_date(_get(data, "estimated_end_date")),
            status=GroupStatus(data.get("status") or GroupStatus.PLANNED),
            delay_days=int(_get(data, "delay_days", 0) or 0),
            room_id=_get(data, "room_id") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert group to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "participant_count": self.participant_count,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "estimated_end_date": _iso(self.estimated_end_date),
            "status": self.status.value,
            "delay_days": self.delay_days,
            "room_id": self.room_id,
        }


@dataclass
class ModuleTrainerAssignment:
    """One cell of the competency matrix: may this trainer teach this module."""

    id: str
    module_id: str
    trainer_id: str
    can_teach: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModuleTrainerAssignment":
        """Create an assignment from a dictionary."""
        return cls(
            id=data["id"],
            module_id=_get(data, "module_id"),
            trainer_id=_get(data, "trainer_id"),
            can_teach=parse_bool(_get(data, "can_teach", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert assignment to dictionary."""
        return {
            "id": self.id,
            "module_id": self.module_id,
            "trainer_id": self.trainer_id,
            "can_teach": self.can_teach,
        }


@dataclass
class GroupModuleSchedule:
    """A module taught by a trainer at a given position in a group's curriculum."""

    id: str
    group_id: str
    module_id: str
    trainer_id: str
    scheduled_order: int
    start_date: date | None = None
    end_date: date | None = None
    progress: int = 0
    hours_completed: float = 0.0
    status: ScheduleStatus = ScheduleStatus.PLANNED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GroupModuleSchedule":
        """Create a schedule row from a dictionary."""
        return cls(
            id=data["id"],
            group_id=_get(data, "group_id"),
            module_id=_get(data, "module_id"),
            trainer_id=_get(data, "trainer_id"),
            scheduled_order=int(_get(data, "scheduled_order")),
            start_date=parse_date(_get(data, "start_date")),
            end_date=parse_date(_get(data, "end_date")),
            progress=int(data.get("progress") or 0),
            hours_completed=float(_get(data, "hours_completed", 0) or 0),
            status=ScheduleStatus(data.get("status") or ScheduleStatus.PLANNED),
        )

    @property
    def is_load_bearing(self) -> bool:
        """Whether the schedule still consumes trainer/room time."""
        return self.status in LOAD_BEARING_STATUSES

    def to_dict(self) -> dict[str, Any]:
        """Convert schedule to dictionary."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "module_id": self.module_id,
            "trainer_id": self.trainer_id,
            "scheduled_order": self.scheduled_order,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "progress": self.progress,
            "hours_completed": self.hours_completed,
            "status": self.status.value,
        }


@dataclass
class AssignmentReport:
    """Outcome of one auto-assignment pass over a group.

    Attributes:
        group_id: Group the pass ran for
        schedules: Schedule rows created, in curriculum order
        discovered: Competency rows created because a specialty matched
        uncovered_module_ids: Active modules no qualified trainer could take
        total_weeks: Cumulative duration of the scheduled modules
    """

    group_id: str
    schedules: list[GroupModuleSchedule] = field(default_factory=list)
    discovered: list[ModuleTrainerAssignment] = field(default_factory=list)
    uncovered_module_ids: list[str] = field(default_factory=list)
    total_weeks: int = 0

    @property
    def is_complete(self) -> bool:
        """True when every active module received a trainer."""
        return not self.uncovered_module_ids


@dataclass
class TrainerWorkload:
    """Current weekly load of a trainer against their cap."""

    trainer_id: str
    name: str
    current_hours: float
    max_hours: int
    occupation_rate: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "trainer_id": self.trainer_id,
            "name": self.name,
            "current_hours": self.current_hours,
            "max_hours": self.max_hours,
            "occupation_rate": self.occupation_rate,
        }


@dataclass
class RoomOccupancy:
    """Weekly hours booked in a room against its opening hours."""

    room_id: str
    name: str
    occupied_hours: float
    available_hours: int
    occupation_rate: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "room_id": self.room_id,
            "name": self.name,
            "occupied_hours": self.occupied_hours,
            "available_hours": self.available_hours,
            "occupation_rate": self.occupation_rate,
        }


@dataclass
class WeekModuleEntry:
    """A module running for a group during one planning week."""

    module_id: str
    module_name: str
    trainer_id: str
    trainer_name: str
    weekly_hours: float
    total_hours: int
    type: ModuleType
    progress: int
    scheduled_order: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "module_id": self.module_id,
            "module_name": self.module_name,
            "trainer_id": self.trainer_id,
            "trainer_name": self.trainer_name,
            "weekly_hours": self.weekly_hours,
            "total_hours": self.total_hours,
            "type": self.type.value,
            "progress": self.progress,
            "scheduled_order": self.scheduled_order,
        }


@dataclass
class WeekGroupEntry:
    """A group and the modules it follows during one planning week."""

    group_id: str
    group_name: str
    participant_count: int
    room_name: str
    modules: list[WeekModuleEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "participant_count": self.participant_count,
            "room_name": self.room_name,
            "modules": [m.to_dict() for m in self.modules],
        }


@dataclass
class WeekTrainerEntry:
    """Hours a trainer teaches during one planning week."""

    trainer_id: str
    name: str
    weekly_hours: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "trainer_id": self.trainer_id,
            "name": self.name,
            "weekly_hours": self.weekly_hours,
        }


@dataclass
class WeekRoomEntry:
    """Hours a room is booked during one planning week."""

    room_id: str
    name: str
    occupied_hours: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "room_id": self.room_id,
            "name": self.name,
            "occupied_hours": self.occupied_hours,
        }


@dataclass
class WeekBucket:
    """Aggregated planning for one calendar week."""

    week: int
    start_date: date
    end_date: date
    month_name: str
    groups: list[WeekGroupEntry] = field(default_factory=list)
    # In first-seen order
    trainer_workload: list[WeekTrainerEntry] = field(default_factory=list)
    room_occupancy: list[WeekRoomEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "week": self.week,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "month_name": self.month_name,
            "groups": [g.to_dict() for g in self.groups],
            "trainer_workload": [t.to_dict() for t in self.trainer_workload],
            "room_occupancy": [r.to_dict() for r in self.room_occupancy],
        }


@dataclass
class MonthConflict:
    """A capacity conflict detected in a planning month."""

    type: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"type": self.type, "description": self.description}


@dataclass
class MonthBucket:
    """Aggregated planning for one calendar month."""

    month: int
    year: int
    month_name: str
    total_groups: int = 0
    total_trainer_hours: float = 0.0
    total_room_hours: float = 0.0
    conflicts: list[MonthConflict] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "month": self.month,
            "year": self.year,
            "month_name": self.month_name,
            "total_groups": self.total_groups,
            "total_trainer_hours": self.total_trainer_hours,
            "total_room_hours": self.total_room_hours,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


@dataclass
class TrainerConstraint:
    """Overload status of a trainer."""

    trainer_id: str
    name: str
    is_overloaded: bool
    available_hours: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "trainer_id": self.trainer_id,
            "name": self.name,
            "is_overloaded": self.is_overloaded,
            "available_hours": self.available_hours,
        }


@dataclass
class RoomConstraint:
    """Overbooking status of a room."""

    room_id: str
    name: str
    type: str
    is_overbooked: bool
    available_capacity: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "room_id": self.room_id,
            "name": self.name,
            "type": self.type,
            "is_overbooked": self.is_overbooked,
            "available_capacity": self.available_capacity,
        }


@dataclass
class GroupAssignmentSummary:
    """How completely a group has been staffed."""

    group_id: str
    group_name: str
    assigned_modules: int
    assigned_trainers: int
    has_room: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "assigned_modules": self.assigned_modules,
            "assigned_trainers": self.assigned_trainers,
            "has_room": self.has_room,
        }


@dataclass
class CapacityAnalysis:
    """Full capacity report combining workload, occupancy and planning."""

    trainer_constraints: list[TrainerConstraint] = field(default_factory=list)
    room_constraints: list[RoomConstraint] = field(default_factory=list)
    group_assignments: list[GroupAssignmentSummary] = field(default_factory=list)
    weekly_planning: list[WeekBucket] = field(default_factory=list)
    monthly_planning: list[MonthBucket] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "trainer_constraints": [t.to_dict() for t in self.trainer_constraints],
            "room_constraints": [r.to_dict() for r in self.room_constraints],
            "group_assignments": [g.to_dict() for g in self.group_assignments],
            "weekly_planning": [w.to_dict() for w in self.weekly_planning],
            "monthly_planning": [m.to_dict() for m in self.monthly_planning],
            "recommendations": self.recommendations,
        }


@dataclass
class DashboardSummary:
    """Headline figures for the capacity dashboard."""

    trainer_occupation_rate: int = 0
    room_occupation_rate: int = 0
    active_groups: int = 0
    total_groups: int = 0
    completed_groups: int = 0
    delayed_groups: int = 0
    capacity_remaining: int = 100
    total_trainers: int = 0
    total_rooms: int = 0
    trainer_workload: list[TrainerWorkload] = field(default_factory=list)
    room_occupancy: list[RoomOccupancy] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "trainer_occupation_rate": self.trainer_occupation_rate,
            "room_occupation_rate": self.room_occupation_rate,
            "active_groups": self.active_groups,
            "total_groups": self.total_groups,
            "completed_groups": self.completed_groups,
            "delayed_groups": self.delayed_groups,
            "capacity_remaining": self.capacity_remaining,
            "total_trainers": self.total_trainers,
            "total_rooms": self.total_rooms,
            "trainer_workload": [t.to_dict() for t in self.trainer_workload],
            "room_occupancy": [r.to_dict() for r in self.room_occupancy],
        }
