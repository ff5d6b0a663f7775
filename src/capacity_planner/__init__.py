"""Training capacity planner.

This package keeps a catalogue of trainers, course modules, rooms and
training groups, assigns each group's modules to the least-loaded qualified
trainer, and projects the resulting schedules onto weekly and monthly
capacity buckets.

Example usage:
    from capacity_planner import CapacityService

    service = CapacityService()
    alice = service.create_trainer(
        {"name": "Alice", "max_hours_per_week": 35, "specialties": ["Python"]}
    )
    service.create_module(
        {
            "name": "Python Basics",
            "total_hours": 40,
            "sessions_per_week": 2,
            "hours_per_session": 2,
            "type": "theoretical",
        }
    )
    service.create_training_group(
        {"name": "G1", "participant_count": 12, "start_date": "2024-01-01"}
    )

    for tw in service.trainer_workload():
        print(f"{tw.name}: {tw.current_hours}h ({tw.occupation_rate}%)")

    # Export to JSON
    from capacity_planner.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(service.capacity_analysis(), "capacity.json")
"""

from .exceptions import (
    ConfigError,
    InvalidRecordError,
    PlanningError,
    UnknownExportFormatError,
)
from .exporters import ExcelExporter, JSONExporter, get_exporter
from .loader import DataLoader
from .models import (
    AssignmentReport,
    CapacityAnalysis,
    DashboardSummary,
    GroupModuleSchedule,
    GroupStatus,
    Module,
    ModuleTrainerAssignment,
    ModuleType,
    MonthBucket,
    Room,
    RoomOccupancy,
    RoomType,
    ScheduleStatus,
    Trainer,
    TrainerWorkload,
    TrainingGroup,
    WeekBucket,
)
from .service import CapacityService
from .settings import PlanningSettings
from .store import EntityStore

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "CapacityService",
    "DataLoader",
    "EntityStore",
    "PlanningSettings",
    # Models
    "Trainer",
    "Module",
    "ModuleType",
    "Room",
    "RoomType",
    "TrainingGroup",
    "GroupStatus",
    "ModuleTrainerAssignment",
    "GroupModuleSchedule",
    "ScheduleStatus",
    "AssignmentReport",
    "TrainerWorkload",
    "RoomOccupancy",
    "WeekBucket",
    "MonthBucket",
    "CapacityAnalysis",
    "DashboardSummary",
    # Exporters
    "JSONExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "PlanningError",
    "ConfigError",
    "InvalidRecordError",
    "UnknownExportFormatError",
]
