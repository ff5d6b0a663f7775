"""Capacity analysis: constraints, assignment completeness and recommendations."""

import logging
from datetime import date

from .constants import (
    MSG_CAPACITY_OPTIMAL,
    MSG_GROUPS_WITHOUT_MODULES,
    MSG_GROUPS_WITHOUT_ROOM,
    MSG_ROOMS_OVERBOOKED,
    MSG_TRAINERS_OVERLOADED,
)
from .models import (
    CapacityAnalysis,
    DashboardSummary,
    GroupAssignmentSummary,
    GroupStatus,
    RoomConstraint,
    RoomOccupancy,
    TrainerConstraint,
    TrainerWorkload,
)
from .planning import TemporalPlanner
from .settings import PlanningSettings
from .store import EntityStore
from .workload import WorkloadCalculator

logger = logging.getLogger(__name__)


class CapacityAnalyzer:
    """Combines workload, occupancy and planning into one capacity report.

    Overload and overbooking are reported as flags and recommendations,
    never raised.
    """

    def __init__(
        self,
        store: EntityStore,
        settings: PlanningSettings | None = None,
        workload: WorkloadCalculator | None = None,
        planner: TemporalPlanner | None = None,
    ):
        self.store = store
        self.settings = settings or PlanningSettings()
        self.workload = workload or WorkloadCalculator(store, self.settings)
        self.planner = planner or TemporalPlanner(store, self.settings)

    def trainer_constraints(
        self, workload: list[TrainerWorkload] | None = None
    ) -> list[TrainerConstraint]:
        workload = workload if workload is not None else self.workload.trainer_workload()
        return [
            TrainerConstraint(
                trainer_id=tw.trainer_id,
                name=tw.name,
                is_overloaded=tw.occupation_rate > self.settings.overload_threshold,
                available_hours=max(0, tw.max_hours - tw.current_hours),
            )
            for tw in workload
        ]

    def room_constraints(
        self, occupancy: list[RoomOccupancy] | None = None
    ) -> list[RoomConstraint]:
        occupancy = occupancy if occupancy is not None else self.workload.room_occupancy()
        constraints = []
        for ro in occupancy:
            room = self.store.get_room(ro.room_id)
            constraints.append(
                RoomConstraint(
                    room_id=ro.room_id,
                    name=ro.name,
                    type=room.type.value if room else "unknown",
                    is_overbooked=ro.occupation_rate > self.settings.overload_threshold,
                    available_capacity=max(0, ro.available_hours - ro.occupied_hours),
                )
            )
        return constraints

    def group_assignments(self) -> list[GroupAssignmentSummary]:
        """Module count, distinct trainers and room presence per group."""
        summaries = []
        for group in self.store.get_all_training_groups():
            schedules = self.store.get_group_module_schedules_by_group(group.id)
            summaries.append(
                GroupAssignmentSummary(
                    group_id=group.id,
                    group_name=group.name,
                    assigned_modules=len(schedules),
                    assigned_trainers=len({s.trainer_id for s in schedules}),
                    has_room=group.room_id is not None,
                )
            )
        return summaries

    @staticmethod
    def recommendations(
        trainer_constraints: list[TrainerConstraint],
        room_constraints: list[RoomConstraint],
        group_assignments: list[GroupAssignmentSummary],
    ) -> list[str]:
        """Build the recommendation lines, in a fixed order.

        Checks: trainer overload, room overbooking, groups without modules,
        groups without a room. When none fires, a single "capacity optimal"
        line is returned.
        """
        lines = []

        overloaded = sum(1 for tc in trainer_constraints if tc.is_overloaded)
        if overloaded:
            lines.append(MSG_TRAINERS_OVERLOADED.format(count=overloaded))

        overbooked = sum(1 for rc in room_constraints if rc.is_overbooked)
        if overbooked:
            lines.append(MSG_ROOMS_OVERBOOKED.format(count=overbooked))

        without_modules = sum(1 for ga in group_assignments if ga.assigned_modules == 0)
        if without_modules:
            lines.append(MSG_GROUPS_WITHOUT_MODULES.format(count=without_modules))

        without_room = sum(1 for ga in group_assignments if not ga.has_room)
        if without_room:
            lines.append(MSG_GROUPS_WITHOUT_ROOM.format(count=without_room))

        if not lines:
            lines.append(MSG_CAPACITY_OPTIMAL)

        return lines

    def capacity_analysis(self, today: date | None = None) -> CapacityAnalysis:
        """Build the full capacity report.

        Args:
            today: Reference date for the monthly projection

        Returns:
            CapacityAnalysis with constraints, planning and recommendations
        """
        trainer_constraints = self.trainer_constraints()
        room_constraints = self.room_constraints()
        group_assignments = self.group_assignments()

        analysis = CapacityAnalysis(
            trainer_constraints=trainer_constraints,
            room_constraints=room_constraints,
            group_assignments=group_assignments,
            weekly_planning=self.planner.weekly_planning(),
            monthly_planning=self.planner.monthly_planning(today),
            recommendations=self.recommendations(
                trainer_constraints, room_constraints, group_assignments
            ),
        )

        logger.info(
            f"Capacity analysis: {len(analysis.weekly_planning)} week(s), "
            f"{sum(1 for m in analysis.monthly_planning if m.has_conflicts)} month(s) in conflict"
        )
        return analysis

    def dashboard_summary(self) -> DashboardSummary:
        """Headline occupation figures and group counts."""
        trainer_workload = self.workload.trainer_workload()
        room_occupancy = self.workload.room_occupancy()
        groups = self.store.get_all_training_groups()

        avg_trainer = _average_rate([tw.occupation_rate for tw in trainer_workload])
        avg_room = _average_rate([ro.occupation_rate for ro in room_occupancy])

        return DashboardSummary(
            trainer_occupation_rate=avg_trainer,
            room_occupation_rate=avg_room,
            active_groups=sum(1 for g in groups if g.status == GroupStatus.ACTIVE),
            total_groups=len(groups),
            completed_groups=sum(1 for g in groups if g.status == GroupStatus.COMPLETED),
            delayed_groups=sum(1 for g in groups if g.status == GroupStatus.DELAYED),
            capacity_remaining=max(0, 100 - max(avg_trainer, avg_room)),
            total_trainers=len(trainer_workload),
            total_rooms=len(room_occupancy),
            trainer_workload=trainer_workload,
            room_occupancy=room_occupancy,
        )


def _average_rate(rates: list[int]) -> int:
    """Rounded mean of occupation rates (0 for an empty list)."""
    if not rates:
        return 0
    return int(sum(rates) / len(rates) + 0.5)
