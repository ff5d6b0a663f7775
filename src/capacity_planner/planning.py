"""Week-by-week and month-by-month projection of group schedules."""

import logging
from datetime import date, timedelta

from .constants import (
    CONFLICT_ROOM_OVERLOAD,
    CONFLICT_TRAINER_OVERLOAD,
    DAYS_PER_WEEK,
    NO_ROOM_LABEL,
    UNKNOWN_TRAINER_LABEL,
)
from .models import (
    GroupModuleSchedule,
    MonthBucket,
    MonthConflict,
    WeekBucket,
    WeekGroupEntry,
    WeekModuleEntry,
    WeekRoomEntry,
    WeekTrainerEntry,
)
from .settings import PlanningSettings
from .store import EntityStore
from .utils import (
    add_weeks,
    first_of_month,
    format_hours,
    iter_months,
    month_name,
    next_month,
    weeks_between,
)

logger = logging.getLogger(__name__)


class TemporalPlanner:
    """Expands schedules into weekly and monthly buckets.

    Weekly buckets use absolute calendar weeks: week 1 starts on the
    earliest start date of any dated schedule, and every schedule week is
    placed by its calendar distance from that anchor. Schedules of groups
    starting on different dates therefore only share a bucket when they
    really run during the same days.
    """

    def __init__(self, store: EntityStore, settings: PlanningSettings | None = None):
        self.store = store
        self.settings = settings or PlanningSettings()

    def _dated_schedules(self) -> list[GroupModuleSchedule]:
        """Live schedules with a date range and a known module."""
        return [
            s
            for s in self.store.get_live_schedules()
            if s.start_date is not None
            and s.end_date is not None
            and self.store.get_module(s.module_id) is not None
        ]

    def weekly_planning(self) -> list[WeekBucket]:
        """Project every dated schedule onto calendar weeks.

        Returns:
            Week buckets sorted by week number. Weeks in which nothing runs
            are not emitted.
        """
        schedules = self._dated_schedules()
        if not schedules:
            return []

        anchor = min(s.start_date for s in schedules)
        buckets: dict[int, WeekBucket] = {}
        # week -> group_id -> entry
        group_entries: dict[int, dict[str, WeekGroupEntry]] = {}
        # week -> trainer_id / room_id -> row
        trainer_rows: dict[int, dict[str, WeekTrainerEntry]] = {}
        room_rows: dict[int, dict[str, WeekRoomEntry]] = {}

        for schedule in schedules:
            module = self.store.get_module(schedule.module_id)
            group = self.store.get_training_group(schedule.group_id)
            trainer = self.store.get_trainer(schedule.trainer_id)
            room = self.store.get_room(group.room_id) if group.room_id else None
            trainer_name = trainer.name if trainer else UNKNOWN_TRAINER_LABEL
            weekly_load = module.weekly_load

            for index in range(module.duration_weeks):
                week_start = add_weeks(schedule.start_date, index)
                week = weeks_between(anchor, week_start) + 1

                if week not in buckets:
                    bucket_start = add_weeks(anchor, week - 1)
                    buckets[week] = WeekBucket(
                        week=week,
                        start_date=bucket_start,
                        end_date=bucket_start + timedelta(days=DAYS_PER_WEEK - 1),
                        month_name=month_name(bucket_start.month),
                    )
                    group_entries[week] = {}
                    trainer_rows[week] = {}
                    room_rows[week] = {}

                entries = group_entries[week]
                if group.id not in entries:
                    entries[group.id] = WeekGroupEntry(
                        group_id=group.id,
                        group_name=group.name,
                        participant_count=group.participant_count,
                        room_name=room.name if room else NO_ROOM_LABEL,
                    )
                entries[group.id].modules.append(
                    WeekModuleEntry(
                        module_id=module.id,
                        module_name=module.name,
                        trainer_id=schedule.trainer_id,
                        trainer_name=trainer_name,
                        weekly_hours=weekly_load,
                        total_hours=module.total_hours,
                        type=module.type,
                        progress=schedule.progress,
                        scheduled_order=schedule.scheduled_order,
                    )
                )

                trainers = trainer_rows[week]
                if schedule.trainer_id not in trainers:
                    trainers[schedule.trainer_id] = WeekTrainerEntry(
                        trainer_id=schedule.trainer_id, name=trainer_name
                    )
                trainers[schedule.trainer_id].weekly_hours += weekly_load

                if room is not None:
                    rooms = room_rows[week]
                    if room.id not in rooms:
                        rooms[room.id] = WeekRoomEntry(room_id=room.id, name=room.name)
                    rooms[room.id].occupied_hours += weekly_load

        result = []
        for week in sorted(buckets):
            bucket = buckets[week]
            for entry in group_entries[week].values():
                entry.modules.sort(key=lambda m: m.scheduled_order)
                bucket.groups.append(entry)
            bucket.trainer_workload = list(trainer_rows[week].values())
            bucket.room_occupancy = list(room_rows[week].values())
            result.append(bucket)

        logger.debug(f"Weekly planning: {len(result)} week(s) from {anchor.isoformat()}")
        return result

    def monthly_planning(self, today: date | None = None) -> list[MonthBucket]:
        """Project schedules onto the coming calendar months.

        Each schedule adds one group occurrence and ``weekly load x
        weeks_per_month`` hours to every month its date range touches.
        A month gets a conflict when the projected hours exceed the
        combined trainer caps, or the combined room opening hours.

        Args:
            today: Reference date; the first bucket is its month. Defaults
                   to the current date.

        Returns:
            ``planning_months`` consecutive month buckets
        """
        today = today or date.today()
        weeks_per_month = self.settings.weeks_per_month

        buckets: dict[tuple[int, int], MonthBucket] = {}
        current = first_of_month(today)
        for _ in range(self.settings.planning_months):
            buckets[(current.year, current.month)] = MonthBucket(
                month=current.month,
                year=current.year,
                month_name=month_name(current.month),
            )
            current = next_month(current)

        for schedule in self._dated_schedules():
            module = self.store.get_module(schedule.module_id)
            monthly_hours = module.weekly_load * weeks_per_month
            for key in iter_months(schedule.start_date, schedule.end_date):
                bucket = buckets.get(key)
                if bucket is None:
                    continue
                bucket.total_groups += 1
                bucket.total_trainer_hours += monthly_hours
                bucket.total_room_hours += monthly_hours

        trainer_capacity = sum(
            t.max_hours_per_week * weeks_per_month for t in self.store.get_all_trainers()
        )
        room_capacity = (
            len(self.store.get_all_rooms()) * self.settings.room_hours_per_week * weeks_per_month
        )

        for bucket in buckets.values():
            if bucket.total_trainer_hours > trainer_capacity:
                bucket.conflicts.append(
                    MonthConflict(
                        type=CONFLICT_TRAINER_OVERLOAD,
                        description=(
                            f"Surcharge formateurs: {format_hours(bucket.total_trainer_hours)}h "
                            f"planifiées pour {format_hours(trainer_capacity)}h disponibles"
                        ),
                    )
                )
            if bucket.total_room_hours > room_capacity:
                bucket.conflicts.append(
                    MonthConflict(
                        type=CONFLICT_ROOM_OVERLOAD,
                        description=(
                            f"Surcharge salles: {format_hours(bucket.total_room_hours)}h "
                            f"planifiées pour {format_hours(room_capacity)}h disponibles"
                        ),
                    )
                )

        return list(buckets.values())
