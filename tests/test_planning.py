"""Tests for TemporalPlanner class."""

from datetime import date

from capacity_planner.constants import CONFLICT_ROOM_OVERLOAD, CONFLICT_TRAINER_OVERLOAD
from capacity_planner.models import WeekRoomEntry, WeekTrainerEntry
from capacity_planner.service import CapacityService
from capacity_planner.settings import PlanningSettings


def new_group(service, name="G1", start="2024-01-01", **extra):
    return service.create_training_group(
        {"name": name, "participant_count": 12, "start_date": start, **extra}
    )


class TestWeeklyPlanning:
    """Tests for week-by-week projection."""

    def test_empty(self, service):
        assert service.weekly_planning() == []

    def test_single_module(self, service, alice, python_basics, classroom):
        new_group(service, room_id=classroom.id)
        weeks = service.weekly_planning()

        assert [w.week for w in weeks] == list(range(1, 11))
        first = weeks[0]
        assert first.start_date == date(2024, 1, 1)
        assert first.end_date == date(2024, 1, 7)
        assert first.month_name == "Janvier"
        assert weeks[-1].start_date == date(2024, 3, 4)
        assert weeks[-1].month_name == "Mars"

        [group] = first.groups
        assert group.room_name == "Salle A"
        assert group.participant_count == 12
        [module] = group.modules
        assert module.module_name == "Python Basics"
        assert module.trainer_name == "Alice"
        assert module.weekly_hours == 4.0

        assert first.trainer_workload == [
            WeekTrainerEntry(trainer_id=alice.id, name="Alice", weekly_hours=4.0)
        ]
        assert first.room_occupancy == [
            WeekRoomEntry(room_id=classroom.id, name="Salle A", occupied_hours=4.0)
        ]
        assert first.to_dict()["room_occupancy"] == [
            {"room_id": classroom.id, "name": "Salle A", "occupied_hours": 4.0}
        ]

    def test_group_without_room(self, service, alice, python_basics):
        new_group(service)
        first = service.weekly_planning()[0]
        assert first.groups[0].room_name == "Aucune salle"
        assert first.room_occupancy == []

    def test_groups_share_calendar_weeks(self, service, alice, python_basics):
        new_group(service, "G1", start="2024-01-01")
        new_group(service, "G2", start="2024-01-15")
        weeks = service.weekly_planning()

        # G2 starts two weeks later and ends two weeks later
        assert len(weeks) == 12
        assert [g.group_name for g in weeks[0].groups] == ["G1"]
        assert [g.group_name for g in weeks[2].groups] == ["G1", "G2"]
        assert [g.group_name for g in weeks[-1].groups] == ["G2"]
        assert weeks[2].trainer_workload[0].weekly_hours == 8.0

    def test_gap_weeks_not_emitted(self, service, alice, python_basics):
        new_group(service, "G1", start="2024-01-01")
        new_group(service, "G2", start="2024-06-03")
        weeks = service.weekly_planning()
        assert len(weeks) == 20
        assert weeks[10].week == 23
        assert weeks[10].start_date == date(2024, 6, 3)

    def test_modules_sorted_by_order(self, service):
        service.create_trainer(
            {"name": "Alice", "max_hours_per_week": 35, "specialties": ["Python", "SQL"]}
        )
        service.create_trainer(
            {"name": "Bob", "max_hours_per_week": 35, "specialties": ["Python", "SQL"]}
        )
        for name in ("Python Basics", "SQL"):
            service.create_module(
                {
                    "name": name,
                    "total_hours": 4,
                    "sessions_per_week": 2,
                    "hours_per_session": 2,
                    "type": "theoretical",
                }
            )
        new_group(service)
        weeks = service.weekly_planning()
        assert len(weeks) == 2
        assert [m.module_name for m in weeks[0].groups[0].modules] == ["Python Basics"]
        assert [m.module_name for m in weeks[1].groups[0].modules] == ["SQL"]
        assert weeks[1].trainer_workload[0].name == "Bob"

    def test_deleted_group_ignored(self, service, alice, python_basics):
        group = new_group(service)
        service.delete_training_group(group.id)
        assert service.weekly_planning() == []


class TestMonthlyPlanning:
    """Tests for month-by-month projection."""

    def test_twelve_buckets_from_today(self, service):
        months = service.monthly_planning(today=date(2024, 11, 15))
        assert len(months) == 12
        assert (months[0].year, months[0].month, months[0].month_name) == (2024, 11, "Novembre")
        assert (months[2].year, months[2].month) == (2025, 1)
        assert (months[-1].year, months[-1].month) == (2025, 10)
        assert all(m.total_groups == 0 for m in months)
        assert not any(m.has_conflicts for m in months)

    def test_hours_per_overlapped_month(self, service, alice, python_basics):
        # 2024-01-01 -> 2024-03-10 touches January, February and March
        new_group(service)
        months = service.monthly_planning(today=date(2024, 1, 20))

        for month in months[:3]:
            assert month.total_groups == 1
            assert month.total_trainer_hours == 16.0
            assert month.total_room_hours == 16.0
        assert months[3].total_groups == 0

    def test_schedules_before_window_ignored(self, service, alice, python_basics):
        new_group(service)
        months = service.monthly_planning(today=date(2024, 6, 1))
        assert all(m.total_groups == 0 for m in months)

    def test_trainer_conflict(self, service, python_basics, classroom):
        service.create_trainer(
            {"name": "Solo", "max_hours_per_week": 2, "specialties": ["Python"]}
        )
        new_group(service, room_id=classroom.id)
        january = service.monthly_planning(today=date(2024, 1, 1))[0]

        [conflict] = january.conflicts
        assert conflict.type == CONFLICT_TRAINER_OVERLOAD
        assert conflict.description == "Surcharge formateurs: 16h planifiées pour 8h disponibles"

    def test_room_conflict_without_rooms(self, service, alice, python_basics):
        new_group(service)
        january = service.monthly_planning(today=date(2024, 1, 1))[0]
        assert [c.type for c in january.conflicts] == [CONFLICT_ROOM_OVERLOAD]

    def test_custom_window(self):
        service = CapacityService(settings=PlanningSettings(planning_months=3, weeks_per_month=5))
        assert len(service.monthly_planning(today=date(2024, 1, 1))) == 3
