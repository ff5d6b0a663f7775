"""Tests for WorkloadCalculator class."""

from capacity_planner.models import ScheduleStatus
from capacity_planner.service import CapacityService
from capacity_planner.settings import PlanningSettings


class TestTrainerWorkload:
    """Tests for trainer load computation."""

    def test_no_schedules(self, service, alice):
        workload = service.trainer_workload()
        assert len(workload) == 1
        assert workload[0].current_hours == 0
        assert workload[0].occupation_rate == 0

    def test_load_from_schedules(self, service, alice, python_basics, group_start):
        service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start}
        )
        [tw] = service.trainer_workload()
        assert tw.current_hours == 4.0
        assert tw.max_hours == 35
        assert tw.occupation_rate == 11

    def test_completed_schedules_do_not_count(self, service, alice, python_basics, group_start):
        group = service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start}
        )
        [schedule] = service.list_schedules_for_group(group.id)
        service.update_schedule_progress(schedule.id, status=ScheduleStatus.COMPLETED.value)

        [tw] = service.trainer_workload()
        assert tw.current_hours == 0

    def test_cache_is_rebuilt(self, service, alice, python_basics, group_start):
        service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start}
        )
        alice.current_hours_per_week = 999
        [tw] = service.trainer_workload()
        assert tw.current_hours == 4.0

    def test_inactive_trainer_not_listed(self, service, alice):
        service.delete_trainer(alice.id)
        assert service.trainer_workload() == []

    def test_soft_deleted_module_still_counts(self, service, alice, python_basics, group_start):
        service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start}
        )
        service.delete_module(python_basics.id)
        [tw] = service.trainer_workload()
        assert tw.current_hours == 4.0

    def test_deleted_group_does_not_count(self, service, alice, python_basics, group_start):
        group = service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start}
        )
        service.delete_training_group(group.id)
        [tw] = service.trainer_workload()
        assert tw.current_hours == 0


class TestRoomOccupancy:
    """Tests for room occupancy computation."""

    def test_room_hours(self, service, alice, python_basics, classroom, group_start):
        service.create_training_group(
            {
                "name": "G1",
                "participant_count": 10,
                "start_date": group_start,
                "room_id": classroom.id,
            }
        )
        [ro] = service.room_occupancy()
        assert ro.occupied_hours == 4.0
        assert ro.available_hours == 40
        assert ro.occupation_rate == 10

    def test_group_without_room(self, service, alice, python_basics, classroom, group_start):
        service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start}
        )
        [ro] = service.room_occupancy()
        assert ro.occupied_hours == 0
        assert ro.occupation_rate == 0

    def test_completed_group_frees_room(
        self, service, alice, python_basics, classroom, group_start
    ):
        group = service.create_training_group(
            {
                "name": "G1",
                "participant_count": 10,
                "start_date": group_start,
                "room_id": classroom.id,
            }
        )
        service.update_training_group(group.id, {"status": "completed"})
        [ro] = service.room_occupancy()
        assert ro.occupied_hours == 0

    def test_custom_room_hours(self, group_start):
        service = CapacityService(settings=PlanningSettings(room_hours_per_week=8))
        service.create_trainer({"name": "Alice", "max_hours_per_week": 35, "specialties": ["Python"]})
        service.create_module(
            {
                "name": "Python Basics",
                "total_hours": 40,
                "sessions_per_week": 2,
                "hours_per_session": 2,
                "type": "theoretical",
            }
        )
        room = service.create_room({"name": "A", "type": "classroom", "capacity": 10})
        service.create_training_group(
            {"name": "G1", "participant_count": 10, "start_date": group_start, "room_id": room.id}
        )
        [ro] = service.room_occupancy()
        assert ro.available_hours == 8
        assert ro.occupation_rate == 50
