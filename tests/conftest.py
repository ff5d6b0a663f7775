"""Test fixtures for capacity planner tests."""

import json
from datetime import date

import pytest

from capacity_planner.service import CapacityService


@pytest.fixture
def service():
    """Empty capacity service with default settings."""
    return CapacityService()


@pytest.fixture
def alice(service):
    """Python trainer with a 35h weekly cap."""
    return service.create_trainer(
        {
            "name": "Alice",
            "email": "alice@example.com",
            "max_hours_per_week": 35,
            "specialties": ["Python"],
        }
    )


@pytest.fixture
def bob(service):
    """Trainer qualified for every practical module."""
    return service.create_trainer(
        {
            "name": "Bob",
            "email": "bob@example.com",
            "max_hours_per_week": 20,
            "specialties": ["Formation pratique"],
        }
    )


@pytest.fixture
def python_basics(service):
    """40h theoretical module taught 2x2h per week (10 weeks)."""
    return service.create_module(
        {
            "name": "Python Basics",
            "total_hours": 40,
            "sessions_per_week": 2,
            "hours_per_session": 2,
            "type": "theoretical",
        }
    )


@pytest.fixture
def workshop_module(service):
    """24h practical module taught 2x3h per week (4 weeks)."""
    return service.create_module(
        {
            "name": "Atelier réseau",
            "total_hours": 24,
            "sessions_per_week": 2,
            "hours_per_session": 3,
            "type": "practical",
        }
    )


@pytest.fixture
def classroom(service):
    """Standard classroom."""
    return service.create_room(
        {"name": "Salle A", "type": "classroom", "capacity": 20, "equipment": ["projecteur"]}
    )


@pytest.fixture
def group_start():
    return date(2024, 1, 1)


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with one trainer, one module, one room and one group."""
    records = {
        "trainers.json": [
            {
                "id": "t1",
                "name": "Alice",
                "email": "alice@example.com",
                "maxHoursPerWeek": 35,
                "specialties": ["Python"],
            }
        ],
        "modules.json": [
            {
                "id": "m1",
                "name": "Python Basics",
                "totalHours": 40,
                "sessionsPerWeek": 2,
                "hoursPerSession": 2,
                "type": "theoretical",
            }
        ],
        "rooms.json": [
            {"id": "r1", "name": "Salle A", "type": "classroom", "capacity": 20}
        ],
        "groups.json": [
            {
                "id": "g1",
                "name": "Groupe 1",
                "participantCount": 12,
                "startDate": "2024-01-01",
                "roomId": "r1",
            }
        ],
    }
    for filename, content in records.items():
        (tmp_path / filename).write_text(json.dumps(content), encoding="utf-8")
    return tmp_path
