"""Loads planning data and settings from a data directory."""

import json
import logging
from pathlib import Path
from typing import Any

from .exceptions import ConfigError, InvalidRecordError
from .models import normalize_keys, parse_bool
from .service import CapacityService
from .settings import PlanningSettings

logger = logging.getLogger(__name__)


class DataLoader:
    """Unified loader for the files of a planning data directory.

    Expected files (all optional):
    - settings.json: PlanningSettings overrides
    - trainers.json, modules.json, rooms.json: lists of records
    - competencies.json: list of {module_id, trainer_id, can_teach}
    - groups.json: list of training groups, created in file order so the
      auto-assignment pass runs for each of them

    Record keys may be snake_case or camelCase.
    """

    def __init__(self, data_dir: Path | None = None):
        if data_dir is None:
            data_dir = Path("data")

        self.data_dir = Path(data_dir)
        if not self.data_dir.is_dir():
            raise ConfigError("data directory not found", path=str(self.data_dir))

        settings_path = self._get_path("settings.json")
        self.settings = (
            PlanningSettings.from_file(settings_path) if settings_path else PlanningSettings()
        )

    def _get_path(self, filename: str) -> Path | None:
        """Get path to data file if it exists."""
        path = self.data_dir / filename
        return path if path.exists() else None

    def _load_records(self, filename: str) -> list[dict[str, Any]]:
        """Load a JSON list of objects, or an empty list when the file is absent."""
        path = self._get_path(filename)
        if path is None:
            return []

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(str(e), path=str(path)) from e

        if not isinstance(data, list):
            raise ConfigError("expected a JSON list of records", path=str(path))
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                raise InvalidRecordError("expected an object", source=filename, index=index)
        return data

    def _create_all(self, filename: str, create) -> int:
        count = 0
        for index, record in enumerate(self._load_records(filename)):
            try:
                create(record)
            except InvalidRecordError as e:
                raise InvalidRecordError(e.reason, source=filename, index=index) from e
            count += 1
        return count

    def load(self) -> CapacityService:
        """Build a service populated with the directory's data."""
        service = CapacityService(settings=self.settings)
        self.load_into(service)
        return service

    def load_into(self, service: CapacityService) -> None:
        """Populate an existing service."""
        trainers = self._create_all("trainers.json", service.create_trainer)
        modules = self._create_all("modules.json", service.create_module)
        rooms = self._create_all("rooms.json", service.create_room)

        for index, record in enumerate(self._load_records("competencies.json")):
            record = normalize_keys(record)
            try:
                can_teach = parse_bool(record.get("can_teach", True))
                service.set_module_trainer_assignment(
                    record["module_id"], record["trainer_id"], can_teach
                )
            except KeyError as e:
                raise InvalidRecordError(
                    f"missing field {e}", source="competencies.json", index=index
                ) from e
            except ValueError as e:
                raise InvalidRecordError(str(e), source="competencies.json", index=index) from e

        groups = self._create_all("groups.json", service.create_training_group)

        logger.info(
            f"Loaded {trainers} trainer(s), {modules} module(s), {rooms} room(s) "
            f"and {groups} group(s) from {self.data_dir}"
        )
