"""Greedy auto-assignment of modules to trainers for a training group."""

import logging

from .constants import ModuleOrder
from .models import (
    AssignmentReport,
    GroupModuleSchedule,
    Module,
    ScheduleStatus,
    Trainer,
    TrainingGroup,
)
from .settings import PlanningSettings
from .store import EntityStore
from .utils import add_weeks, module_end_date, trainer_matches_module
from .workload import WorkloadCalculator

logger = logging.getLogger(__name__)


class AutoAssigner:
    """
    Assigns each active module to the least-loaded qualified trainer.

    The pass is greedy: modules are walked once in the configured order, no
    choice is revisited, and a module without any qualified trainer is
    skipped without error. Skipped modules are listed in the returned
    AssignmentReport and surface in the capacity analysis as groups with
    missing modules.

    Side effects of a pass:
    - one GroupModuleSchedule row per covered module
    - the chosen trainer's ``current_hours_per_week`` cache grows by the
      module's weekly load (the cache is rebuilt from schedules before each pass)
    - a competency row (can_teach=True) is recorded the first time a trainer
      is picked for a module through a specialty match
    - the group's ``estimated_end_date`` is set
    """

    def __init__(
        self,
        store: EntityStore,
        settings: PlanningSettings | None = None,
        workload: WorkloadCalculator | None = None,
    ):
        self.store = store
        self.settings = settings or PlanningSettings()
        self.workload = workload or WorkloadCalculator(store, self.settings)

    def ordered_modules(self) -> list[Module]:
        """Active modules in the order the pass walks them."""
        modules = self.store.get_all_modules()
        if self.settings.module_order == ModuleOrder.LONGEST_FIRST:
            # sorted() is stable, so equal lengths keep insertion order
            return sorted(modules, key=lambda m: m.total_hours, reverse=True)
        return modules

    def is_qualified(self, trainer: Trainer, module: Module) -> bool:
        """Check whether a trainer may teach a module.

        An explicit competency row decides on its own (including a
        can_teach=False veto). Without one, the trainer's specialties are
        fuzzy-matched against the module.
        """
        assignment = self.store.find_assignment(module.id, trainer.id)
        if assignment is not None:
            return assignment.can_teach
        return trainer_matches_module(trainer, module)

    def select_trainer(self, module: Module, trainers: list[Trainer]) -> Trainer | None:
        """Pick the qualified trainer with the lowest current load.

        Ties go to the trainer met first in `trainers`.
        """
        selected: Trainer | None = None
        for trainer in trainers:
            if not trainer.is_active or not self.is_qualified(trainer, module):
                continue
            if selected is None or trainer.current_hours_per_week < selected.current_hours_per_week:
                selected = trainer
        return selected

    def assign_modules_to_group(
        self,
        group: TrainingGroup,
        kept: list[GroupModuleSchedule] | None = None,
    ) -> AssignmentReport:
        """
        Run one assignment pass for a group.

        Args:
            group: Group to build the curriculum for
            kept: Schedules of this group that must stay as they are. Their
                  modules are not reassigned, and new modules are placed
                  after them in both order and time.

        Returns:
            AssignmentReport describing what was created and what was skipped
        """
        kept = sorted(kept or [], key=lambda s: s.scheduled_order)
        covered = {s.module_id for s in kept}
        order_offset = max((s.scheduled_order for s in kept), default=0)
        cumulative_weeks = 0
        for schedule in kept:
            module = self.store.get_module(schedule.module_id)
            if module is not None:
                cumulative_weeks += module.duration_weeks

        self.workload.refresh_trainer_loads()
        trainers = self.store.get_all_trainers()
        modules = [m for m in self.ordered_modules() if m.id not in covered]

        report = AssignmentReport(group_id=group.id)

        for position, module in enumerate(modules, start=1):
            trainer = self.select_trainer(module, trainers)
            if trainer is None:
                logger.warning(
                    f"No qualified trainer for module '{module.name}' in group '{group.name}', skipping"
                )
                report.uncovered_module_ids.append(module.id)
                continue

            logger.debug(
                f"Module '{module.name}' -> {trainer.name} "
                f"(load {trainer.current_hours_per_week}h/{trainer.max_hours_per_week}h)"
            )

            weekly_load = module.weekly_load
            duration = module.duration_weeks
            start_date = add_weeks(group.start_date, cumulative_weeks)

            schedule = GroupModuleSchedule(
                id=self.store.new_id(),
                group_id=group.id,
                module_id=module.id,
                trainer_id=trainer.id,
                scheduled_order=order_offset + position,
                start_date=start_date,
                end_date=module_end_date(start_date, duration),
                progress=0,
                hours_completed=0.0,
                status=ScheduleStatus.PLANNED,
            )
            self.store.add_group_module_schedule(schedule)
            report.schedules.append(schedule)

            trainer.current_hours_per_week += weekly_load

            if self.store.find_assignment(module.id, trainer.id) is None:
                discovered = self.store.upsert_module_trainer_assignment(
                    module.id, trainer.id, can_teach=True
                )
                report.discovered.append(discovered)

            cumulative_weeks += duration

        group.estimated_end_date = add_weeks(group.start_date, cumulative_weeks)
        report.total_weeks = cumulative_weeks

        logger.info(
            f"Group '{group.name}': {len(report.schedules)} module(s) scheduled, "
            f"{len(report.uncovered_module_ids)} without trainer, "
            f"estimated end {group.estimated_end_date.isoformat()}"
        )
        return report

    def recalculate_group(self, group: TrainingGroup) -> AssignmentReport:
        """Drop a group's planned schedules and assign its modules again.

        Active and completed schedules are kept in place.
        """
        kept = []
        for schedule in self.store.get_group_module_schedules_by_group(group.id):
            if schedule.status == ScheduleStatus.PLANNED:
                self.store.delete_group_module_schedule(schedule.id)
            else:
                kept.append(schedule)
        return self.assign_modules_to_group(group, kept=kept)

    def auto_assign_all_trainers_to_modules(self) -> int:
        """
        Record a competency row for every specialty match in the catalogue.

        Every active trainer is matched against every active module. Pairs
        that already have a row (including can_teach=False vetoes) are left
        untouched, so running this twice creates nothing the second time.

        Returns:
            Number of competency rows created
        """
        created = 0
        for trainer in self.store.get_all_trainers():
            for module in self.store.get_all_modules():
                if not trainer_matches_module(trainer, module):
                    continue
                if self.store.find_assignment(module.id, trainer.id) is not None:
                    continue
                self.store.upsert_module_trainer_assignment(module.id, trainer.id, can_teach=True)
                created += 1

        logger.info(f"Created {created} competency row(s) from specialties")
        return created
