"""Export functionality for capacity analysis reports."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .exceptions import UnknownExportFormatError
from .models import CapacityAnalysis


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, analysis: CapacityAnalysis, output_path: str | Path) -> None:
        """Export a capacity analysis to file.

        Args:
            analysis: CapacityAnalysis to export
            output_path: Path to output file
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, analysis: CapacityAnalysis, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                analysis.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, analysis: CapacityAnalysis, output_path: str | Path) -> None:
        """Export capacity analysis to an Excel file.

        Creates workbook with sheets:
        - Formateurs: trainer constraints
        - Salles: room constraints
        - Groupes: group assignment summaries
        - Semaines: one row per (week, group, module)
        - Mois: monthly projection with conflicts
        - Recommandations: recommendation lines

        Args:
            analysis: CapacityAnalysis to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._export_trainers_sheet(analysis, writer)
            self._export_rooms_sheet(analysis, writer)
            self._export_groups_sheet(analysis, writer)
            self._export_weekly_sheet(analysis, writer)
            self._export_monthly_sheet(analysis, writer)
            self._export_recommendations_sheet(analysis, writer)

    def _write(
        self, writer: pd.ExcelWriter, sheet_name: str, rows: list[dict], columns: list[str]
    ) -> None:
        df = pd.DataFrame(rows, columns=columns)
        df.to_excel(writer, sheet_name=sheet_name, index=False)

    def _export_trainers_sheet(self, analysis: CapacityAnalysis, writer: pd.ExcelWriter) -> None:
        rows = [
            {
                "Formateur": tc.name,
                "Statut": "Surcharge" if tc.is_overloaded else "OK",
                "Heures disponibles": tc.available_hours,
            }
            for tc in analysis.trainer_constraints
        ]
        self._write(writer, "Formateurs", rows, ["Formateur", "Statut", "Heures disponibles"])

    def _export_rooms_sheet(self, analysis: CapacityAnalysis, writer: pd.ExcelWriter) -> None:
        rows = [
            {
                "Salle": rc.name,
                "Type": rc.type,
                "Statut": "Surbookée" if rc.is_overbooked else "OK",
                "Heures libres": rc.available_capacity,
            }
            for rc in analysis.room_constraints
        ]
        self._write(writer, "Salles", rows, ["Salle", "Type", "Statut", "Heures libres"])

    def _export_groups_sheet(self, analysis: CapacityAnalysis, writer: pd.ExcelWriter) -> None:
        rows = [
            {
                "Groupe": ga.group_name,
                "Modules": ga.assigned_modules,
                "Formateurs": ga.assigned_trainers,
                "Salle assignée": "Oui" if ga.has_room else "Non",
            }
            for ga in analysis.group_assignments
        ]
        self._write(writer, "Groupes", rows, ["Groupe", "Modules", "Formateurs", "Salle assignée"])

    def _export_weekly_sheet(self, analysis: CapacityAnalysis, writer: pd.ExcelWriter) -> None:
        """One row per module running in a week."""
        rows = []
        for week in analysis.weekly_planning:
            for group in week.groups:
                for module in group.modules:
                    rows.append(
                        {
                            "Semaine": week.week,
                            "Début": week.start_date.isoformat(),
                            "Fin": week.end_date.isoformat(),
                            "Groupe": group.group_name,
                            "Salle": group.room_name,
                            "Ordre": module.scheduled_order,
                            "Module": module.module_name,
                            "Formateur": module.trainer_name,
                            "Heures/semaine": module.weekly_hours,
                        }
                    )
        columns = [
            "Semaine", "Début", "Fin", "Groupe", "Salle",
            "Ordre", "Module", "Formateur", "Heures/semaine",
        ]
        self._write(writer, "Semaines", rows, columns)

    def _export_monthly_sheet(self, analysis: CapacityAnalysis, writer: pd.ExcelWriter) -> None:
        rows = [
            {
                "Mois": f"{month.month_name} {month.year}",
                "Groupes": month.total_groups,
                "Heures formateurs": month.total_trainer_hours,
                "Heures salles": month.total_room_hours,
                "Conflits": "; ".join(c.description for c in month.conflicts),
            }
            for month in analysis.monthly_planning
        ]
        columns = ["Mois", "Groupes", "Heures formateurs", "Heures salles", "Conflits"]
        self._write(writer, "Mois", rows, columns)

    def _export_recommendations_sheet(
        self, analysis: CapacityAnalysis, writer: pd.ExcelWriter
    ) -> None:
        rows = [{"Recommandation": line} for line in analysis.recommendations]
        self._write(writer, "Recommandations", rows, ["Recommandation"])


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'excel')

    Returns:
        Exporter instance

    Raises:
        UnknownExportFormatError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise UnknownExportFormatError(format_type, list(exporters.keys()))

    return exporters[format_type]()
