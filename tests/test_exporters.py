"""Tests for exporters."""

import json
from datetime import date

import pandas as pd
import pytest

from capacity_planner.exceptions import UnknownExportFormatError
from capacity_planner.exporters import ExcelExporter, JSONExporter, get_exporter


@pytest.fixture
def analysis(service, alice, python_basics, classroom):
    service.create_training_group(
        {
            "name": "Groupe 1",
            "participant_count": 12,
            "start_date": "2024-01-01",
            "room_id": classroom.id,
        }
    )
    return service.capacity_analysis(today=date(2024, 1, 1))


class TestJSONExporter:
    """Tests for JSONExporter class."""

    def test_export(self, analysis, tmp_path):
        output = tmp_path / "out" / "capacity.json"
        JSONExporter().export(analysis, output)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["recommendations"] == [
            "Capacité optimale - possibilité de lancer de nouveaux groupes"
        ]
        assert len(data["weekly_planning"]) == 10
        assert data["monthly_planning"][0]["month_name"] == "Janvier"

    def test_non_ascii_kept(self, analysis, tmp_path):
        output = tmp_path / "capacity.json"
        JSONExporter().export(analysis, output)
        assert "Capacité" in output.read_text(encoding="utf-8")


class TestExcelExporter:
    """Tests for ExcelExporter class."""

    def test_sheets(self, analysis, tmp_path):
        output = tmp_path / "capacity.xlsx"
        ExcelExporter().export(analysis, output)

        sheets = pd.read_excel(output, sheet_name=None, engine="openpyxl")
        assert list(sheets) == [
            "Formateurs",
            "Salles",
            "Groupes",
            "Semaines",
            "Mois",
            "Recommandations",
        ]
        assert sheets["Formateurs"]["Formateur"].tolist() == ["Alice"]
        assert len(sheets["Semaines"]) == 10
        assert sheets["Semaines"]["Module"].iloc[0] == "Python Basics"
        assert len(sheets["Mois"]) == 12

    def test_empty_analysis(self, service, tmp_path):
        output = tmp_path / "empty.xlsx"
        ExcelExporter().export(service.capacity_analysis(today=date(2024, 1, 1)), output)
        sheets = pd.read_excel(output, sheet_name=None, engine="openpyxl")
        assert sheets["Semaines"].empty
        assert list(sheets["Semaines"].columns)[0] == "Semaine"


class TestGetExporter:
    """Tests for get_exporter function."""

    def test_known_formats(self):
        assert isinstance(get_exporter("json"), JSONExporter)
        assert isinstance(get_exporter("excel"), ExcelExporter)

    def test_unknown_format(self):
        with pytest.raises(UnknownExportFormatError, match="Unsupported format: csv"):
            get_exporter("csv")

    def test_unknown_format_is_value_error(self):
        with pytest.raises(ValueError):
            get_exporter("pdf")
