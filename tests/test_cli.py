"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from capacity_planner.cli import app

runner = CliRunner()


class TestCommands:
    """Tests for CLI commands."""

    def test_workload(self, data_dir):
        result = runner.invoke(app, ["workload", str(data_dir)])
        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "11%" in result.output

    def test_rooms(self, data_dir):
        result = runner.invoke(app, ["rooms", str(data_dir)])
        assert result.exit_code == 0
        assert "Salle A" in result.output

    def test_weekly(self, data_dir):
        result = runner.invoke(app, ["weekly", str(data_dir), "--limit", "2"])
        assert result.exit_code == 0
        assert "Semaine 1" in result.output
        assert "Semaine 3" not in result.output
        assert "8 more week(s)" in result.output

    def test_monthly(self, data_dir):
        result = runner.invoke(app, ["monthly", str(data_dir), "--today", "2024-01-15"])
        assert result.exit_code == 0
        assert "Janvier 2024" in result.output

    def test_dashboard(self, data_dir):
        result = runner.invoke(app, ["dashboard", str(data_dir)])
        assert result.exit_code == 0
        assert "Capacité restante" in result.output

    def test_analyze(self, data_dir):
        result = runner.invoke(app, ["analyze", str(data_dir), "--today", "2024-01-01"])
        assert result.exit_code == 0
        assert "Capacité optimale" in result.output

    def test_auto_assign(self, data_dir):
        # loading already discovered the only matching pair
        result = runner.invoke(app, ["auto-assign", str(data_dir)])
        assert result.exit_code == 0
        assert "0 affectations créées automatiquement" in result.output

    def test_recalculate(self, data_dir):
        result = runner.invoke(app, ["recalculate", str(data_dir)])
        assert result.exit_code == 0
        assert "2024-03-11" in result.output
        assert "1 groupes recalculés" in result.output

    def test_export_json(self, data_dir, tmp_path):
        output = tmp_path / "report"
        result = runner.invoke(app, ["export", str(data_dir), "-o", str(output), "-f", "json"])
        assert result.exit_code == 0

        data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
        assert data["group_assignments"][0]["group_name"] == "Groupe 1"

    def test_export_excel(self, data_dir, tmp_path):
        output = tmp_path / "report.xlsx"
        result = runner.invoke(app, ["export", str(data_dir), "-o", str(output), "-f", "excel"])
        assert result.exit_code == 0
        assert output.exists()

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["workload", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_record(self, data_dir):
        (data_dir / "modules.json").write_text('[{"name": "x"}]', encoding="utf-8")
        result = runner.invoke(app, ["dashboard", str(data_dir)])
        assert result.exit_code == 1
        assert "modules.json" in result.output
