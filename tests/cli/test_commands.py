from argparse import Namespace
from datetime import date

import pytest

from cli import backup, categories, decisions, report, reset
from tests.helpers import create_decision


class TestDecisionCommands:
    def test_outcome(self, services):
        decision = create_decision(services)

        decisions.cmd_outcome(
            Namespace(decision_id=decision.id, rating=8, actual="Worth it"), services
        )

        assert services.decisions.find(decision.id).success_rating == 8

    def test_outcome_invalid_rating_exits(self, services):
        decision = create_decision(services)

        with pytest.raises(SystemExit):
            decisions.cmd_outcome(
                Namespace(decision_id=decision.id, rating=0, actual=None), services
            )

    def test_create_interactive(self, services, monkeypatch):
        answers = iter(
            ["Buy car", "", "", "New", "Used", "", "Used", "", "", "", "8", ""]
        )
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

        decisions.cmd_create(Namespace(), services)

        (decision,) = services.decisions.find_all()
        assert decision.title == "Buy car"
        assert decision.date == date.today()
        assert decision.options == ["New", "Used"]
        assert decision.chosen_option == "Used"
        assert decision.emotional_state == 8

    def test_delete_with_yes(self, services):
        decision = create_decision(services)

        decisions.cmd_delete(Namespace(decision_id=decision.id, yes=True), services)

        assert services.decisions.find(decision.id) is None

    def test_show_missing_exits(self, services):
        with pytest.raises(SystemExit):
            decisions.cmd_show(Namespace(decision_id="missing"), services)


class TestCategoryCommands:
    def test_delete_keeps_decisions(self, services):
        housing = services.categories.create("Housing")
        decision = create_decision(services, category=housing)

        categories.cmd_delete(Namespace(category_id=housing.id, yes=True), services)

        assert services.categories.find(housing.id) is None
        assert services.decisions.find(decision.id).category is None


class TestBackupAndReportCommands:
    def test_export_then_import(self, services, tmp_path):
        create_decision(services)
        path = tmp_path / "backup.json"

        backup.cmd_export(Namespace(output=str(path)), services)
        backup.cmd_import(Namespace(file=str(path)), services)

        assert len(services.decisions.find_all()) == 2

    def test_import_missing_file_exits(self, services, tmp_path):
        with pytest.raises(SystemExit):
            backup.cmd_import(Namespace(file=str(tmp_path / "nope.json")), services)

    def test_report_pdf(self, services, tmp_path):
        create_decision(services)

        report.cmd_pdf(Namespace(year=None, output_dir=str(tmp_path)), services)

        assert (tmp_path / f"Decisions_{date.today().year}.pdf").exists()

    def test_report_empty_year_exits(self, services, tmp_path):
        with pytest.raises(SystemExit):
            report.cmd_pdf(Namespace(year=2019, output_dir=str(tmp_path)), services)

    def test_reset_with_yes(self, services):
        services.categories.create("Housing")
        create_decision(services)

        reset.cmd_reset(Namespace(yes=True), services)

        assert services.decisions.find_all() == []
        assert services.categories.find_all() == []
