import re
from datetime import date

import pytest

from errors import ExportFailed
from reports.pdf import create_year_report, format_decision, report_title
from tests.helpers import create_decision, make_decision


def _page_count(path):
    return len(re.findall(rb"/Type /Page[^s]", path.read_bytes()))


class TestCreateYearReport:
    """Tests for the yearly PDF layout."""

    def test_writes_pdf(self, tmp_path):
        decisions = [make_decision(title="Buy car", success_rating=8)]

        path = create_year_report(decisions, 2024, tmp_path)

        assert path == tmp_path / "Decisions_2024.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_empty_year_raises(self, tmp_path):
        with pytest.raises(ExportFailed, match="No decisions found for selected year"):
            create_year_report([], 2024, tmp_path)

        assert not (tmp_path / "Decisions_2024.pdf").exists()

    def test_single_page_holds_three_decisions(self, tmp_path):
        decisions = [make_decision(title=f"D{i}") for i in range(3)]

        path = create_year_report(decisions, 2024, tmp_path)

        assert _page_count(path) == 1

    def test_page_breaks(self, tmp_path):
        """Three blocks fit under the title, four on each following page."""
        decisions = [make_decision(title=f"D{i}") for i in range(10)]

        path = create_year_report(decisions, 2024, tmp_path)

        assert _page_count(path) == 3

    def test_long_text_does_not_fail(self, tmp_path):
        decisions = [make_decision(title="x " * 150, actual_outcome="y " * 500, success_rating=3)]

        path = create_year_report(decisions, 2024, tmp_path)

        assert path.exists()

    def test_unwritable_output_dir(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(ExportFailed):
            create_year_report([make_decision()], 2024, blocker)


class TestFormatDecision:
    def test_rated_decision_lines(self):
        decision = make_decision(
            title="Buy car",
            decision_date=date(2024, 3, 5),
            chosen_option="Used",
            success_rating=7,
            actual_outcome="Reliable",
        )

        assert format_decision(decision) == [
            "Buy car",
            "Date: Mar 05, 2024",
            "Chosen: Used",
            "Success Rating: 7/10",
            "Outcome: Reliable",
        ]

    def test_unrated_decision_omits_rating(self):
        lines = format_decision(make_decision(title="Gym"))

        assert not any(line.startswith("Success Rating") for line in lines)

    def test_title(self):
        assert report_title(2025) == "My Financial Decisions 2025"


class TestReportService:
    def test_export_year_selects_by_year(self, services, test_config):
        this_year = date.today().year
        create_decision(services, title="This year", decision_date=date(this_year, 1, 1))

        path = services.reports.export_year(this_year)

        assert path == test_config.export_dir / f"Decisions_{this_year}.pdf"
        assert path.exists()

    def test_export_year_without_decisions(self, services, tmp_path):
        this_year = date.today().year
        create_decision(services, decision_date=date(this_year, 1, 1))

        with pytest.raises(ExportFailed):
            services.reports.export_year(this_year - 3, output_dir=tmp_path)
