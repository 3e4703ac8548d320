"""Report rendering."""

import re

from src.domain.report import render_report, report_title, today_iso


def test_report_contains_expected_lines():
    body = render_report("test-org", "all", ["org/empty"], ["org/readme"])

    assert "Empty Repo Report for `test-org`" in body
    assert "**Visibility:** all" in body
    assert "| org/empty | empty |" in body
    assert "| org/readme | README-only |" in body


def test_report_layout_is_exact():
    body = render_report("acme", "public", ["acme/a", "acme/b"], ["acme/c"], today="2024-03-01")

    assert body == (
        "# Empty Repo Report for `acme` (2024-03-01)\n"
        "\n"
        "**Visibility:** public\n"
        "\n"
        "| Repository | Status |\n"
        "| --- | --- |\n"
        "| acme/a | empty |\n"
        "| acme/b | empty |\n"
        "| acme/c | README-only |\n"
        "\n"
        "_Automatically generated on the 1st of each month._"
    )


def test_empty_rows_come_before_readme_only_rows():
    body = render_report("acme", "all", ["acme/z-empty"], ["acme/a-readme"], today="2024-03-01")
    assert body.index("acme/z-empty") < body.index("acme/a-readme")


def test_report_uses_current_date_when_not_given():
    body = render_report("acme", "all", [], [])
    assert f"({today_iso()})" in body


def test_today_iso_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today_iso())


def test_report_title():
    assert report_title("acme", "2024-03-01") == "Monthly Repo Health: acme (2024-03-01)"
