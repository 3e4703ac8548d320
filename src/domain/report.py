"""Markdown report rendering for the monthly repository health issue."""

from datetime import datetime, timezone
from typing import Optional, Sequence


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def report_title(organization: str, today: Optional[str] = None) -> str:
    if today is None:
        today = today_iso()
    return f"Monthly Repo Health: {organization} ({today})"


def render_report(
    organization: str,
    visibility: str,
    empty: Sequence[str],
    readme_only: Sequence[str],
    today: Optional[str] = None,
) -> str:
    """
    Render the report body for the tracker issue.

    Args:
        organization: Organization that was scanned
        visibility: Visibility filter label used for the scan
        empty: Empty repositories, in scan order
        readme_only: README-only repositories, in scan order
        today: Report date (YYYY-MM-DD). Captured once when omitted.

    Returns:
        Markdown document with a heading, the visibility line, a
        Repository/Status table and a trailing note
    """
    if today is None:
        today = today_iso()

    lines = [
        f"# Empty Repo Report for `{organization}` ({today})",
        "",
        f"**Visibility:** {visibility}",
        "",
        "| Repository | Status |",
        "| --- | --- |",
    ]
    lines.extend(f"| {repo} | empty |" for repo in empty)
    lines.extend(f"| {repo} | README-only |" for repo in readme_only)
    lines.append("")
    lines.append("_Automatically generated on the 1st of each month._")

    return "\n".join(lines)
