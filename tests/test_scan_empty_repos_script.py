"""Command-line entry point."""

import importlib.util
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from src.domain.repository import ContentEntry
from src.infrastructure.github_client import GitHubAPIError

from tests.fakes import FakeGitHubClient, make_repo

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "scan_empty_repos.py"


@pytest.fixture
def cli(monkeypatch):
    for name in ("GITHUB_TOKEN", "GITHUB_REPOSITORY", "TARGET_ORG", "VISIBILITY",
                 "DRY_RUN", "ISSUE_LABELS", "GITHUB_OUTPUT", "GITHUB_STEP_SUMMARY", "GITHUB_API_URL"):
        monkeypatch.delenv(name, raising=False)

    spec = importlib.util.spec_from_file_location("scan_empty_repos", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class ContextFake(FakeGitHubClient):
    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


def run_cli(cli, argv, fake):
    with patch.object(cli, "GitHubRestClient", return_value=fake):
        return cli.main(argv)


def test_creates_issue_and_writes_outputs(cli, monkeypatch, tmp_path):
    output = tmp_path / "output"
    summary = tmp_path / "summary.md"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary))
    fake = ContextFake([make_repo("empty")])

    code = run_cli(cli, ["--org", "test-org", "--tracker", "test-org/admin", "--label", "health"], fake)

    assert code == 0
    assert len(fake.created_issues) == 1
    assert fake.created_issues[0]["labels"] == ["health"]

    outputs = dict(line.split("=", 1) for line in output.read_text(encoding="utf-8").splitlines())
    assert outputs["issue-created"] == "true"
    assert json.loads(outputs["report-json"])["empty"] == ["test-org/empty"]
    assert "| test-org/empty | empty |" in summary.read_text(encoding="utf-8")


def test_no_findings_exits_zero_without_issue(cli):
    fake = ContextFake([make_repo("app")], {"test-org/app": [ContentEntry("app.py")]})

    assert run_cli(cli, ["--org", "test-org", "--tracker", "test-org/admin"], fake) == 0
    assert fake.created_issues == []


def test_dry_run_prints_report(cli, capsys):
    fake = ContextFake([make_repo("readme")], {"test-org/readme": [ContentEntry("README")]})

    assert run_cli(cli, ["--org", "test-org", "--dry-run"], fake) == 0
    assert fake.created_issues == []
    assert "| test-org/readme | README-only |" in capsys.readouterr().out


def test_fatal_error_exits_one(cli):
    fake = ContextFake([make_repo("secret")],
                       errors={"test-org/secret": GitHubAPIError("Forbidden", 403)})

    assert run_cli(cli, ["--org", "test-org", "--tracker", "test-org/admin"], fake) == 1
    assert fake.created_issues == []


@pytest.mark.parametrize("argv", [
    [],
    ["--org", "test-org"],
    ["--org", "test-org", "--tracker", "test-org/admin", "--visibility", "internal"],
    ["--org", "test-org", "--tracker", "not-a-repo"],
])
def test_invalid_configuration_exits_one(cli, argv):
    fake = ContextFake()
    assert run_cli(cli, argv, fake) == 1
    assert fake.content_requests == []


def test_defaults_come_from_environment(cli, monkeypatch):
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/admin")
    monkeypatch.setenv("VISIBILITY", "public")
    monkeypatch.setenv("ISSUE_LABELS", "health")

    args = cli.parse_args([])

    assert args.org == "acme"
    assert args.tracker == "acme/admin"
    assert args.visibility == "public"
    assert args.labels == ["health"]


def test_no_dry_run_overrides_environment(cli, monkeypatch):
    monkeypatch.setenv("DRY_RUN", "true")

    assert cli.parse_args([]).dry_run is True
    assert cli.parse_args(["--no-dry-run"]).dry_run is False


def test_no_dry_run_creates_issue_despite_environment(cli, monkeypatch):
    monkeypatch.setenv("DRY_RUN", "true")
    fake = ContextFake([make_repo("empty")])

    assert run_cli(cli, ["--org", "test-org", "--tracker", "test-org/admin", "--no-dry-run"], fake) == 0
    assert len(fake.created_issues) == 1
