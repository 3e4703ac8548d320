"""Application service for finding empty and README-only repositories."""

import logging
from typing import List, Optional, Sequence

from src.domain.classification import classify_contents
from src.domain.report import render_report, report_title, today_iso
from src.domain.repository import (
    RepositoryStatus,
    RunResult,
    ScanResult,
    TrackerRepository,
    Visibility,
)
from src.infrastructure.github_client import GitHubRestClient, RepositoryEmptyError

logger = logging.getLogger(__name__)


class EmptyRepoScanner:
    """Scans an organization and files a monthly report of empty and README-only repositories."""

    def __init__(
        self,
        github_client: GitHubRestClient,
        tracker: Optional[TrackerRepository] = None,
        labels: Sequence[str] = (),
    ):
        """
        Initialize scanner.

        Args:
            github_client: GitHub API client (anything providing
                list_organization_repositories, get_root_contents and create_issue)
            tracker: Repository where the report issue is created. Required
                unless run() is only ever called with dry_run=True.
            labels: Labels applied to the report issue
        """
        self.github_client = github_client
        self.tracker = tracker
        self.labels = list(labels)

    def scan(self, organization: str, visibility: Visibility = Visibility.ALL) -> ScanResult:
        """
        Classify every non-archived repository of an organization that passes the visibility filter.

        Args:
            organization: Organization login
            visibility: Visibility filter

        Returns:
            Empty and README-only repositories, in listing order
        """
        logger.info(f"Scanning {organization} (visibility: {visibility.value})")
        repositories = self.github_client.list_organization_repositories(organization)

        empty: List[str] = []
        readme_only: List[str] = []
        scanned = 0

        for repo in repositories:
            if not visibility.includes(repo):
                continue
            if repo.archived:
                logger.debug(f"Skipping archived repository {repo.full_name}")
                continue

            status = self.classify(organization, repo.name)
            scanned += 1
            logger.info(f"{repo.full_name}: {status.value}")

            if status is RepositoryStatus.EMPTY:
                empty.append(repo.full_name)
            elif status is RepositoryStatus.README_ONLY:
                readme_only.append(repo.full_name)

        logger.info(
            f"Scan completed. {scanned} repositories classified: "
            f"{len(empty)} empty, {len(readme_only)} README-only"
        )
        return ScanResult(empty=tuple(empty), readme_only=tuple(readme_only))

    def classify(self, owner: str, name: str) -> RepositoryStatus:
        """
        Classify a single repository from its root contents.

        A repository without commits is empty. Any other fetch error propagates.
        """
        try:
            contents = self.github_client.get_root_contents(owner, name)
        except RepositoryEmptyError:
            contents = []

        return classify_contents(contents)

    def render_report(
        self,
        organization: str,
        visibility: Visibility,
        scan: ScanResult,
        today: Optional[str] = None,
    ) -> str:
        return render_report(organization, visibility.value, scan.empty, scan.readme_only, today)

    def create_report_issue(
        self,
        organization: str,
        visibility: Visibility,
        scan: ScanResult,
        today: Optional[str] = None,
    ) -> dict:
        """Create the tracker issue holding the report."""
        if self.tracker is None:
            raise ValueError("No tracker repository configured for report issues")
        if today is None:
            today = today_iso()

        body = self.render_report(organization, visibility, scan, today)
        return self.github_client.create_issue(
            self.tracker.owner,
            self.tracker.repo,
            report_title(organization, today),
            body,
            labels=self.labels or None,
        )

    def run(
        self,
        organization: str,
        visibility: Visibility = Visibility.ALL,
        dry_run: bool = False,
    ) -> RunResult:
        """
        Scan the organization and create a report issue if anything was found.

        Args:
            organization: Organization login
            visibility: Visibility filter
            dry_run: Scan and render only, never create an issue

        Returns:
            Run outcome with the scan data and, if created, the issue URL
        """
        today = today_iso()
        scan = self.scan(organization, visibility)
        result = RunResult(organization=organization, visibility=visibility, date=today, scan=scan)

        if not scan.has_findings:
            logger.info("No matching repos found. Skipping issue.")
            return result

        if dry_run:
            logger.info("Dry run: not creating report issue")
            return result

        issue = self.create_report_issue(organization, visibility, scan, today)
        return RunResult(
            organization=organization,
            visibility=visibility,
            date=today,
            scan=scan,
            issue_created=True,
            issue_url=issue.get("html_url"),
        )
