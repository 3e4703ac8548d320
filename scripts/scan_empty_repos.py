#!/usr/bin/env python3
"""Script to scan an organization for empty and README-only repositories and file a report issue."""

import argparse
import json
import logging
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.application.scanner_service import EmptyRepoScanner
from src.domain.repository import TrackerRepository, Visibility
from src.infrastructure import actions
from src.infrastructure.github_client import GitHubRestClient
from src.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


def parse_args(argv=None, settings=None):
    """Parse command-line arguments, using settings from the environment as defaults."""
    if settings is None:
        settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="Find empty and README-only repositories in a GitHub organization"
    )
    parser.add_argument("--org", default=settings.organization,
                        help="Organization to scan (default: TARGET_ORG or owner of GITHUB_REPOSITORY)")
    parser.add_argument("--visibility", default=settings.visibility,
                        help="Repository visibility filter: all, public or private")
    parser.add_argument("--tracker", default=settings.tracker,
                        help="owner/repo where the report issue is created (default: GITHUB_REPOSITORY)")
    parser.add_argument("--label", dest="labels", action="append", default=None,
                        help="Label for the report issue (repeatable)")
    parser.add_argument("--api-url", default=settings.api_url, help="GitHub API base URL")
    parser.add_argument("--dry-run", action=argparse.BooleanOptionalAction, default=settings.dry_run,
                        help="Scan and print the report without creating an issue (--no-dry-run overrides DRY_RUN)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    if args.labels is None:
        args.labels = list(settings.labels)
    args.token = settings.token
    return args


def main(argv=None):
    """Scan the organization and create the monthly report issue."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        if not args.org:
            logger.error("No organization given. Use --org or set TARGET_ORG.")
            return 1
        visibility = Visibility.parse(args.visibility)

        tracker = None
        if args.tracker:
            tracker = TrackerRepository.parse(args.tracker)
        elif not args.dry_run:
            logger.error("No tracker repository given. Use --tracker or set GITHUB_REPOSITORY.")
            return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        with GitHubRestClient(token=args.token, api_url=args.api_url) as github_client:
            scanner = EmptyRepoScanner(github_client, tracker=tracker, labels=args.labels)
            result = scanner.run(args.org, visibility, dry_run=args.dry_run)

        report = scanner.render_report(args.org, visibility, result.scan, result.date)
        if args.dry_run:
            print(report)

        if result.issue_created:
            logger.info(f"Report issue created: {result.issue_url}")

        actions.set_output("report-json", json.dumps(result.to_dict()))
        actions.set_output("issue-created", str(result.issue_created).lower())
        if result.scan.has_findings:
            actions.append_step_summary(report)

        return 0

    except Exception as e:
        logger.error(f"Scan failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
