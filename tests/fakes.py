"""In-memory stand-in for the GitHub REST client."""

from typing import Dict, List, Optional

from src.domain.repository import ContentEntry, Repository
from src.infrastructure.github_client import RepositoryEmptyError


def make_repo(name: str, private: bool = False, archived: bool = False, owner: str = "test-org") -> Repository:
    return Repository(
        full_name=f"{owner}/{name}",
        name=name,
        owner=owner,
        private=private,
        archived=archived,
    )


class FakeGitHubClient:
    """Repositories without an entry in `contents` behave like commit-less repositories."""

    def __init__(
        self,
        repos: Optional[List[Repository]] = None,
        contents: Optional[Dict[str, List[ContentEntry]]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ):
        self.repos = repos or []
        self.contents = contents or {}
        self.errors = errors or {}
        self.content_requests: List[str] = []
        self.created_issues: List[dict] = []

    def list_organization_repositories(self, org):
        return list(self.repos)

    def get_root_contents(self, owner, repo):
        key = f"{owner}/{repo}"
        self.content_requests.append(key)
        if key in self.errors:
            raise self.errors[key]
        if key not in self.contents:
            raise RepositoryEmptyError("Git Repository is empty.", 409)
        return list(self.contents[key])

    def create_issue(self, owner, repo, title, body, labels=None):
        issue = {
            "number": len(self.created_issues) + 1,
            "owner": owner,
            "repo": repo,
            "title": title,
            "body": body,
            "labels": labels,
            "html_url": f"https://github.com/{owner}/{repo}/issues/{len(self.created_issues) + 1}",
        }
        self.created_issues.append(issue)
        return issue
