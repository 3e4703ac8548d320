"""GitHub REST API client with pagination and retry logic."""

import time
import logging
import os
from typing import List, Optional, Dict, Any
import requests

from src.domain.repository import ContentEntry, Repository

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the GitHub API returns an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class RepositoryEmptyError(GitHubAPIError):
    """Raised when a repository has no commits and therefore no contents."""
    pass


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class AuthenticationError(GitHubAPIError):
    """Raised when the token is missing, invalid or expired."""
    pass


class GitHubRestClient:
    """Client for the GitHub REST API covering repository listing, contents and issues."""

    DEFAULT_API_URL = "https://api.github.com"
    PER_PAGE = 100
    MAX_RETRIES = 3
    RETRY_DELAY_SECONDS = 1
    REQUEST_TIMEOUT_SECONDS = 30

    def __init__(self, token: Optional[str] = None, api_url: Optional[str] = None):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token. If None, uses GITHUB_TOKEN env var.
            api_url: API base URL. If None, uses GITHUB_API_URL env var or api.github.com.
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN")
        if api_url is None:
            api_url = os.getenv("GITHUB_API_URL", self.DEFAULT_API_URL)

        self.token = token
        self.api_url = api_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

        # Add authorization header if token is available
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.warning("No GitHub token configured. Using unauthenticated requests (limited rate).")

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "GitHubRestClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Send a request, retrying transport failures of GET requests with
        exponential backoff. Other methods are sent once so a timed-out POST
        cannot create a duplicate issue.

        Error statuses are not retried; they are mapped to GitHubAPIError
        subclasses and raised immediately.

        Raises:
            RepositoryEmptyError: On 409 Conflict (repository has no commits)
            AuthenticationError: On 401
            RateLimitExceeded: On 403/429 with an exhausted rate limit
            GitHubAPIError: On any other non-2xx status
            requests.RequestException: If the request fails after retries
        """
        if not url.startswith("http"):
            url = f"{self.api_url}{url}"

        attempts = self.MAX_RETRIES if method.upper() == "GET" else 1

        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method,
                    url,
                    timeout=self.REQUEST_TIMEOUT_SECONDS,
                    **kwargs
                )
            except requests.exceptions.RequestException as e:
                if attempt < attempts - 1:
                    delay = self.RETRY_DELAY_SECONDS * (2 ** attempt)  # Exponential backoff
                    logger.warning(f"Request failed (attempt {attempt + 1}/{attempts}): {e}. Retrying in {delay}s...")
                    time.sleep(delay)
                    continue
                raise

            self._raise_for_status(response, url)
            return response

        raise GitHubAPIError("Max retries exceeded", url=url)

    def _raise_for_status(self, response: requests.Response, url: str):
        status = response.status_code
        if 200 <= status < 300:
            return

        message = self._error_message(response)

        if status == 409:
            raise RepositoryEmptyError(f"Repository is empty: {message}", status, url)
        if status == 401:
            raise AuthenticationError("Authentication failed. Check your GitHub token.", status, url)
        if status in (403, 429):
            remaining = response.headers.get("X-RateLimit-Remaining")
            if status == 429 or remaining == "0":
                reset_time = response.headers.get("X-RateLimit-Reset", "unknown")
                raise RateLimitExceeded(f"Rate limit exceeded (resets at {reset_time})", status, url)
            raise GitHubAPIError(f"Forbidden: {message}", status, url)

        raise GitHubAPIError(f"GitHub API error {status}: {message}", status, url)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, dict) and data.get("message"):
            return data["message"]
        return response.text

    def _get_paginated(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Follow Link rel="next" headers until all pages are fetched."""
        items: List[Dict[str, Any]] = []
        url: Optional[str] = path
        page = 1

        while url:
            response = self._request("GET", url, params=params)
            data = response.json()
            items.extend(data)
            logger.debug(f"Fetched page {page} of {path}: {len(data)} items")

            url = response.links.get("next", {}).get("url")
            # The next URL already carries the query string
            params = None
            page += 1

        return items

    def list_organization_repositories(self, org: str) -> List[Repository]:
        """
        Fetch every repository in an organization.

        Args:
            org: Organization login

        Returns:
            Repositories in the order returned by the API
        """
        nodes = self._get_paginated(
            f"/orgs/{org}/repos",
            params={"per_page": self.PER_PAGE, "type": "all"}
        )

        repositories = []
        for node in nodes:
            owner, name = node["full_name"].split("/", 1)
            repositories.append(Repository(
                full_name=node["full_name"],
                name=node.get("name", name),
                owner=owner,
                private=bool(node.get("private", False)),
                archived=bool(node.get("archived", False)),
            ))

        logger.info(f"Found {len(repositories)} repositories in {org}")
        return repositories

    def get_root_contents(self, owner: str, repo: str) -> List[ContentEntry]:
        """
        Fetch the root directory listing of a repository's default branch.

        Raises:
            RepositoryEmptyError: If the repository has never received a commit
        """
        response = self._request("GET", f"/repos/{owner}/{repo}/contents/")
        data = response.json()
        if isinstance(data, dict):
            data = [data]

        return [ContentEntry(name=item["name"], type=item.get("type", "file")) for item in data]

    def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Create an issue.

        Returns:
            The created issue as returned by the API
        """
        payload: Dict[str, Any] = {"title": title, "body": body}
        if labels:
            payload["labels"] = list(labels)

        response = self._request("POST", f"/repos/{owner}/{repo}/issues", json=payload)
        issue = response.json()
        logger.info(f"Created issue #{issue.get('number')} in {owner}/{repo}: {issue.get('html_url')}")
        return issue
