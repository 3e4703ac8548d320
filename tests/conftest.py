import pytest

from src.infrastructure.github_client import GitHubAPIError


@pytest.fixture
def permission_error():
    return GitHubAPIError("Forbidden: Resource not accessible by integration", 403)
