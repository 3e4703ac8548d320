"""Domain entities for GitHub repositories and scan results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""

    full_name: str
    name: str
    owner: str
    private: bool
    archived: bool


@dataclass(frozen=True)
class ContentEntry:
    """A file or directory at the root of a repository."""

    name: str
    type: str = "file"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


class RepositoryStatus(Enum):
    """Classification of a repository by its root contents."""

    EMPTY = "empty"
    README_ONLY = "readme-only"
    POPULATED = "populated"


class Visibility(Enum):
    """Repository visibility filter applied during a scan."""

    ALL = "all"
    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def parse(cls, value: str) -> "Visibility":
        """
        Parse a visibility filter from user input.

        Args:
            value: One of 'all', 'public' or 'private' (any case)

        Raises:
            ValueError: If the value is not a known filter
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(v.value for v in cls)
            raise ValueError(f"Invalid visibility '{value}'. Expected one of: {choices}")

    def includes(self, repo: Repository) -> bool:
        """Check whether a repository passes this filter (archival is not considered)."""
        if self is Visibility.PUBLIC:
            return not repo.private
        if self is Visibility.PRIVATE:
            return repo.private
        return True


@dataclass(frozen=True)
class TrackerRepository:
    """Repository where report issues are filed."""

    owner: str
    repo: str

    @classmethod
    def parse(cls, value: str) -> "TrackerRepository":
        owner, sep, repo = value.strip().partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"Tracker repository must be 'owner/repo', got '{value}'")
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class ScanResult:
    """Empty and README-only repositories, in organization listing order."""

    empty: Tuple[str, ...] = ()
    readme_only: Tuple[str, ...] = ()

    @property
    def has_findings(self) -> bool:
        return bool(self.empty or self.readme_only)


@dataclass(frozen=True)
class RunResult:
    """Outcome of a full scan-and-report run."""

    organization: str
    visibility: Visibility
    date: str
    scan: ScanResult = field(default_factory=ScanResult)
    issue_created: bool = False
    issue_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON report payload published as a workflow output."""
        return {
            "org": self.organization,
            "visibility": self.visibility.value,
            "date": self.date,
            "empty": list(self.scan.empty),
            "readmeOnly": list(self.scan.readme_only),
        }
