"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


def _env_bool(value: Optional[str]) -> bool:
    return (value or "false").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    """Scanner settings. CLI flags override these values."""

    token: Optional[str] = None
    api_url: str = "https://api.github.com"
    organization: Optional[str] = None
    tracker: Optional[str] = None
    visibility: str = "all"
    dry_run: bool = False
    labels: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        GITHUB_TOKEN, GITHUB_API_URL, GITHUB_REPOSITORY (tracker), TARGET_ORG,
        VISIBILITY, DRY_RUN and ISSUE_LABELS (comma separated) are read. The
        organization falls back to the owner of GITHUB_REPOSITORY.
        """
        if environ is None:
            environ = os.environ

        tracker = environ.get("GITHUB_REPOSITORY") or None
        organization = environ.get("TARGET_ORG") or None
        if organization is None and tracker:
            organization = tracker.split("/")[0]

        labels = tuple(
            label.strip()
            for label in environ.get("ISSUE_LABELS", "").split(",")
            if label.strip()
        )

        return cls(
            token=environ.get("GITHUB_TOKEN") or None,
            api_url=environ.get("GITHUB_API_URL") or cls.api_url,
            organization=organization,
            tracker=tracker,
            visibility=environ.get("VISIBILITY") or "all",
            dry_run=_env_bool(environ.get("DRY_RUN")),
            labels=labels,
        )
