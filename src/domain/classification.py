"""Classification of repositories by their root content listing."""

import re
from typing import Iterable

from src.domain.repository import ContentEntry, RepositoryStatus

# README, optionally followed by exactly one alphabetic extension
README_PATTERN = re.compile(r"README(\.[a-z]+)?", re.IGNORECASE)


def is_readme_name(name: str) -> bool:
    """Return True if a file name is a README (README, README.md, readme.rst, ...)."""
    return README_PATTERN.fullmatch(name) is not None


def is_readme(entry: ContentEntry) -> bool:
    return not entry.is_dir and is_readme_name(entry.name)


def classify_contents(entries: Iterable[ContentEntry]) -> RepositoryStatus:
    """
    Classify a repository from its root content listing.

    Args:
        entries: Files and directories at the repository root

    Returns:
        EMPTY when there are no entries, README_ONLY when every entry is a
        README file, POPULATED otherwise
    """
    entries = list(entries)
    if not entries:
        return RepositoryStatus.EMPTY

    non_readmes = [entry for entry in entries if not is_readme(entry)]
    if not non_readmes:
        return RepositoryStatus.README_ONLY

    return RepositoryStatus.POPULATED
