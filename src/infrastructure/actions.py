"""GitHub Actions step output and job summary helpers."""

import logging
import os

logger = logging.getLogger(__name__)


def set_output(key: str, value: str) -> bool:
    """
    Set a GitHub Actions step output.

    Returns:
        True if the output was written, False when not running under Actions
    """
    github_output = os.environ.get("GITHUB_OUTPUT")
    if not github_output:
        logger.debug(f"GITHUB_OUTPUT not set, skipping output '{key}'")
        return False

    with open(github_output, "a", encoding="utf-8") as f:
        if "\n" in value:
            delimiter = f"EOF_{key.upper().replace('-', '_')}"
            f.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{key}={value}\n")
    return True


def append_step_summary(markdown: str) -> bool:
    """Append markdown to the job summary page."""
    github_step_summary = os.environ.get("GITHUB_STEP_SUMMARY")
    if not github_step_summary:
        return False

    with open(github_step_summary, "a", encoding="utf-8") as f:
        f.write(markdown)
        f.write("\n")
    return True
