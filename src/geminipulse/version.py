"""Version information for geminipulse."""

import os
from importlib.metadata import PackageNotFoundError, version


def get_package_version() -> str:
    """Get the installed distribution version, or 'unknown' when not installed."""
    try:
        return version("geminipulse")
    except PackageNotFoundError:
        return "unknown"


def get_version_info() -> str:
    """Get formatted version information for logging.

    Returns:
        Formatted string with package version, git commit and branch info.
    """
    commit = os.getenv("GIT_COMMIT", "unknown")
    branch = os.getenv("GIT_BRANCH", "unknown")
    return f"version={get_package_version()}, commit={commit}, branch={branch}"
