"""Failure taxonomy.

"Nothing to find" (no workflow, no successful run, no matching artifact) is
never raised; the locator returns None for it. Everything here means the
environment is broken and the step should fail.
"""
from __future__ import annotations


class CheckLogError(Exception):
    """Base checklog error."""


class GitHubError(CheckLogError):
    """Base error for GitHub Actions API calls."""


class GitHubAuthError(GitHubError):
    pass


class GitHubRateLimitError(GitHubError):
    pass


class GitHubHTTPError(GitHubError):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class GitHubNetworkError(GitHubError):
    pass


class ArtifactIOError(CheckLogError):
    """Base error for local artifact files."""


class ArtifactExtractError(ArtifactIOError):
    pass


class ArtifactReadError(ArtifactIOError):
    pass


class ArtifactWriteError(ArtifactIOError):
    pass
