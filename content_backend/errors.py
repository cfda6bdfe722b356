"""
Exceptions raised by the GitHub-backed storage.
"""

from __future__ import annotations

from typing import Any, Optional


class GitHubApiError(Exception):
    """A GitHub API request failed (transport, auth or HTTP status)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RepoFileNotFoundError(GitHubApiError):
    """The requested repository path (or repository) does not exist."""


class ContentSaveError(Exception):
    """A backend reported that a content document could not be saved."""
