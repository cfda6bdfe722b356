"""
GitHub contents API client used as the remote content store.

Each document is a JSON file committed to a single branch of the target
repository. File contents travel base64-encoded, and updates or deletes of
an existing file must carry the file's current blob sha.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from content_backend.errors import GitHubApiError, RepoFileNotFoundError
from content_backend.schemas import default_admin_settings, default_social_links
from content_backend.storage import (
    ADMIN_SETTINGS,
    NEWS,
    SITE_SETTINGS,
    SOCIAL_LINKS,
    DocumentKind,
)

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds
DEFAULT_API_BASE_URL = "https://api.github.com"
_BODY_METHODS = ("POST", "PUT", "PATCH", "DELETE")


@dataclass
class RepoFile:
    content: str
    sha: str
    path: str


class GitHubAPI:
    """Authenticated access to one repository's contents."""

    def __init__(
        self,
        token: str,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        branch: str = "main",
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.api_base_url = api_base_url.rstrip("/")
        self.branch = branch
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.username: Optional[str] = None
        self.repo_name: Optional[str] = None

    def close(self) -> None:
        """Release the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "GitHubAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def initialize(self, username: str, repo_name: str) -> bool:
        """
        Point the client at `username/repo_name` and check it is reachable.

        Returns:
            bool: True if the repository could be read with the token.
        """
        self.username = username
        self.repo_name = repo_name
        try:
            self.make_request(f"/repos/{username}/{repo_name}")
        except GitHubApiError as exc:
            logger.error("Failed to initialize GitHub API: %s", exc)
            return False
        logger.info("GitHub API initialized for %s/%s", username, repo_name)
        return True

    def make_request(
        self, endpoint: str, method: str = "GET", data: Optional[dict] = None
    ) -> Any:
        """
        Send an authenticated request and return the decoded JSON body.

        Raises:
            RepoFileNotFoundError: The API answered 404.
            GitHubApiError: Any other non-2xx status or a transport failure.
        """
        url = f"{self.api_base_url}{endpoint}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
        }
        kwargs: dict[str, Any] = {"headers": headers, "timeout": REQUEST_TIMEOUT}
        if data is not None and method in _BODY_METHODS:
            kwargs["json"] = data

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise GitHubApiError(f"GitHub API request failed: {exc}") from exc

        if not response.ok:
            try:
                error_body = response.json()
            except ValueError:
                error_body = {}
            error_cls = (
                RepoFileNotFoundError if response.status_code == 404 else GitHubApiError
            )
            raise error_cls(
                f"GitHub API Error: {response.status_code} {response.reason} - "
                f"{json.dumps(error_body)}",
                status_code=response.status_code,
                body=error_body,
            )

        if method == "HEAD" or response.status_code == 204:
            return {"status": response.status_code, "ok": True}
        return response.json()

    def _contents_endpoint(self, path: str) -> str:
        if not self.username or not self.repo_name:
            raise ValueError("GitHubAPI.initialize() must be called first")
        return (
            f"/repos/{self.username}/{self.repo_name}/contents/"
            f"{quote(path.lstrip('/'))}"
        )

    def get_file(self, path: str) -> Optional[RepoFile]:
        """Return the file at `path`, or None if it does not exist yet."""
        try:
            response = self.make_request(self._contents_endpoint(path))
        except RepoFileNotFoundError:
            return None
        encoding = response.get("encoding")
        if encoding != "base64":
            # Files over 1 MB come back without inline content.
            raise GitHubApiError(
                f"Unsupported content encoding for {path}: {encoding!r}"
            )
        content = base64.b64decode(response.get("content", "")).decode("utf-8")
        return RepoFile(
            content=content,
            sha=response["sha"],
            path=response.get("path", path),
        )

    def save_file(self, path: str, content: str, message: str) -> dict:
        """
        Create or update `path` with `content` as a single commit.

        The current sha is looked up first and sent along when the file
        already exists; the API rejects updates without it.
        """
        existing = self.get_file(path)
        data = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if existing:
            data["sha"] = existing.sha
        return self.make_request(self._contents_endpoint(path), "PUT", data)

    def delete_file(self, path: str, message: str) -> dict:
        existing = self.get_file(path)
        if not existing:
            raise RepoFileNotFoundError(f"File not found: {path}", status_code=404)
        data = {
            "message": message,
            "sha": existing.sha,
            "branch": self.branch,
        }
        return self.make_request(self._contents_endpoint(path), "DELETE", data)

    def _load_document(self, kind: DocumentKind, default: Any) -> Any:
        try:
            file = self.get_file(kind.path)
            return json.loads(file.content) if file else default
        except Exception:
            logger.exception("Error getting %s from GitHub", kind.name)
            return default

    def _save_document(self, kind: DocumentKind, value: Any) -> bool:
        try:
            self.save_file(
                kind.path,
                json.dumps(value, indent=2, ensure_ascii=False),
                kind.commit_message,
            )
        except Exception:
            logger.exception("Error saving %s to GitHub", kind.name)
            return False
        return True

    def get_news_items(self) -> list[dict]:
        return self._load_document(NEWS, [])

    def save_news_items(self, news_items: list[dict]) -> bool:
        return self._save_document(NEWS, news_items)

    def get_site_settings(self) -> dict:
        return self._load_document(SITE_SETTINGS, {})

    def save_site_settings(self, settings: dict) -> bool:
        return self._save_document(SITE_SETTINGS, settings)

    def get_social_links(self) -> dict:
        return self._load_document(SOCIAL_LINKS, default_social_links())

    def save_social_links(self, links: dict) -> bool:
        return self._save_document(SOCIAL_LINKS, links)

    def get_admin_settings(self) -> dict:
        return self._load_document(ADMIN_SETTINGS, default_admin_settings())

    def save_admin_settings(self, settings: dict) -> bool:
        return self._save_document(ADMIN_SETTINGS, settings)
