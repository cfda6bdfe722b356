"""
In-process fake of the GitHub contents API for tests.
"""

from __future__ import annotations

import base64
import hashlib
import itertools
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Optional
from urllib.parse import unquote

API_BASE_URL = "https://api.github.com"


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@dataclass
class FakeGitHubSession:
    """Stores files in memory and answers like the contents API."""

    owner: str = "octo"
    repo: str = "site"
    repo_exists: bool = True
    files: dict = field(default_factory=dict)
    shas: dict = field(default_factory=dict)
    requests: list = field(default_factory=list)
    failures: dict = field(default_factory=dict)

    def __post_init__(self):
        self._counter = itertools.count(1)

    def add_file(self, path: str, content: str) -> str:
        self.files[path] = content
        sha = hashlib.sha1(f"{path}:{next(self._counter)}:{content}".encode()).hexdigest()
        self.shas[path] = sha
        return sha

    def requests_with(self, method: str) -> list:
        return [r for r in self.requests if r.method == method]

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[dict] = None,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> FakeResponse:
        self.requests.append(
            SimpleNamespace(method=method, url=url, headers=headers, json=json)
        )
        endpoint = url[len(API_BASE_URL):]
        if (method, endpoint) in self.failures:
            return FakeResponse(self.failures[(method, endpoint)], {"message": "boom"}, "Error")

        repo_endpoint = f"/repos/{self.owner}/{self.repo}"
        if endpoint == repo_endpoint:
            if not self.repo_exists:
                return FakeResponse(404, {"message": "Not Found"}, "Not Found")
            return FakeResponse(200, {"full_name": f"{self.owner}/{self.repo}"}, "OK")

        prefix = f"{repo_endpoint}/contents/"
        if not self.repo_exists or not endpoint.startswith(prefix):
            return FakeResponse(404, {"message": "Not Found"}, "Not Found")
        path = unquote(endpoint[len(prefix):])

        if method == "GET":
            return self._get(path)
        if method == "PUT":
            return self._put(path, json or {})
        if method == "DELETE":
            return self._delete(path, json or {})
        return FakeResponse(405, {"message": "Method Not Allowed"}, "Method Not Allowed")

    def _get(self, path: str) -> FakeResponse:
        if path not in self.files:
            return FakeResponse(404, {"message": "Not Found"}, "Not Found")
        content = self.files[path]
        raw = content if isinstance(content, bytes) else content.encode("utf-8")
        encoded = base64.b64encode(raw).decode("ascii")
        # The real API wraps base64 content at 60 characters.
        wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
        return FakeResponse(
            200,
            {"path": path, "sha": self.shas[path], "content": wrapped, "encoding": "base64"},
            "OK",
        )

    def _put(self, path: str, body: dict) -> FakeResponse:
        exists = path in self.files
        if exists and body.get("sha") != self.shas[path]:
            return FakeResponse(409, {"message": "sha mismatch"}, "Conflict")
        if not exists and "sha" in body:
            return FakeResponse(422, {"message": "sha for missing file"}, "Unprocessable Entity")
        content = base64.b64decode(body["content"]).decode("utf-8")
        sha = self.add_file(path, content)
        return FakeResponse(
            200 if exists else 201,
            {"content": {"path": path, "sha": sha}, "commit": {"message": body["message"]}},
            "OK",
        )

    def _delete(self, path: str, body: dict) -> FakeResponse:
        if path not in self.files:
            return FakeResponse(404, {"message": "Not Found"}, "Not Found")
        if body.get("sha") != self.shas[path]:
            return FakeResponse(409, {"message": "sha mismatch"}, "Conflict")
        del self.files[path]
        del self.shas[path]
        return FakeResponse(200, {"content": None, "commit": {"message": body["message"]}}, "OK")
