"""
Unified access to site content with GitHub storage and a local fallback.

`DataManager` picks its backend once, on first use: GitHub when the config
is enabled, complete and the repository answers; the local key-value store
otherwise. The choice holds for the lifetime of the instance.
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Optional

from content_backend.config import GitHubConfig
from content_backend.github_api import GitHubAPI
from content_backend.kv_store import KeyValueStore
from content_backend.local_storage import LocalStorageBackend
from content_backend.storage import ContentBackend

logger = logging.getLogger(__name__)


class StorageState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    REMOTE = "remote"
    LOCAL = "local"


class DataManager:
    def __init__(
        self,
        config: GitHubConfig,
        local_store: KeyValueStore,
        *,
        api_factory: Callable[[str], GitHubAPI] = GitHubAPI,
    ):
        self.config = config
        self.local_store = local_store
        self.api_factory = api_factory
        self.github_api: Optional[GitHubAPI] = None
        self.state = StorageState.UNINITIALIZED
        self._backend: Optional[ContentBackend] = None
        self._init_result = False
        self._init_lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self.state in (StorageState.REMOTE, StorageState.LOCAL)

    @property
    def uses_github(self) -> bool:
        return self.state is StorageState.REMOTE

    def initialize(self) -> bool:
        """
        Select the storage backend. Safe to call repeatedly and from several
        threads: the first caller runs the selection, everyone else waits for
        it and gets the same result.

        Returns:
            bool: False only if an unexpected error forced the local fallback.
        """
        with self._init_lock:
            if self._backend is not None:
                return self._init_result
            self.state = StorageState.INITIALIZING
            backend: Optional[ContentBackend] = None
            try:
                backend = self._connect_github()
                self._init_result = True
            except Exception:
                logger.exception("Error initializing data manager")
                self._init_result = False

            if backend is None:
                logger.info("Using local storage for data storage")
                backend = LocalStorageBackend(self.local_store)
                self.state = StorageState.LOCAL
            else:
                self.state = StorageState.REMOTE
            # Published last: callers outside the lock dispatch once it is set.
            self._backend = backend
            return self._init_result

    def _connect_github(self) -> Optional[GitHubAPI]:
        if not self.config.enabled:
            return None
        if not self.config.is_complete():
            logger.warning(
                "GitHub API configuration is incomplete, falling back to local storage"
            )
            return None

        api = self.api_factory(self.config.get_token())
        if not api.initialize(self.config.username, self.config.repo_name):
            logger.warning(
                "Failed to initialize GitHub API, falling back to local storage"
            )
            api.close()
            return None
        logger.info("Using GitHub API for data storage")
        self.github_api = api
        return api

    def _ensure_initialized(self) -> ContentBackend:
        if self._backend is None:
            self.initialize()
        return self._backend

    def get_news_items(self) -> list[dict]:
        return self._ensure_initialized().get_news_items()

    def save_news_items(self, news_items: list[dict]) -> bool:
        return self._ensure_initialized().save_news_items(news_items)

    def get_site_settings(self) -> dict:
        return self._ensure_initialized().get_site_settings()

    def save_site_settings(self, settings: dict) -> bool:
        return self._ensure_initialized().save_site_settings(settings)

    def get_social_links(self) -> dict:
        return self._ensure_initialized().get_social_links()

    def save_social_links(self, links: dict) -> bool:
        return self._ensure_initialized().save_social_links(links)

    def get_admin_settings(self) -> dict:
        return self._ensure_initialized().get_admin_settings()

    def save_admin_settings(self, settings: dict) -> bool:
        return self._ensure_initialized().save_admin_settings(settings)
