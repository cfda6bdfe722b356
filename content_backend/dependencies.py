"""
Wiring for the content backend.

The hosting application builds one `DataManager` and passes it to whatever
needs it; nothing here is a module-level singleton.
"""

from __future__ import annotations

from functools import partial
from typing import Optional

from content_backend.config import GitHubConfig, Settings, get_settings
from content_backend.data_manager import DataManager
from content_backend.github_api import GitHubAPI
from content_backend.kv_store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
    SqlKeyValueStore,
)


def build_local_store(settings: Optional[Settings] = None) -> KeyValueStore:
    settings = settings or get_settings()
    url = settings.local_storage_url
    if not url:
        return InMemoryKeyValueStore()
    if url.startswith(("redis://", "rediss://", "unix://")):
        return RedisKeyValueStore(url=url, prefix=settings.local_storage_prefix)
    return SqlKeyValueStore(url)


def build_data_manager(
    settings: Optional[Settings] = None,
    *,
    config: Optional[GitHubConfig] = None,
    local_store: Optional[KeyValueStore] = None,
) -> DataManager:
    settings = settings or get_settings()
    return DataManager(
        config or GitHubConfig.from_settings(settings),
        local_store if local_store is not None else build_local_store(settings),
        api_factory=partial(
            GitHubAPI,
            api_base_url=settings.github_api_base_url,
            branch=settings.github_branch,
        ),
    )
