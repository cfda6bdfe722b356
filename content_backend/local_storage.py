"""
Local fallback content store.

Used when GitHub storage is disabled or unreachable. News and social links
are stored as JSON under a single key each; site and admin settings keep
one plain-string key per field.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from content_backend.kv_store import KeyValueStore
from content_backend.schemas import (
    default_admin_settings,
    default_site_settings,
    default_social_links,
    sample_news_items,
)

logger = logging.getLogger(__name__)

NEWS_KEY = "jjkNews"
SOCIAL_LINKS_KEY = "jjkSocialLinks"
SITE_SETTINGS_KEYS = {"siteTitle": "jjkSiteTitle", "newsHeader": "jjkNewsHeader"}
ADMIN_SETTINGS_KEYS = {"adminCode": "jjkAdminCode"}


class LocalStorageBackend:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def _get_json(self, key: str, default_factory: Callable[[], Any]) -> Any:
        raw = self.store.get_item(key)
        if raw is None:
            return default_factory()
        try:
            value = json.loads(raw)
        except ValueError:
            logger.error("Stored value for %s is not valid JSON; using defaults", key)
            return default_factory()
        # A stored JSON null counts as missing.
        return value if value is not None else default_factory()

    def _set_json(self, key: str, value: Any) -> bool:
        self.store.set_item(key, json.dumps(value, ensure_ascii=False))
        return True

    def _get_fields(self, keys: dict[str, str], defaults: dict) -> dict:
        result = {}
        for field_name, key in keys.items():
            stored = self.store.get_item(key)
            result[field_name] = stored if stored else defaults[field_name]
        return result

    def _set_fields(self, keys: dict[str, str], values: dict) -> bool:
        for field_name, key in keys.items():
            if field_name in values:
                self.store.set_item(key, values[field_name])
        return True

    def get_news_items(self) -> list[dict]:
        return self._get_json(NEWS_KEY, sample_news_items)

    def save_news_items(self, news_items: list[dict]) -> bool:
        return self._set_json(NEWS_KEY, news_items)

    def get_site_settings(self) -> dict:
        return self._get_fields(SITE_SETTINGS_KEYS, default_site_settings())

    def save_site_settings(self, settings: dict) -> bool:
        return self._set_fields(SITE_SETTINGS_KEYS, settings)

    def get_social_links(self) -> dict:
        return self._get_json(SOCIAL_LINKS_KEY, default_social_links)

    def save_social_links(self, links: dict) -> bool:
        return self._set_json(SOCIAL_LINKS_KEY, links)

    def get_admin_settings(self) -> dict:
        return self._get_fields(ADMIN_SETTINGS_KEYS, default_admin_settings())

    def save_admin_settings(self, settings: dict) -> bool:
        return self._set_fields(ADMIN_SETTINGS_KEYS, settings)
