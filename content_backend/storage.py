"""
Backend interface shared by the GitHub and local content stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DocumentKind:
    """A fixed content document: where it lives and how commits describe it."""

    name: str
    path: str
    commit_message: str


NEWS = DocumentKind("news", "news.json", "Update news items")
SITE_SETTINGS = DocumentKind("site_settings", "settings.json", "Update site settings")
SOCIAL_LINKS = DocumentKind("social_links", "social.json", "Update social media links")
ADMIN_SETTINGS = DocumentKind("admin_settings", "admin.json", "Update admin settings")

DOCUMENT_KINDS = {
    kind.name: kind for kind in (NEWS, SITE_SETTINGS, SOCIAL_LINKS, ADMIN_SETTINGS)
}


class ContentBackend(Protocol):
    """Document accessors every storage backend provides."""

    def get_news_items(self) -> list[dict]:
        ...

    def save_news_items(self, news_items: list[dict]) -> bool:
        ...

    def get_site_settings(self) -> dict:
        ...

    def save_site_settings(self, settings: dict) -> bool:
        ...

    def get_social_links(self) -> dict:
        ...

    def save_social_links(self, links: dict) -> bool:
        ...

    def get_admin_settings(self) -> dict:
        ...

    def save_admin_settings(self, settings: dict) -> bool:
        ...
