"""
Pydantic schemas for the site content documents.

Documents are persisted as plain JSON with camelCase keys, so every model
dumps by alias.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NewsItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str
    category: str = ""
    content: str = ""
    cover_image_url: str = Field(default="", alias="coverImageUrl")
    gallery_images: list[str] = Field(default_factory=list, alias="galleryImages")
    date: str
    edited: Optional[str] = None

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class SiteSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    site_title: str = Field(default="NOARZ", alias="siteTitle")
    news_header: str = Field(default="📰MESSAGE📣", alias="newsHeader")


class SocialLinks(BaseModel):
    youtube: str = "https://www.youtube.com"
    discord: str = "https://discord.com"


class AdminSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    admin_code: str = Field(default="0988131688", alias="adminCode")


def default_site_settings() -> dict:
    return SiteSettings().model_dump(by_alias=True)


def default_social_links() -> dict:
    return SocialLinks().model_dump(by_alias=True)


def default_admin_settings() -> dict:
    return AdminSettings().model_dump(by_alias=True)


def isoformat(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def sample_news_items(now: Optional[datetime] = None) -> list[dict]:
    """
    Three starter posts shown until real news has been saved.

    Dated `now`, one day earlier and two days earlier, newest first.
    """
    now = now or datetime.now(timezone.utc)
    items = [
        NewsItem(
            id="1",
            title="Welcome to NOARZ",
            category="roblox-script",
            content=(
                "Welcome to our news platform! This is a sample post to show "
                "how the system works."
            ),
            cover_image_url="https://i.imgur.com/IuN9n69.jpg",
            gallery_images=[
                "https://i.imgur.com/IuN9n69.jpg",
                "https://i.imgur.com/jCgYAFB.jpg",
            ],
            date=isoformat(now),
        ),
        NewsItem(
            id="2",
            title="New Features Coming Soon",
            category="runner",
            content=(
                "We are working on exciting new features for our platform. "
                "Stay tuned for updates!"
            ),
            cover_image_url="https://i.imgur.com/jCgYAFB.jpg",
            gallery_images=[
                "https://i.imgur.com/jCgYAFB.jpg",
                "https://i.imgur.com/UKQEMkT.jpg",
            ],
            date=isoformat(now - timedelta(days=1)),
        ),
        NewsItem(
            id="3",
            title="How to Use the Admin Panel",
            category="roblox-script",
            content=(
                "This guide explains how to use the admin panel to manage "
                "your news posts."
            ),
            cover_image_url="https://i.imgur.com/UKQEMkT.jpg",
            gallery_images=[
                "https://i.imgur.com/IuN9n69.jpg",
                "https://i.imgur.com/jCgYAFB.jpg",
                "https://i.imgur.com/UKQEMkT.jpg",
                "https://i.imgur.com/YTKM8bR.jpg",
            ],
            date=isoformat(now - timedelta(days=2)),
        ),
    ]
    return [item.to_document() for item in items]
