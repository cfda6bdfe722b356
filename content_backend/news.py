"""
Helpers for editing a single news item.

News is stored as one document, so every change reads the whole
collection, edits it in memory and writes it back.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from content_backend.errors import ContentSaveError
from content_backend.schemas import NewsItem, isoformat
from content_backend.storage import ContentBackend


def new_news_item(
    title: str,
    category: str,
    content: str,
    *,
    cover_image_url: str = "",
    gallery_images: Optional[list[str]] = None,
    item_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    item = NewsItem(
        id=item_id or uuid.uuid4().hex,
        title=title,
        category=category,
        content=content,
        cover_image_url=cover_image_url,
        gallery_images=list(gallery_images or []),
        date=isoformat(now or datetime.now(timezone.utc)),
    )
    return item.to_document()


def _index_of(news_items: list[dict], item_id: str) -> int:
    for index, item in enumerate(news_items):
        if item.get("id") == item_id:
            return index
    raise KeyError(item_id)


def add_news_item(manager: ContentBackend, item: dict) -> bool:
    """Validate `item` and put it at the top of the collection."""
    document = NewsItem.model_validate(item).to_document()
    news_items = manager.get_news_items()
    if any(existing.get("id") == document["id"] for existing in news_items):
        raise ValueError(f"News item {document['id']!r} already exists")
    return manager.save_news_items([document, *news_items])


def update_news_item(
    manager: ContentBackend,
    item_id: str,
    *,
    now: Optional[datetime] = None,
    **changes,
) -> dict:
    """
    Apply `changes` (camelCase or snake_case field names) to one item and
    stamp its `edited` time. Returns the updated item.

    Raises:
        KeyError: No item with `item_id` exists.
        ContentSaveError: The backend did not store the updated collection.
    """
    news_items = manager.get_news_items()
    index = _index_of(news_items, item_id)
    current = NewsItem.model_validate(news_items[index])
    aliases = {
        name: field.alias or name for name, field in NewsItem.model_fields.items()
    }
    changes = {aliases.get(key, key): value for key, value in changes.items()}
    merged = {**current.model_dump(by_alias=True), **changes, "id": item_id}
    updated = NewsItem.model_validate(merged)
    updated.edited = isoformat(now or datetime.now(timezone.utc))
    news_items[index] = updated.to_document()
    if not manager.save_news_items(news_items):
        raise ContentSaveError(f"Could not save news item {item_id!r}")
    return news_items[index]


def delete_news_item(manager: ContentBackend, item_id: str) -> bool:
    news_items = manager.get_news_items()
    del news_items[_index_of(news_items, item_id)]
    return manager.save_news_items(news_items)
