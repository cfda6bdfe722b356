import unittest
from datetime import datetime, timezone
from functools import partial

from pydantic import ValidationError

from content_backend.config import GitHubConfig, SessionTokenStore
from content_backend.data_manager import DataManager
from content_backend.errors import ContentSaveError
from content_backend.github_api import GitHubAPI
from content_backend.kv_store import InMemoryKeyValueStore
from content_backend.news import (
    add_news_item,
    delete_news_item,
    new_news_item,
    update_news_item,
)
from content_backend.tests.fakes import FakeGitHubSession

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class NewsHelperTests(unittest.TestCase):
    def setUp(self):
        self.manager = DataManager(GitHubConfig(enabled=False), InMemoryKeyValueStore())

    def test_new_news_item_shape(self):
        item = new_news_item(
            "Title",
            "runner",
            "Body",
            cover_image_url="cover.png",
            gallery_images=["a.png"],
            item_id="42",
            now=NOW,
        )
        self.assertEqual(
            item,
            {
                "id": "42",
                "title": "Title",
                "category": "runner",
                "content": "Body",
                "coverImageUrl": "cover.png",
                "galleryImages": ["a.png"],
                "date": "2024-05-01T12:00:00.000Z",
                "edited": None,
            },
        )

    def test_new_news_item_generates_id(self):
        first = new_news_item("A", "runner", "x")
        second = new_news_item("B", "runner", "y")
        self.assertTrue(first["id"])
        self.assertNotEqual(first["id"], second["id"])

    def test_add_puts_item_first(self):
        add_news_item(self.manager, new_news_item("Fresh", "runner", "x", item_id="10"))
        ids = [item["id"] for item in self.manager.get_news_items()]
        self.assertEqual(ids, ["10", "1", "2", "3"])

    def test_add_rejects_duplicate_and_invalid_items(self):
        with self.assertRaises(ValueError):
            add_news_item(self.manager, new_news_item("Dup", "runner", "x", item_id="1"))
        with self.assertRaises(ValidationError):
            add_news_item(self.manager, {"id": "11"})

    def test_update_changes_fields_and_stamps_edited(self):
        updated = update_news_item(
            self.manager, "2", title="Renamed", coverImageUrl="new.png", now=NOW
        )
        self.assertEqual(updated["title"], "Renamed")
        self.assertEqual(updated["coverImageUrl"], "new.png")
        self.assertEqual(updated["edited"], "2024-05-01T12:00:00.000Z")
        stored = self.manager.get_news_items()[1]
        self.assertEqual(stored, updated)

    def test_update_accepts_snake_case_fields(self):
        updated = update_news_item(self.manager, "3", gallery_images=["only.png"], now=NOW)
        self.assertEqual(updated["galleryImages"], ["only.png"])

    def test_delete_removes_item(self):
        delete_news_item(self.manager, "2")
        self.assertEqual([item["id"] for item in self.manager.get_news_items()], ["1", "3"])

    def test_unknown_id_raises_key_error(self):
        with self.assertRaises(KeyError):
            update_news_item(self.manager, "missing", title="x")
        with self.assertRaises(KeyError):
            delete_news_item(self.manager, "missing")


class RemoteNewsHelperTests(unittest.TestCase):
    def setUp(self):
        self.session = FakeGitHubSession()
        config = GitHubConfig(
            username="octo", repo_name="site", token_store=SessionTokenStore("secret")
        )
        self.manager = DataManager(
            config,
            InMemoryKeyValueStore(),
            api_factory=partial(GitHubAPI, session=self.session),
        )
        self.manager.save_news_items(
            [new_news_item("A", "runner", "Body", item_id="1", now=NOW)]
        )

    def test_update_raises_when_save_is_rejected(self):
        self.session.failures[("PUT", "/repos/octo/site/contents/news.json")] = 409
        with self.assertLogs("content_backend.github_api", level="ERROR"):
            with self.assertRaises(ContentSaveError):
                update_news_item(self.manager, "1", title="B")
        self.assertEqual(self.manager.get_news_items()[0]["title"], "A")

    def test_update_is_committed_remotely(self):
        update_news_item(self.manager, "1", title="B", now=NOW)
        self.assertEqual(self.manager.get_news_items()[0]["title"], "B")


if __name__ == "__main__":
    unittest.main()
