"""
Key-value stores used by the local fallback backend.

These play the role a browser's localStorage plays for the static site:
string keys mapped to string values, with no failure modes the callers
need to handle.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import redis
from sqlalchemy import Column, Float, String, Text, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class KeyValueStore(Protocol):
    """String key/value operations needed by the local backend."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


@dataclass
class InMemoryKeyValueStore:
    """Process-local store for development and tests."""

    items: Dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def clear(self) -> None:
        self.items.clear()


Base = declarative_base()


class KeyValueRow(Base):
    __tablename__ = "kv_items"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(Float, nullable=False)


class SqlKeyValueStore:
    """
    SQLAlchemy-backed store. Accepts any SQLAlchemy URL (e.g. a SQLite file).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("database_url is required for SqlKeyValueStore")
        self.engine = create_engine(database_url, future=True, pool_pre_ping=True)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def get_item(self, key: str) -> Optional[str]:
        with self.Session() as session:
            row = session.get(KeyValueRow, key)
            return row.value if row else None

    def set_item(self, key: str, value: str) -> None:
        with self.Session() as session:
            row = session.get(KeyValueRow, key)
            if row:
                row.value = str(value)
                row.updated_at = time.time()
            else:
                session.add(
                    KeyValueRow(key=key, value=str(value), updated_at=time.time())
                )
            session.commit()

    def remove_item(self, key: str) -> None:
        with self.Session() as session:
            row = session.get(KeyValueRow, key)
            if row:
                session.delete(row)
                session.commit()

    def clear(self) -> None:
        with self.Session() as session:
            session.query(KeyValueRow).delete(synchronize_session=False)
            session.commit()


@dataclass
class RedisKeyValueStore:
    """Redis-backed store; every key is namespaced under `prefix`."""

    url: str
    prefix: str = "noarz:"

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url, decode_responses=True)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self.client.get(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self.client.set(self._key(key), str(value))

    def remove_item(self, key: str) -> None:
        self.client.delete(self._key(key))

    def clear(self) -> None:
        keys = list(self.client.scan_iter(match=f"{self.prefix}*"))
        if keys:
            self.client.delete(*keys)
