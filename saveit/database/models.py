"""
ORM models for the SaveIt database.

Bookmarks are owned by users; subscriptions and API keys hang off the user
row. Timestamps are stored timezone-aware (UTC).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, ForeignKey, Index, String, Text,
    UniqueConstraint
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id():
    return uuid.uuid4().hex


def _utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class BookmarkType:
    ARTICLE = 'ARTICLE'
    YOUTUBE = 'YOUTUBE'
    TWEET = 'TWEET'
    PDF = 'PDF'
    IMAGE = 'IMAGE'
    PRODUCT = 'PRODUCT'
    PAGE = 'PAGE'

    # Types that support the "read" toggle
    READABLE = (ARTICLE, YOUTUBE)


class BookmarkStatus:
    PENDING = 'PENDING'
    PROCESSING = 'PROCESSING'
    READY = 'READY'
    ERROR = 'ERROR'


class User(Base):
    __tablename__ = 'users'

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(320), nullable=False, unique=True)
    name = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default='user')
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class Subscription(Base):
    __tablename__ = 'subscriptions'

    id = Column(String(32), primary_key=True, default=_new_id)
    reference_id = Column(String(32), ForeignKey('users.id'), nullable=False, index=True)
    plan = Column(String(32), nullable=False, default='free')
    status = Column(String(32), nullable=False, default='active')
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class ApiKey(Base):
    __tablename__ = 'api_keys'

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey('users.id'), nullable=False, index=True)
    name = Column(String(255), nullable=False, default='')
    key_hash = Column(String(64), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)


class Bookmark(Base):
    __tablename__ = 'bookmarks'
    __table_args__ = (
        Index('idx_bookmarks_user_created', 'user_id', 'created_at'),
        UniqueConstraint('user_id', 'url', name='uq_bookmarks_user_url'),
    )

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey('users.id'), nullable=False)
    url = Column(Text, nullable=False)
    title = Column(Text, nullable=True)
    type = Column(String(32), nullable=False, default=BookmarkType.PAGE)
    status = Column(String(32), nullable=False, default=BookmarkStatus.PENDING)
    starred = Column(Boolean, nullable=False, default=False)
    read = Column(Boolean, nullable=False, default=False)
    # "metadata" is reserved on declarative classes
    metadata_ = Column('metadata', JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        """Serialize for JSON responses (camelCase keys)."""
        return {
            'id': self.id,
            'userId': self.user_id,
            'url': self.url,
            'title': self.title,
            'type': self.type,
            'status': self.status,
            'starred': self.starred,
            'read': self.read,
            'metadata': self.metadata_,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }
