"""
Repository for bookmark data access.

Centralizes all bookmark-related database queries. Every lookup is scoped to
the owning user.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from saveit.database.models import Bookmark
from saveit.exceptions import (
    BookmarkErrorType, BookmarkValidationError, StoreUnavailable
)

logger = logging.getLogger(__name__)


class BookmarkRepository:
    """Data access layer for bookmark operations"""

    def __init__(self, session):
        self.session = session

    def count_by_user(self, user_id: str) -> int:
        return self.session.execute(
            select(func.count()).select_from(Bookmark).where(Bookmark.user_id == user_id)
        ).scalar_one()

    def find_by_url(self, user_id: str, url: str) -> Optional[Bookmark]:
        return self.session.execute(
            select(Bookmark).where(Bookmark.user_id == user_id, Bookmark.url == url)
        ).scalars().first()

    def get_for_user(self, bookmark_id: str, user_id: str) -> Optional[Bookmark]:
        """
        Get a bookmark by ID, only if it belongs to the user.

        Args:
            bookmark_id: Bookmark ID
            user_id: Owner ID

        Returns:
            Bookmark or None if missing or owned by someone else
        """
        return self.session.execute(
            select(Bookmark).where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
        ).scalars().first()

    def create(self, user_id: str, url: str, metadata: Optional[Dict[str, Any]] = None) -> Bookmark:
        """
        Insert a new bookmark.

        Raises:
            BookmarkValidationError: the user already saved this URL
            StoreUnavailable: if the insert fails
        """
        bookmark = Bookmark(user_id=user_id, url=url, metadata_=metadata or None)
        try:
            self.session.add(bookmark)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info(f"Duplicate bookmark insert rejected for user {user_id}")
            raise BookmarkValidationError(
                'Bookmark already exists',
                BookmarkErrorType.BOOKMARK_ALREADY_EXISTS,
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to create bookmark for user {user_id}: {e}")
            raise StoreUnavailable('Failed to create bookmark') from e

        logger.info(f"Created bookmark {bookmark.id} for user {user_id}")
        return bookmark

    def list_for_user(
        self,
        user_id: str,
        query: Optional[str] = None,
        special: Optional[List[str]] = None,
        limit: int = 20,
        cursor: Optional[str] = None
    ) -> Tuple[List[Bookmark], bool]:
        """
        List the user's bookmarks, newest first.

        Args:
            user_id: Owner ID
            query: Case-insensitive substring matched against url and title
            special: Any of READ, UNREAD, STAR
            limit: Page size
            cursor: ID of the last bookmark of the previous page

        Returns:
            Tuple of (bookmarks, has_more)
        """
        stmt = select(Bookmark).where(Bookmark.user_id == user_id)

        if query:
            pattern = f"%{query.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Bookmark.url).like(pattern),
                func.lower(func.coalesce(Bookmark.title, '')).like(pattern),
            ))

        for flag in special or []:
            if flag == 'READ':
                stmt = stmt.where(Bookmark.read.is_(True))
            elif flag == 'UNREAD':
                stmt = stmt.where(Bookmark.read.is_(False))
            elif flag == 'STAR':
                stmt = stmt.where(Bookmark.starred.is_(True))

        if cursor:
            anchor = self.get_for_user(cursor, user_id)
            if anchor is not None:
                stmt = stmt.where(or_(
                    Bookmark.created_at < anchor.created_at,
                    and_(Bookmark.created_at == anchor.created_at, Bookmark.id < anchor.id),
                ))

        stmt = stmt.order_by(Bookmark.created_at.desc(), Bookmark.id.desc()).limit(limit + 1)
        rows = list(self.session.execute(stmt).scalars())
        return rows[:limit], len(rows) > limit

    def update_flags(self, bookmark: Bookmark, starred: Optional[bool] = None, read: Optional[bool] = None) -> Bookmark:
        if starred is not None:
            bookmark.starred = starred
        if read is not None:
            bookmark.read = read
        self.session.commit()
        logger.debug(f"Updated bookmark {bookmark.id}: starred={starred} read={read}")
        return bookmark

    def delete(self, bookmark: Bookmark) -> None:
        self.session.delete(bookmark)
        self.session.commit()
        logger.info(f"Deleted bookmark {bookmark.id}")
