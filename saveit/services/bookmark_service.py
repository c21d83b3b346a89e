"""
Bookmark business logic.

Creation cleans the URL, enforces the plan limits and refuses duplicates
before anything is written. Reads and writes are always scoped to the owner.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import logging

from saveit.database.models import Bookmark, BookmarkType
from saveit.exceptions import BookmarkErrorType, BookmarkValidationError, NotFound
from saveit.repositories.bookmark_repository import BookmarkRepository
from saveit.services.plan_service import get_auth_limits, get_user_plan
from saveit.utils.url_cleaner import clean_url

logger = logging.getLogger(__name__)


class BookmarkService:
    """Service for creating and managing a user's bookmarks"""

    def __init__(self, session):
        self.session = session
        self.repo = BookmarkRepository(session)

    def validate_bookmark_limits(self, user_id: str, url: str) -> Dict[str, Any]:
        """
        Check that the user may save this URL.

        Args:
            user_id: Owner ID
            url: Already-cleaned URL

        Returns:
            Dict with total_bookmarks, plan and limits

        Raises:
            BookmarkValidationError: limit reached or URL already saved
        """
        plan = get_user_plan(self.session, user_id)
        limits = get_auth_limits(plan)
        total_bookmarks = self.repo.count_by_user(user_id)

        if total_bookmarks >= limits.bookmarks:
            logger.info(f"Bookmark limit reached for user {user_id} ({total_bookmarks}/{limits.bookmarks})")
            raise BookmarkValidationError(
                'You have reached the maximum number of bookmarks',
                BookmarkErrorType.MAX_BOOKMARKS,
            )

        if self.repo.find_by_url(user_id, url) is not None:
            logger.info(f"Bookmark already exists for user {user_id}")
            raise BookmarkValidationError(
                'Bookmark already exists',
                BookmarkErrorType.BOOKMARK_ALREADY_EXISTS,
            )

        return {
            'total_bookmarks': total_bookmarks,
            'plan': plan,
            'limits': limits,
        }

    def create_bookmark(
        self,
        user_id: str,
        url: str,
        transcript: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Bookmark:
        cleaned_url = clean_url(url)
        self.validate_bookmark_limits(user_id, cleaned_url)

        final_metadata = dict(metadata or {})
        if transcript:
            final_metadata.update({
                'transcript': transcript,
                'transcriptSource': 'extension',
                'transcriptExtractedAt': datetime.now(timezone.utc).isoformat(),
            })

        return self.repo.create(user_id=user_id, url=cleaned_url, metadata=final_metadata)

    def list_bookmarks(
        self,
        user_id: str,
        query: Optional[str] = None,
        special: Optional[List[str]] = None,
        limit: int = 20,
        cursor: Optional[str] = None
    ) -> Tuple[List[Bookmark], bool, Optional[str]]:
        """
        Returns:
            Tuple of (bookmarks, has_more, next_cursor)
        """
        bookmarks, has_more = self.repo.list_for_user(
            user_id, query=query, special=special, limit=limit, cursor=cursor
        )
        next_cursor = bookmarks[-1].id if has_more and bookmarks else None
        return bookmarks, has_more, next_cursor

    def get_bookmark(self, bookmark_id: str, user_id: str) -> Bookmark:
        bookmark = self.repo.get_for_user(bookmark_id, user_id)
        if bookmark is None:
            raise NotFound('Bookmark not found')
        return bookmark

    def update_bookmark(
        self,
        bookmark_id: str,
        user_id: str,
        starred: Optional[bool] = None,
        read: Optional[bool] = None
    ) -> Bookmark:
        bookmark = self.get_bookmark(bookmark_id, user_id)

        if read is not None and bookmark.type not in BookmarkType.READABLE:
            raise BookmarkValidationError('Bookmark does not support read functionality')

        return self.repo.update_flags(bookmark, starred=starred, read=read)

    def delete_bookmark(self, bookmark_id: str, user_id: str) -> Bookmark:
        bookmark = self.get_bookmark(bookmark_id, user_id)
        self.repo.delete(bookmark)
        return bookmark
