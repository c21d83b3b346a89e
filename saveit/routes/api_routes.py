"""Public API (v1), authenticated with bearer API keys."""

from flask import Blueprint
import logging

from saveit.database import get_session
from saveit.safe_route import api_route
from saveit.schemas import ApiListBookmarksQuery, CreateBookmarkBody
from saveit.services.bookmark_service import BookmarkService

logger = logging.getLogger(__name__)

api_v1_bp = Blueprint('api_v1', __name__)


@api_v1_bp.route('/bookmarks', methods=['POST'])
@api_route.body(CreateBookmarkBody).handler
def create_bookmark(request, args):
    bookmark = BookmarkService(get_session()).create_bookmark(
        user_id=args.ctx.user.id,
        url=args.body.url,
        transcript=args.body.transcript,
        metadata=args.body.metadata,
    )
    return {'success': True, 'bookmark': bookmark.to_dict()}


@api_v1_bp.route('/bookmarks', methods=['GET'])
@api_route.query(ApiListBookmarksQuery).handler
def list_bookmarks(request, args):
    bookmarks, has_more, next_cursor = BookmarkService(get_session()).list_bookmarks(
        user_id=args.ctx.user.id,
        query=args.query.query,
        special=[args.query.special] if args.query.special else [],
        limit=args.query.limit,
        cursor=args.query.cursor,
    )
    return {
        'success': True,
        'bookmarks': [bookmark.to_dict() for bookmark in bookmarks],
        'hasMore': has_more,
        'nextCursor': next_cursor,
    }
