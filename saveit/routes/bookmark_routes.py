from flask import Blueprint, current_app, redirect
import logging

from saveit.database import get_session
from saveit.safe_route import user_route
from saveit.schemas import (
    BookmarkIdParams,
    CreateBookmarkBody,
    ListBookmarksQuery,
    UpdateBookmarkBody,
    UrlQuery,
)
from saveit.services.bookmark_service import BookmarkService

logger = logging.getLogger(__name__)

bookmarks_bp = Blueprint('bookmarks', __name__)


@bookmarks_bp.route('/api/b', methods=['GET'])
@user_route.query(UrlQuery).handler
def save_from_url(request, args):
    """Bookmarklet/shortcut endpoint: save the URL, then go to the app."""
    BookmarkService(get_session()).create_bookmark(
        user_id=args.ctx.user.id,
        url=args.query.url,
    )
    return redirect(current_app.config['APP_HOME_PATH'])


@bookmarks_bp.route('/api/bookmarks', methods=['POST'])
@user_route.body(CreateBookmarkBody).handler
def create_bookmark(request, args):
    bookmark = BookmarkService(get_session()).create_bookmark(
        user_id=args.ctx.user.id,
        url=args.body.url,
        transcript=args.body.transcript,
        metadata=args.body.metadata,
    )
    return {'status': 'ok', 'bookmark': bookmark.to_dict()}


@bookmarks_bp.route('/api/bookmarks', methods=['GET'])
@user_route.query(ListBookmarksQuery).handler
def list_bookmarks(request, args):
    bookmarks, has_more, next_cursor = BookmarkService(get_session()).list_bookmarks(
        user_id=args.ctx.user.id,
        query=args.query.query,
        special=args.query.special_filters(),
        limit=args.query.limit,
        cursor=args.query.cursor,
    )
    return {
        'bookmarks': [bookmark.to_dict() for bookmark in bookmarks],
        'hasMore': has_more,
        'nextCursor': next_cursor,
    }


@bookmarks_bp.route('/api/bookmarks/<bookmark_id>', methods=['GET'])
@user_route.params(BookmarkIdParams).handler
def get_bookmark(request, args):
    bookmark = BookmarkService(get_session()).get_bookmark(args.params.bookmark_id, args.ctx.user.id)
    return {'bookmark': bookmark.to_dict()}


@bookmarks_bp.route('/api/bookmarks/<bookmark_id>', methods=['PATCH'])
@user_route.params(BookmarkIdParams).body(UpdateBookmarkBody).handler
def update_bookmark(request, args):
    bookmark = BookmarkService(get_session()).update_bookmark(
        args.params.bookmark_id,
        args.ctx.user.id,
        starred=args.body.starred,
        read=args.body.read,
    )
    return {'bookmark': bookmark.to_dict()}


@bookmarks_bp.route('/api/bookmarks/<bookmark_id>', methods=['DELETE'])
@user_route.params(BookmarkIdParams).handler
def delete_bookmark(request, args):
    bookmark = BookmarkService(get_session()).delete_bookmark(args.params.bookmark_id, args.ctx.user.id)
    return {'success': True, 'bookmark': bookmark.to_dict()}
