# Routes package initialization
from saveit.routes.bookmark_routes import bookmarks_bp
from saveit.routes.changelog_routes import changelog_bp
from saveit.routes.api_routes import api_v1_bp

__all__ = [
    'bookmarks_bp',
    'changelog_bp',
    'api_v1_bp'
]
