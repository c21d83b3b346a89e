"""
Repository layer for data access.

Repositories handle all database operations.
Each repository is bound to the SQLAlchemy session it is constructed with.
"""

from saveit.repositories.bookmark_repository import BookmarkRepository
from saveit.repositories.user_repository import UserRepository
from saveit.repositories.api_key_repository import ApiKeyRepository

__all__ = [
    'BookmarkRepository',
    'UserRepository',
    'ApiKeyRepository'
]
