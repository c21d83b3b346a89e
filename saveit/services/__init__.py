"""
Service layer for business logic.

Services are constructed with their collaborators (repositories, clients)
so routes and tests can swap them.
"""

from saveit.services.auth_service import ApiKeyAuthProvider, ApiKeyService, SessionAuthProvider
from saveit.services.bookmark_service import BookmarkService
from saveit.services.changelog_service import ChangelogDismissalStore, DismissalState
from saveit.services.plan_service import AUTH_LIMITS, AuthLimits, get_auth_limits, get_user_plan

__all__ = [
    'ApiKeyAuthProvider',
    'ApiKeyService',
    'SessionAuthProvider',
    'BookmarkService',
    'ChangelogDismissalStore',
    'DismissalState',
    'AUTH_LIMITS',
    'AuthLimits',
    'get_auth_limits',
    'get_user_plan',
]
