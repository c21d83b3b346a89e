"""
Request middleware for safe routes.

Each middleware authenticates the request and contributes to the route context.
"""

from saveit.decorators.auth import require_api_key, require_user

__all__ = ['require_api_key', 'require_user']
