"""
Authentication middleware for safe routes.

A middleware receives the request and the context built so far, returns the
entries it adds to the context, and raises to reject the request. The auth
providers are looked up on the current app so tests can replace them.
"""

from flask import current_app
import logging

from saveit.exceptions import Unauthorized

logger = logging.getLogger(__name__)

SESSION_PROVIDER_KEY = 'saveit.auth.session'
API_KEY_PROVIDER_KEY = 'saveit.auth.api_key'


def require_user(request, ctx):
    """
    Require a signed-in user.

    Raises:
        Unauthorized: no valid session
    """
    provider = current_app.extensions[SESSION_PROVIDER_KEY]
    user = provider.resolve(request)
    if user is None:
        logger.warning(f"Unauthenticated access attempt to {request.path}")
        raise Unauthorized()

    logger.debug(f"Authenticated request to {request.path} for user_id: {user.id}")
    return {'user': user}


def require_api_key(request, ctx):
    """
    Require a valid API key belonging to a plan with API access.

    Raises:
        Unauthorized: missing or invalid key
        Forbidden: plan without API access
    """
    provider = current_app.extensions[API_KEY_PROVIDER_KEY]
    user, api_key = provider.resolve(request)

    logger.debug(f"API key {api_key.id} authenticated request to {request.path} for user_id: {user.id}")
    return {'user': user, 'api_key': api_key}
