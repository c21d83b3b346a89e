"""
Plan limits.

Limits depend only on the plan name; the plan of a user is looked up from
their active subscription and memoised in the Flask-Caching cache.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from flask import current_app

from saveit.cache import cache
from saveit.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

FREE_PLAN = 'free'
PRO_PLAN = 'pro'


@dataclass(frozen=True)
class AuthLimits:
    bookmarks: int
    api_access: bool


AUTH_LIMITS = {
    FREE_PLAN: AuthLimits(bookmarks=20, api_access=False),
    PRO_PLAN: AuthLimits(bookmarks=50000, api_access=True),
}


def get_auth_limits(plan: Optional[str]) -> AuthLimits:
    """Limits for a plan; unknown or missing plans get the free limits."""
    return AUTH_LIMITS.get(plan or FREE_PLAN, AUTH_LIMITS[FREE_PLAN])


def _plan_cache_key(user_id: str) -> str:
    return f"plan:{user_id}"


def get_user_plan(session, user_id: str) -> str:
    """
    Get the plan of the user's active subscription, defaulting to free.

    Args:
        session: SQLAlchemy session
        user_id: User ID

    Returns:
        Plan name
    """
    key = _plan_cache_key(user_id)
    plan = cache.get(key)
    if plan is None:
        plan = UserRepository(session).get_active_plan(user_id) or FREE_PLAN
        cache.set(key, plan, timeout=current_app.config.get('PLAN_CACHE_TIMEOUT', 60))
        logger.debug(f"Resolved plan for user {user_id}: {plan}")
    return plan

