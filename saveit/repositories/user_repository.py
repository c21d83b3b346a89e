"""
Repository for user and subscription data access.
"""

from typing import Optional
import logging

from sqlalchemy import select

from saveit.database.models import Subscription, User

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access layer for users and their subscriptions"""

    def __init__(self, session):
        self.session = session

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User or None if not found
        """
        logger.debug(f"Fetching user by ID: {user_id}")
        return self.session.get(User, user_id)

    def create(self, email: str, name: Optional[str] = None, role: str = 'user') -> User:
        logger.info(f"Creating user: {email}")
        user = User(email=email, name=name, role=role)
        self.session.add(user)
        self.session.commit()
        return user

    def get_active_plan(self, user_id: str) -> Optional[str]:
        """
        Get the plan of the user's active subscription.

        Returns:
            Plan name, or None when the user has no active subscription
        """
        subscription = self.session.execute(
            select(Subscription)
            .where(Subscription.reference_id == user_id, Subscription.status == 'active')
            .order_by(Subscription.created_at.desc())
        ).scalars().first()
        return subscription.plan if subscription else None

    def set_plan(self, user_id: str, plan: str) -> Subscription:
        subscription = Subscription(reference_id=user_id, plan=plan, status='active')
        self.session.add(subscription)
        self.session.commit()
        logger.info(f"User {user_id} subscribed to plan {plan}")
        return subscription
