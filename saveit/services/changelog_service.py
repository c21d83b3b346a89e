"""
Changelog dismissal flags.

One key per (user, version): ``user:<userId>:dismissed_changelog:<version>``
holding the string "true". Keys never expire.
"""

from enum import Enum
import logging

import redis

from saveit.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

DISMISSED_SENTINEL = 'true'


class DismissalState(Enum):
    DISMISSED = 'dismissed'
    NOT_DISMISSED = 'not_dismissed'
    UNKNOWN = 'unknown'


def dismissal_key(user_id: str, version: str) -> str:
    return f"user:{user_id}:dismissed_changelog:{version}"


class ChangelogDismissalStore:
    """Reads and writes dismissal flags through a Redis client."""

    def __init__(self, client):
        self.client = client

    def mark_dismissed(self, user_id: str, version: str) -> None:
        """
        Record that the user dismissed the changelog for a version.

        Idempotent: repeated calls leave a single "true" flag.

        Raises:
            StoreUnavailable: if the key-value store rejects the write
        """
        key = dismissal_key(user_id, version)
        try:
            self.client.set(key, DISMISSED_SENTINEL)
        except redis.RedisError as e:
            logger.error(f"Failed to write {key}: {e}")
            raise StoreUnavailable('Failed to record changelog dismissal') from e
        logger.debug(f"Marked changelog {version} dismissed for user {user_id}")

    def lookup(self, user_id: str, version: str) -> DismissalState:
        """Read the flag, reporting a store failure as UNKNOWN."""
        key = dismissal_key(user_id, version)
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Failed to read {key}: {e}")
            return DismissalState.UNKNOWN

        if isinstance(value, bytes):
            value = value.decode()
        return DismissalState.DISMISSED if value == DISMISSED_SENTINEL else DismissalState.NOT_DISMISSED

    def is_dismissed(self, user_id: str, version: str) -> bool:
        # Fails open: an unreadable store shows the notification again.
        return self.lookup(user_id, version) is DismissalState.DISMISSED
