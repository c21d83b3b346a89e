"""
Repository for API key data access.
"""

from datetime import datetime, timezone
from typing import Optional
import logging

from sqlalchemy import select

from saveit.database.models import ApiKey

logger = logging.getLogger(__name__)


class ApiKeyRepository:
    """Data access layer for API keys"""

    def __init__(self, session):
        self.session = session

    def get_by_hash(self, key_hash: str) -> Optional[ApiKey]:
        return self.session.execute(
            select(ApiKey).where(ApiKey.key_hash == key_hash)
        ).scalars().first()

    def create(self, user_id: str, key_hash: str, name: str) -> ApiKey:
        api_key = ApiKey(user_id=user_id, key_hash=key_hash, name=name)
        self.session.add(api_key)
        self.session.commit()
        logger.info(f"Created API key {api_key.id} for user {user_id}")
        return api_key

    def soft_delete(self, key_id: str) -> bool:
        api_key = self.session.get(ApiKey, key_id)
        if api_key is None or api_key.deleted_at is not None:
            return False
        api_key.deleted_at = datetime.now(timezone.utc)
        self.session.commit()
        return True
