"""
Authentication collaborators.

SessionAuthProvider resolves browser requests from the signed Flask session
cookie; ApiKeyAuthProvider resolves public API requests from a bearer key.
Both are registered on the app in create_app and looked up per request, so
tests can replace them.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple
import logging

from flask import session as flask_session

from saveit.database.models import ApiKey, User
from saveit.exceptions import Forbidden, Unauthorized
from saveit.repositories.api_key_repository import ApiKeyRepository
from saveit.repositories.user_repository import UserRepository
from saveit.services.plan_service import get_auth_limits, get_user_plan

logger = logging.getLogger(__name__)

SESSION_USER_KEY = 'user_id'


@dataclass
class ApiKeyCreationResult:
    key_id: str
    plaintext_key: str
    name: str
    created_at: datetime


def hash_key(plaintext_key: str) -> str:
    """Hash an API key using SHA-256"""
    return hashlib.sha256(plaintext_key.encode()).hexdigest()


class ApiKeyService:
    def __init__(self, session) -> None:
        self.api_key_repo = ApiKeyRepository(session)

    def generate_api_key(self) -> str:
        return f"saveit_{secrets.token_urlsafe(32)}"

    def create_api_key(self, user_id: str, name: str) -> ApiKeyCreationResult:
        """Create a key; the plaintext is only available in the result."""
        plaintext_key = self.generate_api_key()
        api_key = self.api_key_repo.create(user_id=user_id, key_hash=hash_key(plaintext_key), name=name)
        return ApiKeyCreationResult(
            key_id=api_key.id,
            plaintext_key=plaintext_key,
            name=api_key.name,
            created_at=api_key.created_at,
        )

    def validate_api_key(self, plaintext_key: str) -> Tuple[Optional[ApiKey], Optional[str]]:
        api_key = self.api_key_repo.get_by_hash(hash_key(plaintext_key))

        if api_key is None:
            return None, "Invalid API key"

        if api_key.deleted_at is not None:
            return None, "API key has been deleted"

        return api_key, None


class SessionAuthProvider:
    """Resolves the signed-in user from the Flask session cookie."""

    def __init__(self, session_getter):
        self.session_getter = session_getter

    def resolve(self, request) -> Optional[User]:
        user_id = flask_session.get(SESSION_USER_KEY)
        if not user_id:
            return None

        user = UserRepository(self.session_getter()).get_by_id(user_id)
        if user is None:
            logger.warning(f"Session references unknown user {user_id}")
        return user


class ApiKeyAuthProvider:
    """Resolves the key owner from an ``Authorization: Bearer <key>`` header."""

    def __init__(self, session_getter):
        self.session_getter = session_getter

    def resolve(self, request) -> Tuple[User, ApiKey]:
        """
        Authenticate an API request.

        Raises:
            Unauthorized: missing, malformed, unknown or deleted key
            Forbidden: the owner's plan has no API access
        """
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            raise Unauthorized('Missing authorization header')

        scheme, _, token = auth_header.partition(' ')
        token = token.strip()
        if scheme.lower() != 'bearer' or not token:
            raise Unauthorized('Invalid authorization header format')

        session = self.session_getter()
        api_key, error = ApiKeyService(session).validate_api_key(token)
        if api_key is None:
            raise Unauthorized(error)

        user = UserRepository(session).get_by_id(api_key.user_id)
        if user is None:
            raise Unauthorized('API key not found')

        if not get_auth_limits(get_user_plan(session, user.id)).api_access:
            raise Forbidden('Pro plan required')

        return user, api_key
