"""
Shared fixtures: a testing app on in-memory SQLite, a fake Redis client and
helpers to create signed-in users.
"""

import pytest
import redis

from saveit.cache import init_kv_store
from saveit.main import create_app
from saveit.repositories.user_repository import UserRepository
from saveit.services.auth_service import ApiKeyService


class FakeRedis:
    """Minimal in-memory stand-in for the redis client used by the app."""

    def __init__(self):
        self.data = {}
        self.fail_reads = False
        self.fail_writes = False
        self.set_calls = 0

    def get(self, key):
        if self.fail_reads:
            raise redis.ConnectionError('connection refused')
        return self.data.get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise redis.ConnectionError('connection refused')
        self.set_calls += 1
        self.data[key] = value
        return True

    def ping(self):
        if self.fail_reads:
            raise redis.ConnectionError('connection refused')
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def app(fake_redis):
    """Create test Flask app."""
    app = create_app('testing')
    init_kv_store(app, fake_redis)
    return app


@pytest.fixture
def db_session(app):
    """A session on the app's database, independent of request sessions."""
    session = app.extensions['saveit.db']['session_factory']()
    yield session
    session.close()


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def user(db_session):
    return UserRepository(db_session).create(email='reader@example.com', name='Reader')


@pytest.fixture
def other_user(db_session):
    return UserRepository(db_session).create(email='other@example.com', name='Other')


@pytest.fixture
def authenticated_client(client, user):
    """Client with a signed-in session for `user`."""
    with client.session_transaction() as sess:
        sess['user_id'] = user.id
    return client


@pytest.fixture
def pro_api_key(db_session, user):
    """Plaintext API key for `user` on the pro plan."""
    UserRepository(db_session).set_plan(user.id, 'pro')
    return ApiKeyService(db_session).create_api_key(user.id, 'CLI').plaintext_key
