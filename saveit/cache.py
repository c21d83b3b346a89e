"""
Cache and key-value store module.

Separating the shared instances from main.py prevents circular import issues.
Flask-Caching memoises cheap-to-recompute lookups; the Redis client holds
per-user flags that must survive restarts.
"""

import logging

import redis
from flask import current_app
from flask_caching import Cache

logger = logging.getLogger(__name__)

KV_EXTENSION_KEY = 'saveit.kv'

# Initialize cache instance (will be configured in main.py)
cache = Cache()


def init_kv_store(app, client=None):
    """
    Register the key-value client on the app.

    The client connects lazily, so an unreachable Redis only surfaces on the
    first command.
    """
    if client is None:
        client = redis.Redis.from_url(
            app.config['REDIS_URL'],
            decode_responses=True,
            socket_connect_timeout=app.config.get('REDIS_CONNECT_TIMEOUT', 2),
        )
    app.extensions[KV_EXTENSION_KEY] = client
    logger.info("Key-value store client registered")
    return client


def get_kv_client():
    return current_app.extensions[KV_EXTENSION_KEY]
