import os
import logging

import click
from flask import g, current_app
from flask.cli import with_appcontext
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from saveit.database.models import Base

# Configure logging
logger = logging.getLogger(__name__)

EXTENSION_KEY = 'saveit.db'


def create_db_engine(database_url, echo=False):
    """
    Build the SQLAlchemy engine for a database URL.

    In-memory SQLite gets a single shared connection so every session in the
    process sees the same tables.
    """
    if database_url.startswith('sqlite'):
        if ':memory:' in database_url:
            return create_engine(
                database_url,
                echo=echo,
                connect_args={'check_same_thread': False},
                poolclass=StaticPool,
            )

        # Ensure the database directory exists
        db_path = database_url.replace('sqlite:///', '')
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)
            logger.info(f"Created database directory: {db_dir}")

        return create_engine(
            database_url,
            echo=echo,
            connect_args={'check_same_thread': False},
        )

    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def get_engine():
    return current_app.extensions[EXTENSION_KEY]['engine']


def get_session():
    """
    Get a database session for the current request.
    The session is cached and reused for the same request.
    """
    if 'db_session' not in g:
        factory = current_app.extensions[EXTENSION_KEY]['session_factory']
        g.db_session = factory()
        logger.debug("Opened database session")
    return g.db_session


def close_session(e=None):
    """Close the database session at the end of the request."""
    db_session = g.pop('db_session', None)
    if db_session is not None:
        if e is not None:
            db_session.rollback()
        db_session.close()


def create_tables(engine):
    Base.metadata.create_all(bind=engine)


def ping_database():
    """Run a trivial query; raises if the database is unreachable."""
    get_session().execute(text('SELECT 1'))


def init_db(app):
    """
    Create the engine and session factory for the app, register the
    teardown hook and create missing tables.
    """
    engine = create_db_engine(
        app.config['DATABASE_URL'],
        echo=app.config.get('DATABASE_ECHO', False),
    )
    app.extensions[EXTENSION_KEY] = {
        'engine': engine,
        'session_factory': sessionmaker(bind=engine, autoflush=False, expire_on_commit=False),
    }
    app.teardown_appcontext(close_session)
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_api_key_command)

    try:
        create_tables(engine)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    logger.info("Database initialized")


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create any missing tables."""
    create_tables(get_engine())
    click.echo('Initialized the database.')


@click.command('create-api-key')
@click.argument('user_id')
@click.argument('name')
@with_appcontext
def create_api_key_command(user_id, name):
    """Create an API key for USER_ID and print it once."""
    from saveit.services.auth_service import ApiKeyService

    result = ApiKeyService(get_session()).create_api_key(user_id, name)
    click.echo(f"API key '{result.name}' ({result.key_id}): {result.plaintext_key}")
