from flask import Flask, jsonify
import logging
import os
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def create_app(config_name=None, overrides=None):
    """
    Build the Flask application.

    Args:
        config_name: Key of the config dict in config.py; defaults to FLASK_ENV
        overrides: Optional mapping applied on top of the loaded config
    """
    # Load configuration from config.py
    from config import config

    # Determine config name from environment or parameter
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')
    config_class = config.get(config_name, config['development'])

    logging.basicConfig(level=getattr(logging, str(config_class.LOG_LEVEL).upper(), logging.INFO))
    app = Flask(__name__)
    logger.info(f"Creating app with '{config_name}' configuration")

    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)
    config_class.validate()

    # Add security headers and rate limits (production only)
    if config_name == 'production':
        from flask_talisman import Talisman
        from flask_limiter import Limiter
        from flask_limiter.util import get_remote_address

        Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            strict_transport_security_max_age=31536000,  # 1 year
            content_security_policy={'default-src': "'self'"},
            referrer_policy='strict-origin-when-cross-origin',
        )
        logger.info("Security headers configured with Flask-Talisman")

        app.limiter = Limiter(
            key_func=get_remote_address,
            app=app,
            default_limits=app.config['RATELIMIT_DEFAULTS'],
            storage_uri=app.config['RATELIMIT_STORAGE_URI'],
            strategy="fixed-window"
        )
        logger.info("Rate limiting configured with Flask-Limiter")

    # Shared clients
    from saveit.cache import cache, init_kv_store
    cache.init_app(app)
    init_kv_store(app)

    from saveit.database import get_session, init_db
    init_db(app)

    from saveit.decorators.auth import API_KEY_PROVIDER_KEY, SESSION_PROVIDER_KEY
    from saveit.services.auth_service import ApiKeyAuthProvider, SessionAuthProvider
    app.extensions[SESSION_PROVIDER_KEY] = SessionAuthProvider(get_session)
    app.extensions[API_KEY_PROVIDER_KEY] = ApiKeyAuthProvider(get_session)

    # Register blueprints
    from saveit.routes.bookmark_routes import bookmarks_bp
    app.register_blueprint(bookmarks_bp)

    from saveit.routes.changelog_routes import changelog_bp
    app.register_blueprint(changelog_bp, url_prefix='/api/changelog')

    from saveit.routes.api_routes import api_v1_bp
    app.register_blueprint(api_v1_bp, url_prefix='/api/v1')

    @app.route('/health')
    def health_check():
        """Health check endpoint for Docker and load balancers."""
        from saveit.cache import get_kv_client
        from saveit.database import ping_database

        checks = {}
        try:
            ping_database()
            checks['database'] = 'connected'
        except Exception as e:
            logger.error(f"Health check database failure: {e}")
            checks['database'] = 'unavailable'

        try:
            get_kv_client().ping()
            checks['kv_store'] = 'connected'
        except Exception as e:
            logger.error(f"Health check key-value store failure: {e}")
            checks['kv_store'] = 'unavailable'

        healthy = all(value == 'connected' for value in checks.values())
        return jsonify({
            'status': 'healthy' if healthy else 'unhealthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            **checks,
        }), 200 if healthy else 503

    return app
