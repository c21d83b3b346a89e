import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Construct database URL from APP_DATA_DIR setting
    APP_DATA_DIR = os.environ.get('APP_DATA_DIR', 'instance')
    DATABASE_URL = f"sqlite:///{APP_DATA_DIR}/saveit.db"

    # Allow override via DATABASE_URL (e.g. postgresql+psycopg://...)
    if os.environ.get('DATABASE_URL'):
        DATABASE_URL = os.environ.get('DATABASE_URL')
    DATABASE_ECHO = False

    # Key-value store for per-user flags (changelog dismissals)
    REDIS_URL = os.environ.get('REDIS_URL', 'redis://localhost:6379/0')
    REDIS_CONNECT_TIMEOUT = float(os.environ.get('REDIS_CONNECT_TIMEOUT', '2'))

    # Application settings
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Where the bookmark shortcut redirects after saving
    APP_HOME_PATH = os.environ.get('APP_HOME_PATH', '/app')

    # Session configuration (configurable via environment variables)
    PERMANENT_SESSION_LIFETIME = timedelta(days=int(os.environ.get('SESSION_LIFETIME_DAYS', '30')))
    SESSION_COOKIE_NAME = 'saveit_session'
    SESSION_COOKIE_SECURE = True  # Only send cookies over HTTPS
    SESSION_COOKIE_HTTPONLY = True  # Prevent XSS attacks
    SESSION_COOKIE_SAMESITE = 'Lax'  # CSRF protection

    # Cache settings (configurable via environment variables)
    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = int(os.environ.get('CACHE_DEFAULT_TIMEOUT', '300'))  # 5 minutes default
    PLAN_CACHE_TIMEOUT = int(os.environ.get('PLAN_CACHE_TIMEOUT', '60'))

    @classmethod
    def validate(cls):
        """Reject placeholder or missing secrets before the app starts."""
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable must be set")
        if cls.SECRET_KEY in ['CHANGE_THIS_SECRET_KEY', 'your-secret-key-here']:
            raise ValueError("SECRET_KEY must be changed from the default placeholder value")
        if cls.DATABASE_URL in ['CHANGE_THIS_DATABASE_URL']:
            raise ValueError("DATABASE_URL must be changed from the default placeholder value")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    DATABASE_ECHO = os.environ.get('DATABASE_ECHO', 'false').lower() == 'true'
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'false').lower() == 'true'  # Allow HTTP in development
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'test-secret-key-do-not-use-in-production'
    # In-memory SQLite shared across the whole test app
    DATABASE_URL = 'sqlite:///:memory:'
    SESSION_COOKIE_SECURE = False  # Allow HTTP in testing
    CACHE_TYPE = 'NullCache'

    @classmethod
    def validate(cls):
        pass


class ProductionConfig(Config):
    """Production configuration."""
    # Explicitly disable debug mode in production
    DEBUG = False

    # Ensure HTTPS in production
    SESSION_COOKIE_SECURE = True
    RATELIMIT_DEFAULTS = ["600 per hour", "60 per minute"]
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
