# Database module initialization
from saveit.database.db_manager import (
    get_session,
    close_session,
    init_db,
    ping_database,
)

__all__ = [
    'get_session',
    'close_session',
    'init_db',
    'ping_database',
]
