"""
Scoped connection handling.

Every public query operation takes either an open connection or
ConnectionSettings as its first argument. Settings get a connection opened
for the duration of the call and closed afterwards; open connections are
used as-is and left for the caller to close.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from ..config.schema import ConnectionSettings
from . import connector

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_connection(settings: ConnectionSettings, operation: Callable[..., T], *args, **kwargs) -> T:
    """Run ``operation(conn, *args, **kwargs)`` on a fresh connection, closing it on every exit path."""
    conn = connector.connect(settings)
    try:
        return operation(conn, *args, **kwargs)
    finally:
        conn.close()
        logger.debug(f"Closed connection to {settings.host}")


def accepts_settings(func: Callable[..., T]) -> Callable[..., T]:
    """Let ``func(conn, ...)`` also be called as ``func(settings, ...)``."""

    @functools.wraps(func)
    def wrapper(conn_or_settings: Any, *args, **kwargs) -> T:
        if isinstance(conn_or_settings, ConnectionSettings):
            return with_connection(conn_or_settings, func, *args, **kwargs)
        return func(conn_or_settings, *args, **kwargs)

    return wrapper
