"""
Connector for opening psycopg connections to WRDS.
"""

import logging
from typing import Optional

import psycopg
from psycopg.conninfo import make_conninfo

from ..config.schema import ConnectionSettings

logger = logging.getLogger(__name__)


def build_conninfo(settings: ConnectionSettings) -> str:
    """
    Build a libpq connection string from settings.

    A password wins over a passfile; with neither, libpq does its own lookup.
    Values are quoted as libpq requires.
    """
    params = {
        "dbname": settings.dbname,
        "host": settings.host,
        "port": settings.port,
        "user": settings.username,
    }
    if settings.password is not None:
        params["password"] = settings.password
    elif settings.passfile is not None:
        params["passfile"] = settings.passfile
    return make_conninfo(**params)


def connect(settings: Optional[ConnectionSettings] = None, **kwargs) -> psycopg.Connection:
    """
    Open a connection to WRDS.

    Usage:
        conn = connect(settings)
        conn = connect(username="jdoe", passfile="~/.pgpass")

    The caller owns the returned connection and must close it.

    Raises:
        psycopg.OperationalError: On authentication or network failure.
    """
    if settings is None:
        settings = ConnectionSettings(**kwargs)
    elif kwargs:
        raise TypeError("Pass either ConnectionSettings or keyword arguments, not both")

    logger.info(f"Connecting to {settings.host}:{settings.port}/{settings.dbname} as {settings.username}")
    return psycopg.connect(build_conninfo(settings))
