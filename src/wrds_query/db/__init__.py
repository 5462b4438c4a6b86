from .connector import build_conninfo, connect
from .scoped import with_connection, accepts_settings

__all__ = [
    "build_conninfo",
    "connect",
    "with_connection",
    "accepts_settings",
]
