"""
Connection settings for the WRDS PostgreSQL server.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict
import os
import re

DEFAULT_DBNAME = "wrds"
DEFAULT_HOST = "wrds-pgdata.wharton.upenn.edu"
DEFAULT_PORT = 9737


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} patterns in string with environment variable values."""
    pattern = r'\$\{([^}]+)\}'
    
    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))
    
    return re.sub(pattern, replacer, value)


class ConnectionSettings(BaseModel):
    """Credentials and address of a WRDS database.

    Only one of ``password``/``passfile`` is normally set. With neither,
    libpq falls back to its own pgpass lookup.
    """
    model_config = ConfigDict(frozen=True)

    dbname: str = DEFAULT_DBNAME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    username: str
    password: Optional[str] = None
    passfile: Optional[str] = None
    
    def model_post_init(self, __context):
        """Expand environment variables in secrets."""
        if self.password:
            object.__setattr__(self, 'password', expand_env_vars(self.password))
        if self.passfile:
            object.__setattr__(self, 'passfile', expand_env_vars(self.passfile))

    def __repr__(self) -> str:
        secret = "***" if self.password else None
        return (
            f"ConnectionSettings(dbname={self.dbname!r}, host={self.host!r}, port={self.port}, "
            f"username={self.username!r}, password={secret!r}, passfile={self.passfile!r})"
        )

    __str__ = __repr__


def settings(username: str, **kwargs) -> ConnectionSettings:
    """Build ConnectionSettings for ``username``, defaults filled in for the rest."""
    return ConnectionSettings(username=username, **kwargs)
