import os
from typing import Optional

from ..exceptions import WRDSError
from .schema import ConnectionSettings, DEFAULT_DBNAME, DEFAULT_HOST, DEFAULT_PORT


class Config:
    @property
    def USERNAME(self) -> Optional[str]:
        return os.getenv("WRDS_USERNAME")

    @property
    def PASSWORD(self) -> Optional[str]:
        return os.getenv("WRDS_PASSWORD")

    @property
    def PASSFILE(self) -> Optional[str]:
        return os.getenv("WRDS_PASSFILE")

    @property
    def HOST(self) -> str:
        return os.getenv("WRDS_HOST", DEFAULT_HOST)

    @property
    def PORT(self) -> int:
        return int(os.getenv("WRDS_PORT", str(DEFAULT_PORT)))

    @property
    def DBNAME(self) -> str:
        return os.getenv("WRDS_DBNAME", DEFAULT_DBNAME)

    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("WRDS_LOG_LEVEL", "WARNING").upper()

    def connection_settings(self, username: Optional[str] = None) -> ConnectionSettings:
        """Build ConnectionSettings from the environment; ``username`` overrides WRDS_USERNAME."""
        username = username or self.USERNAME
        if not username:
            raise WRDSError("No WRDS username given; pass --username or set WRDS_USERNAME")
        return ConnectionSettings(
            username=username,
            dbname=self.DBNAME,
            host=self.HOST,
            port=self.PORT,
            password=self.PASSWORD,
            passfile=self.PASSFILE,
        )

config = Config()
