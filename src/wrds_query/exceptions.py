from typing import Optional

import psycopg


class WRDSError(Exception):
    """Base exception for wrds-query"""
    pass

class ParseError(WRDSError):
    """Raised when the planner output has no row estimate"""
    def __init__(self, message: str, plan: Optional[str] = None):
        self.message = message
        self.plan = plan
        super().__init__(message)

# Driver errors propagate untouched; these names let callers catch them by kind.
# OperationalError subclasses DatabaseError, so ``except QueryError`` also
# catches connection failures; handle ConnectionError first to tell them apart.
ConnectionError = psycopg.OperationalError
QueryError = psycopg.DatabaseError
