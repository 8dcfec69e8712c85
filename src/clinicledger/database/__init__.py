"""Database layer for clinicledger application."""

from clinicledger.database.base import Database, LedgerWriter
from clinicledger.database.factories import create_sqlite_database

__all__ = ["Database", "LedgerWriter", "create_sqlite_database"]
