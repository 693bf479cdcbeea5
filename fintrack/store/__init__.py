"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from fintrack.store.errors import FetchFailedError, StoreError, WriteFailedError
from fintrack.store.queries import delete_transaction, get_transactions, insert_transaction
from fintrack.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Errors
    "FetchFailedError",
    "StoreError",
    "WriteFailedError",
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_transaction",
    "get_transactions",
    "insert_transaction",
]
