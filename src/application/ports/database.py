"""Database ports for WealthFlow.

This module defines the application-layer protocol for accessing the
database engine backing the document store. Infrastructure implementations
are expected to provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the database engine for finance documents.

    Adapters can depend on this protocol instead of concrete database drivers
    or configuration details.
    """

    def get_store_engine(self) -> Engine:
        """Get the engine for the finance document database.

        Returns:
            Engine: SQLAlchemy engine connected to the document store.
        """


__all__ = ["DatabaseEnginePort"]
