"""Document store adapters for per-identity finance documents."""

import copy
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
import json
import threading
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.document_store import (
    DocumentStoreError,
    DocumentStorePort,
)
from src.infrastructure.logging.logger import get_app_logger


CREATE_DOCUMENTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS finance_documents (
    user_id TEXT PRIMARY KEY,
    document TEXT NOT NULL,
    revision BIGINT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

SELECT_DOCUMENT_SQL = text(
    """
    SELECT document, revision
    FROM finance_documents
    WHERE user_id = :user_id
    """
)

INSERT_DOCUMENT_SQL = text(
    """
    INSERT INTO finance_documents (user_id, document, revision, updated_at)
    VALUES (:user_id, :document, :revision, :updated_at)
    """
)

UPDATE_DOCUMENT_SQL = text(
    """
    UPDATE finance_documents
    SET document = :document,
        revision = :revision,
        updated_at = :updated_at
    WHERE user_id = :user_id
    """
)


NUMERIC_FIELDS = frozenset(
    {"balance", "amount", "shares", "avgCost", "currentPrice"}
)


def _encode_number(value):
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Cannot store non-finite number {value}")
        if value == value.to_integral_value():
            return int(value)
        # Exact digits; read back as Decimal by _decode_numbers.
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


def _decode_numbers(obj: dict[str, Any]) -> dict[str, Any]:
    for key in NUMERIC_FIELDS.intersection(obj):
        if isinstance(obj[key], str):
            try:
                obj[key] = Decimal(obj[key])
            except InvalidOperation:
                continue
    return obj


def encode_document(document: dict[str, Any]) -> str:
    """Serialize a document to JSON without losing decimal digits.

    Integral decimals are written as JSON integers, other decimals as their
    exact string form.

    Raises:
        DocumentStoreError: If the document holds a value JSON cannot carry.
    """
    try:
        return json.dumps(
            document,
            default=_encode_number,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, OverflowError) as exc:
        raise DocumentStoreError(f"Document cannot be encoded: {exc}") from exc


def decode_document(raw: str) -> dict[str, Any]:
    """Parse a stored JSON document, numeric fields as Decimal.

    Raises:
        DocumentStoreError: If the payload is not a JSON object.
    """
    try:
        document = json.loads(
            raw,
            parse_float=Decimal,
            object_hook=_decode_numbers,
        )
    except (TypeError, ValueError) as exc:
        raise DocumentStoreError("Stored document is not valid JSON") from exc
    if not isinstance(document, dict):
        raise DocumentStoreError("Stored document is not a JSON object")
    return document


def merge_fields(
    existing: dict[str, Any] | None,
    fields: dict[str, Any],
    merge: bool,
) -> dict[str, Any]:
    """Return the document resulting from writing ``fields``."""
    if not merge or existing is None:
        return dict(fields)
    return {**existing, **fields}


class SqlAlchemyDocumentStore(DocumentStorePort):
    """Document store backed by a SQL table holding JSON documents.

    Each row keeps the latest revision written for the user; writes carrying
    an older or equal revision are ignored so a delayed write never replaces
    newer data.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the document database engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._prepared = False

    def prepare(self) -> None:
        """Ensure the documents table exists."""
        if self._prepared:
            return
        engine = self._db_port.get_store_engine()
        try:
            with engine.begin() as conn:
                conn.exec_driver_sql(CREATE_DOCUMENTS_TABLE_SQL)
        except SQLAlchemyError as exc:
            raise DocumentStoreError(
                f"Could not prepare finance_documents table: {exc}"
            ) from exc
        self._prepared = True

    def read(self, user_id: str) -> dict[str, Any] | None:
        """Return the user's document, or None when none is stored."""
        self.prepare()
        engine = self._db_port.get_store_engine()
        try:
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_DOCUMENT_SQL,
                    {"user_id": user_id},
                ).first()
        except SQLAlchemyError as exc:
            raise DocumentStoreError(
                f"Could not read document for user_id={user_id}: {exc}"
            ) from exc
        if row is None:
            return None
        return decode_document(row.document)

    def write(
        self,
        user_id: str,
        fields: dict[str, Any],
        *,
        revision: int,
        merge: bool = True,
    ) -> bool:
        """Upsert the given fields of the user's document.

        Returns:
            bool: True when applied, False when the stored revision is newer.
        """
        self.prepare()
        engine = self._db_port.get_store_engine()
        updated_at = datetime.now(timezone.utc).isoformat()
        try:
            with engine.begin() as conn:
                row = conn.execute(
                    SELECT_DOCUMENT_SQL,
                    {"user_id": user_id},
                ).first()
                if row is not None and row.revision >= revision:
                    self._logger.warning(
                        f"Ignoring stale write for user_id={user_id}: "
                        f"revision {revision} <= stored {row.revision}"
                    )
                    return False
                existing = (
                    decode_document(row.document) if row is not None else None
                )
                params = {
                    "user_id": user_id,
                    "document": encode_document(
                        merge_fields(existing, fields, merge)
                    ),
                    "revision": revision,
                    "updated_at": updated_at,
                }
                if row is None:
                    conn.execute(INSERT_DOCUMENT_SQL, params)
                else:
                    conn.execute(UPDATE_DOCUMENT_SQL, params)
        except SQLAlchemyError as exc:
            raise DocumentStoreError(
                f"Could not write document for user_id={user_id}: {exc}"
            ) from exc
        return True


class InMemoryDocumentStore(DocumentStorePort):
    """Process-local document store with the same merge semantics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._documents: dict[str, tuple[dict[str, Any], int]] = {}

    def read(self, user_id: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._documents.get(user_id)
            return copy.deepcopy(entry[0]) if entry is not None else None

    def write(
        self,
        user_id: str,
        fields: dict[str, Any],
        *,
        revision: int,
        merge: bool = True,
    ) -> bool:
        with self._lock:
            entry = self._documents.get(user_id)
            if entry is not None and entry[1] >= revision:
                return False
            existing = entry[0] if entry is not None else None
            document = merge_fields(existing, fields, merge)
            encode_document(document)
            self._documents[user_id] = (copy.deepcopy(document), revision)
        return True


__all__ = [
    "SqlAlchemyDocumentStore",
    "InMemoryDocumentStore",
    "encode_document",
    "decode_document",
    "merge_fields",
    "NUMERIC_FIELDS",
    "CREATE_DOCUMENTS_TABLE_SQL",
    "SELECT_DOCUMENT_SQL",
    "INSERT_DOCUMENT_SQL",
    "UPDATE_DOCUMENT_SQL",
]
