"""Tests for the document store adapters."""

from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError

from src.application.ports.document_store import DocumentStoreError
from src.infrastructure.document_store import (
    InMemoryDocumentStore,
    SqlAlchemyDocumentStore,
    decode_document,
    encode_document,
)


class _EnginePort:
    def __init__(self, engine) -> None:
        self.engine = engine

    def get_store_engine(self):
        return self.engine


@pytest.fixture
def sql_store(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'finance.db'}", future=True)
    yield SqlAlchemyDocumentStore(_EnginePort(engine), logger=MagicMock())
    engine.dispose()


@pytest.fixture(params=["sql", "memory"])
def store(request, sql_store):
    if request.param == "sql":
        return sql_store
    return InMemoryDocumentStore()


def test_read_missing_document_returns_none(store) -> None:
    assert store.read("u1") is None


def test_write_then_read(store) -> None:
    applied = store.write(
        "u1",
        {"accounts": [{"id": "a1", "balance": Decimal("12.5")}]},
        revision=1,
    )

    assert applied is True
    document = store.read("u1")
    assert document["accounts"][0]["balance"] == Decimal("12.5")


def test_merge_write_preserves_other_fields(store) -> None:
    store.write("u1", {"accounts": [], "profile": {"theme": "dark"}},
                revision=1)

    store.write("u1", {"accounts": [{"id": "a1"}], "stocks": []}, revision=2)

    assert store.read("u1") == {
        "accounts": [{"id": "a1"}],
        "profile": {"theme": "dark"},
        "stocks": [],
    }


def test_replace_write_drops_other_fields(store) -> None:
    store.write("u1", {"accounts": [], "profile": {}}, revision=1)

    store.write("u1", {"stocks": []}, revision=2, merge=False)

    assert store.read("u1") == {"stocks": []}


def test_stale_revision_is_rejected(store) -> None:
    store.write("u1", {"accounts": [{"id": "new"}]}, revision=10)

    applied = store.write("u1", {"accounts": [{"id": "old"}]}, revision=9)

    assert applied is False
    assert store.read("u1") == {"accounts": [{"id": "new"}]}


def test_documents_are_isolated_per_user(store) -> None:
    store.write("u1", {"accounts": [{"id": "a"}]}, revision=1)

    assert store.read("u2") is None


def test_in_memory_store_returns_copies() -> None:
    store = InMemoryDocumentStore()
    store.write("u1", {"accounts": [{"id": "a"}]}, revision=1)

    store.read("u1")["accounts"].clear()

    assert store.read("u1") == {"accounts": [{"id": "a"}]}


def test_encode_document_keeps_integral_decimals_integral() -> None:
    payload = json.loads(
        encode_document({"a": Decimal("52000"), "b": Decimal("-8.5")})
    )

    assert payload == {"a": 52000, "b": "-8.5"}


def test_decimal_digits_survive_encoding() -> None:
    document = {
        "accounts": [{"id": "a1", "balance": Decimal("123456789012345.678")}],
        "stocks": [{"id": "s1", "shares": Decimal("0.1"),
                    "avgCost": Decimal("1234.5678")}],
    }

    decoded = decode_document(encode_document(document))

    assert decoded == document
    assert str(decoded["accounts"][0]["balance"]) == "123456789012345.678"


def test_decode_document_reads_legacy_float_numbers_as_decimal() -> None:
    document = decode_document('{"accounts": [{"balance": 12.5}]}')

    assert document["accounts"][0]["balance"] == Decimal("12.5")


def test_decode_document_leaves_non_numeric_text_alone() -> None:
    document = decode_document('{"stocks": [{"shares": "n/a", "name": "1.5"}]}')

    assert document["stocks"][0] == {"shares": "n/a", "name": "1.5"}


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
def test_encode_document_rejects_non_finite_numbers(value) -> None:
    with pytest.raises(DocumentStoreError):
        encode_document({"balance": Decimal(value)})


def test_encode_document_rejects_unsupported_values() -> None:
    with pytest.raises(DocumentStoreError):
        encode_document({"balance": object()})


def test_non_finite_write_raises_and_stores_nothing(store) -> None:
    with pytest.raises(DocumentStoreError):
        store.write(
            "u1",
            {"accounts": [{"id": "a1", "balance": Decimal("Infinity")}]},
            revision=1,
        )

    assert store.read("u1") is None


def test_exact_balance_round_trips_through_store(store) -> None:
    balance = Decimal("98765432109876.54")
    store.write("u1", {"accounts": [{"id": "a1", "balance": balance}]},
                revision=1)

    assert store.read("u1")["accounts"][0]["balance"] == balance


def test_decode_document_rejects_non_objects() -> None:
    with pytest.raises(DocumentStoreError):
        decode_document("[1, 2]")
    with pytest.raises(DocumentStoreError):
        decode_document("{not json")


def test_sql_errors_become_document_store_errors() -> None:
    engine = MagicMock()
    engine.begin.side_effect = OperationalError("SELECT", {}, Exception("x"))
    store = SqlAlchemyDocumentStore(_EnginePort(engine), logger=MagicMock())

    with pytest.raises(DocumentStoreError):
        store.read("u1")
