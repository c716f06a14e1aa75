"""Tests for the composition root."""

from unittest.mock import MagicMock

from src.application.use_cases.finance_session import FinanceSession
from src.infrastructure import container
from src.infrastructure.document_store import (
    InMemoryDocumentStore,
    SqlAlchemyDocumentStore,
)
from src.infrastructure.gemini_advisory import GeminiAdvisoryClient
from src.infrastructure.identity import LocalIdentityProvider
from src.infrastructure.settings import WealthFlowSettings
from src.infrastructure.timers import ThreadingTimerFactory


def test_build_document_store_defaults_to_sqlalchemy() -> None:
    db_port = MagicMock()

    store = container.build_document_store(
        WealthFlowSettings(),
        db_port=db_port,
    )

    assert isinstance(store, SqlAlchemyDocumentStore)


def test_build_document_store_uses_memory_backend() -> None:
    store = container.build_document_store(
        WealthFlowSettings(store_backend="memory")
    )

    assert isinstance(store, InMemoryDocumentStore)


def test_build_finance_session_uses_settings() -> None:
    settings = WealthFlowSettings(
        store_backend="memory",
        save_debounce_seconds=0.5,
    )

    session = container.build_finance_session(settings)

    assert isinstance(session, FinanceSession)
    assert isinstance(session._store, InMemoryDocumentStore)
    assert isinstance(session._timer_factory, ThreadingTimerFactory)
    assert session._debounce_seconds == 0.5


def test_build_identity_provider() -> None:
    assert isinstance(
        container.build_identity_provider(),
        LocalIdentityProvider,
    )


def test_build_advisory_client_without_key(monkeypatch) -> None:
    fake_genai = MagicMock()
    monkeypatch.setattr(
        "src.infrastructure.gemini_advisory.genai",
        fake_genai,
    )

    client = container.build_advisory_client(WealthFlowSettings())

    assert isinstance(client, GeminiAdvisoryClient)
    assert client.configured is False
    fake_genai.configure.assert_not_called()
