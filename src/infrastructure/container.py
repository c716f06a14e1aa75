"""Composition root for wiring infrastructure adapters."""

from src.application.ports.advisory import AdvisoryPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.document_store import DocumentStorePort
from src.application.ports.identity_provider import IdentityProviderPort
from src.application.ports.timers import TimerFactoryPort
from src.application.use_cases.finance_session import FinanceSession
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.document_store import (
    InMemoryDocumentStore,
    SqlAlchemyDocumentStore,
)
from src.infrastructure.gemini_advisory import GeminiAdvisoryClient
from src.infrastructure.identity import LocalIdentityProvider
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import WealthFlowSettings
from src.infrastructure.timers import ThreadingTimerFactory


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_document_store(
    settings: WealthFlowSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> DocumentStorePort:
    """Return the document store selected by the settings."""
    resolved = settings or WealthFlowSettings.from_env()
    if resolved.store_backend == "memory":
        return InMemoryDocumentStore()
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyDocumentStore(resolved_db, logger=get_app_logger())


def build_timer_factory() -> TimerFactoryPort:
    """Return the timer factory used for debounced writes."""
    return ThreadingTimerFactory()


def build_finance_session(
    settings: WealthFlowSettings | None = None,
    document_store: DocumentStorePort | None = None,
    timer_factory: TimerFactoryPort | None = None,
) -> FinanceSession:
    """Return a finance session wired to the configured adapters."""
    resolved = settings or WealthFlowSettings.from_env()
    return FinanceSession(
        document_store=document_store or build_document_store(resolved),
        timer_factory=timer_factory or build_timer_factory(),
        logger=get_app_logger(),
        debounce_seconds=resolved.save_debounce_seconds,
    )


def build_identity_provider() -> IdentityProviderPort:
    """Return the identity provider."""
    return LocalIdentityProvider()


def build_advisory_client(
    settings: WealthFlowSettings | None = None,
) -> AdvisoryPort:
    """Return the advisory client configured from the settings."""
    resolved = settings or WealthFlowSettings.from_env()
    return GeminiAdvisoryClient(
        api_key=resolved.gemini_api_key,
        model_name=resolved.gemini_model,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_document_store",
    "build_timer_factory",
    "build_finance_session",
    "build_identity_provider",
    "build_advisory_client",
]
