"""Application ports package."""

from .advisory import AdvisoryPort
from .database import DatabaseEnginePort
from .document_store import DocumentStoreError, DocumentStorePort
from .identity_provider import (
    AuthenticationError,
    IdentityCallback,
    IdentityProviderPort,
)
from .timers import TimerFactoryPort, TimerHandle

__all__ = [
    "AdvisoryPort",
    "DatabaseEnginePort",
    "DocumentStoreError",
    "DocumentStorePort",
    "AuthenticationError",
    "IdentityCallback",
    "IdentityProviderPort",
    "TimerFactoryPort",
    "TimerHandle",
]
