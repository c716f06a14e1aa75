"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from typing import Optional

import dotenv

from src.application.use_cases.constants import (
    DEFAULT_ADVISORY_TIMEOUT_SECONDS,
    DEFAULT_SAVE_DEBOUNCE_SECONDS,
)
from src.infrastructure.logging.logger import get_app_logger

STORE_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class WealthFlowSettings:
    """Runtime settings for WealthFlow.

    Attributes:
        store_backend: Document store backend (sqlalchemy or memory).
        save_debounce_seconds: Quiet period before a save is sent.
        gemini_api_key: Optional API key enabling the AI advisor.
        gemini_model: Gemini model used by the advisor.
        advisory_timeout_seconds: Upper bound on advisory calls.
    """

    store_backend: str = "sqlalchemy"
    save_debounce_seconds: float = DEFAULT_SAVE_DEBOUNCE_SECONDS
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    advisory_timeout_seconds: float = DEFAULT_ADVISORY_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "WealthFlowSettings":
        """Build settings from environment variables and an optional .env.

        Returns:
            WealthFlowSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = (
            os.getenv("WEALTHFLOW_STORE_BACKEND", "sqlalchemy").strip().lower()
        )
        if backend not in STORE_BACKENDS:
            logger.warning(
                f"Unknown WEALTHFLOW_STORE_BACKEND={backend!r}; "
                "falling back to sqlalchemy"
            )
            backend = "sqlalchemy"
        return cls(
            store_backend=backend,
            save_debounce_seconds=cls._read_seconds(
                "WEALTHFLOW_SAVE_DEBOUNCE_SECONDS",
                DEFAULT_SAVE_DEBOUNCE_SECONDS,
                logger=logger,
            ),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            advisory_timeout_seconds=cls._read_seconds(
                "WEALTHFLOW_ADVISORY_TIMEOUT_SECONDS",
                DEFAULT_ADVISORY_TIMEOUT_SECONDS,
                logger=logger,
            ),
        )

    @staticmethod
    def _read_seconds(name: str, default: float, logger) -> float:
        """Read a non-negative duration from the environment.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            float: Parsed duration in seconds.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value < 0:
            logger.warning(f"Negative {name}={raw!r}; using {default}")
            return default
        return value


__all__ = ["WealthFlowSettings", "STORE_BACKENDS"]
