"""Shared constants for application use cases."""

DEFAULT_SAVE_DEBOUNCE_SECONDS = 1.0

DEFAULT_ADVISORY_TIMEOUT_SECONDS = 30.0

MIN_DESCRIPTION_LENGTH_FOR_SUGGESTION = 2

ANALYSIS_UNCONFIGURED_MESSAGE = (
    "Set an API key to use the AI financial advisor."
)
ANALYSIS_UNAVAILABLE_MESSAGE = (
    "The AI service is temporarily unavailable. "
    "Check your connection or API key."
)
ANALYSIS_EMPTY_MESSAGE = "Unable to generate advice, please try again later."


__all__ = [
    "DEFAULT_SAVE_DEBOUNCE_SECONDS",
    "DEFAULT_ADVISORY_TIMEOUT_SECONDS",
    "MIN_DESCRIPTION_LENGTH_FOR_SUGGESTION",
    "ANALYSIS_UNCONFIGURED_MESSAGE",
    "ANALYSIS_UNAVAILABLE_MESSAGE",
    "ANALYSIS_EMPTY_MESSAGE",
]
