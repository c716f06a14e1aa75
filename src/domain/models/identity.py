"""Domain model for the signed-in user."""

from dataclasses import dataclass

from src.domain.constants import DEFAULT_DISPLAY_NAME


@dataclass(frozen=True)
class Identity:
    """Profile supplied by the identity provider."""

    id: str
    display_name: str = DEFAULT_DISPLAY_NAME
    email: str = ""

    @classmethod
    def from_profile(
        cls,
        user_id: str,
        display_name: str | None = None,
        email: str | None = None,
    ) -> "Identity":
        return cls(
            id=user_id,
            display_name=display_name or DEFAULT_DISPLAY_NAME,
            email=email or "",
        )


__all__ = ["Identity"]
