"""Port for the per-identity document store.

The store keeps one document per identity with the fields ``accounts``,
``transactions`` and ``stocks``. Writes are merges: fields absent from the
payload are preserved.
"""

from typing import Any, Protocol


class DocumentStoreError(RuntimeError):
    """Raised when the document store cannot be read or written."""


class DocumentStorePort(Protocol):
    """Port exposing read and merge-write access to finance documents."""

    def read(self, user_id: str) -> dict[str, Any] | None:
        """Return the stored document, or None when none exists.

        Raises:
            DocumentStoreError: If the store is unreachable.
        """

    def write(
        self,
        user_id: str,
        fields: dict[str, Any],
        *,
        revision: int,
        merge: bool = True,
    ) -> bool:
        """Upsert the given fields of the user's document.

        Args:
            user_id: Identity owning the document.
            fields: Top-level document fields to write.
            revision: Monotonic revision of the payload; writes older than
                the stored revision are ignored.
            merge: Preserve stored fields absent from ``fields``.

        Returns:
            bool: True when applied, False when ignored as stale.

        Raises:
            DocumentStoreError: If the store is unreachable.
        """


__all__ = ["DocumentStoreError", "DocumentStorePort"]
