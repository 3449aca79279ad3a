# ref_indexer/core/errors.py

from typing import Optional


class IndexerError(Exception):
    """Base class for indexer errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class StoreError(IndexerError):
    """Entity store used outside of, or across, a receipt unit of work."""


class ReceiptProcessingError(IndexerError):
    """A handler failed while processing a receipt; the receipt was rolled back."""

    def __init__(self, receipt_id: str, action_index: int, cause: Exception):
        super().__init__(
            f"receipt {receipt_id} failed at action {action_index}", cause
        )
        self.receipt_id = receipt_id
        self.action_index = action_index
