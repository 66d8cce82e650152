"""
Abstract Storage Interface

DESIGN DECISION: We define abstract interfaces for storage operations.
This allows us to:
1. Keep the ledger on a local JSON file today
2. Use in-memory storage for testing
3. Swap in another key-value backend later
4. Keep the aggregation engine unaware of persistence entirely

Two layers:
- BlobStore: a dumb string key-value store (the local-storage equivalent)
- ExpenseStorageInterface: loads and saves the expense list
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from expense_ledger.models.expense import ExpenseRecord


class BlobStore(ABC):
    """
    Abstract string key-value store.

    Values are opaque strings; encoding them is the caller's business.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            BlobStoreError: If the backend cannot be read
            MalformedDataError: If the backend's own data is corrupt
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            BlobStoreError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for persisting the expense list.

    The whole list is saved and loaded as one unit; last write wins.
    """

    @abstractmethod
    def load(self) -> Optional[list[ExpenseRecord]]:
        """
        Load the stored expense list.

        Returns:
            The stored expenses, or None if nothing was ever saved

        Raises:
            MalformedDataError: If stored data is not a valid expense list
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, records: Sequence[ExpenseRecord]) -> bool:
        """
        Replace the stored expense list.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MalformedDataError(StorageError):
    """Stored data does not have the expected shape."""
    pass


class BlobStoreError(StorageError):
    """The blob store backend could not be read or written."""
    pass
