"""Services package."""

from expense_ledger.services.storage import (
    BlobExpenseStorage,
    BlobStore,
    BlobStoreError,
    ExpenseStorageInterface,
    InMemoryBlobStore,
    JsonFileBlobStore,
    MalformedDataError,
    StorageError,
)

__all__ = [
    "BlobExpenseStorage",
    "BlobStore",
    "BlobStoreError",
    "ExpenseStorageInterface",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "MalformedDataError",
    "StorageError",
]
