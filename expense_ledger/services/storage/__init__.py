"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements a local JSON file blob store as the backend, but
designed to be swappable.
"""

from expense_ledger.services.storage.interface import (
    BlobStore,
    BlobStoreError,
    ExpenseStorageInterface,
    MalformedDataError,
    StorageError,
)
from expense_ledger.services.storage.local_store import (
    BlobExpenseStorage,
    InMemoryBlobStore,
    JsonFileBlobStore,
    decode_expenses,
    encode_expenses,
)

__all__ = [
    # Interfaces
    "BlobStore",
    "ExpenseStorageInterface",
    # Exceptions
    "BlobStoreError",
    "MalformedDataError",
    "StorageError",
    # Local implementation
    "BlobExpenseStorage",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "decode_expenses",
    "encode_expenses",
]
