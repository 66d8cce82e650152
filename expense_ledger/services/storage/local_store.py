"""
Local Blob Store Implementation

DESIGN DECISION: The ledger persists to a single JSON document on disk
that maps keys to string values, mirroring browser local storage:
1. Nothing to install or run
2. The user can open and read the file
3. Easy to export/migrate later

The expense list itself is stored under one key as a JSON array using
the persisted field names (id, description, amount, category, date,
paymentMethod, note).

TRADEOFFS:
- The whole list is rewritten on every save (fine for personal use)
- No cross-process locking (single user, single session)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from expense_ledger.config import get_settings
from expense_ledger.models.expense import ExpenseRecord
from expense_ledger.services.storage.interface import (
    BlobStore,
    BlobStoreError,
    ExpenseStorageInterface,
    MalformedDataError,
    StorageError,
)


_EXPENSE_LIST = TypeAdapter(list[ExpenseRecord])


class InMemoryBlobStore(BlobStore):
    """Blob store held in a dict. Used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class JsonFileBlobStore(BlobStore):
    """
    Blob store backed by one JSON object in a file.

    Writes go to a temporary file in the same directory which then
    replaces the original, so a crash mid-write leaves the old file intact.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path else get_settings().storage.store_path

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise BlobStoreError(f"Failed to read {self._path}: {e}")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedDataError(f"Blob store {self._path} is not valid JSON: {e}")

        if not isinstance(data, dict) or not all(
            isinstance(value, str) for value in data.values()
        ):
            raise MalformedDataError(
                f"Blob store {self._path} must hold an object of string values"
            )
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise BlobStoreError(f"Failed to write {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except MalformedDataError:
            # A corrupt store is replaced by the next successful write
            data = {}
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> bool:
        data = self._read_all()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True


def encode_expenses(records: Sequence[ExpenseRecord]) -> str:
    """Serialize expenses to the persisted JSON array."""
    return json.dumps([record.to_storage_dict() for record in records])


def decode_expenses(blob: str) -> list[ExpenseRecord]:
    """
    Parse the persisted JSON array back into expenses.

    Raises:
        MalformedDataError: If the blob is not a valid expense list
    """
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise MalformedDataError(f"Stored expenses are not valid JSON: {e}")

    try:
        return _EXPENSE_LIST.validate_python(data)
    except ValidationError as e:
        raise MalformedDataError(
            f"Stored expenses have an unexpected shape ({e.error_count()} errors)"
        )


class BlobExpenseStorage(ExpenseStorageInterface):
    """
    Expense storage on top of any BlobStore.

    The full list lives under a single key (default taken from settings).
    """

    def __init__(
        self,
        blob_store: Optional[BlobStore] = None,
        storage_key: Optional[str] = None,
    ):
        self._blob_store = blob_store or JsonFileBlobStore()
        self._key = storage_key or get_settings().storage.storage_key

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> Optional[list[ExpenseRecord]]:
        blob = self._blob_store.get(self._key)
        if blob is None:
            return None
        return decode_expenses(blob)

    def save(self, records: Sequence[ExpenseRecord]) -> bool:
        try:
            blob = encode_expenses(records)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Failed to encode expenses: {e}")
        self._blob_store.set(self._key, blob)
        return True
