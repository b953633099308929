# tests/test_support/in_memory_upload_store.py
from __future__ import annotations

from typing import Iterable, List, Optional

from upload_common.database_models import Upload
from upload_common.exceptions import StoreUnavailableError

from src.services.query_service.app.dtos.upload_dto import SortDirection, SortField
from src.services.query_service.app.repositories.upload_repository import UploadFilter, UploadSort


class InMemoryUploadStore:
    """
    UploadStore fake backed by a list. Name matching is case-insensitive like
    the SQL repository; ties on the sort field fall back to id ascending.
    """

    def __init__(self, uploads: Iterable[Upload] = ()) -> None:
        self.uploads: List[Upload] = list(uploads)
        self.failure: Optional[Exception] = None
        self.count_calls: List[UploadFilter] = []
        self.find_calls: List[tuple] = []

    def add(self, *uploads: Upload) -> None:
        self.uploads.extend(uploads)

    def fail_with(self, error: Exception) -> None:
        self.failure = error

    def _matching(self, upload_filter: UploadFilter) -> List[Upload]:
        if self.failure is not None:
            raise self.failure
        if not upload_filter.name_contains:
            return list(self.uploads)
        needle = upload_filter.name_contains.lower()
        return [u for u in self.uploads if needle in u.name.lower()]

    async def count_matching(self, upload_filter: UploadFilter) -> int:
        self.count_calls.append(upload_filter)
        return len(self._matching(upload_filter))

    async def find_matching(
        self,
        upload_filter: UploadFilter,
        sort: UploadSort,
        skip: int,
        take: int,
    ) -> List[Upload]:
        self.find_calls.append((upload_filter, sort, skip, take))
        rows = sorted(self._matching(upload_filter), key=lambda u: u.id)
        # sorted() is stable, so the id order survives as the tie-break.
        attribute = "created_at" if sort.field == SortField.CREATED_AT else "name"
        rows = sorted(
            rows,
            key=lambda u: getattr(u, attribute),
            reverse=sort.direction == SortDirection.DESC,
        )
        return rows[skip:skip + take]


class UnavailableUploadStore(InMemoryUploadStore):
    """A store whose every call fails as if the database were down."""

    def __init__(self, message: str = "connection refused") -> None:
        super().__init__()
        self.fail_with(StoreUnavailableError(message))
