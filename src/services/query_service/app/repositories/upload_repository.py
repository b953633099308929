# src/services/query_service/app/repositories/upload_repository.py
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from sqlalchemy import select, func, asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from upload_common.database_models import Upload
from upload_common.exceptions import StoreUnavailableError
from upload_common.utils import async_timed

from ..dtos.upload_dto import SortDirection, SortField

logger = logging.getLogger(__name__)

# Whitelist of columns that clients are allowed to sort by.
SORT_COLUMNS = {
    SortField.CREATED_AT: Upload.created_at,
    SortField.NAME: Upload.name,
}

LIKE_ESCAPE_CHAR = "\\"


@dataclass(frozen=True)
class UploadFilter:
    """Selects every upload when name_contains is None."""
    name_contains: Optional[str] = None


@dataclass(frozen=True)
class UploadSort:
    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC


class UploadStore(Protocol):
    """
    Read operations an upload query needs from persistence. Both calls must
    evaluate the same filter; find_matching breaks ties on the sort field by
    upload id ascending.
    """

    async def count_matching(self, upload_filter: UploadFilter) -> int:
        ...

    async def find_matching(
        self,
        upload_filter: UploadFilter,
        sort: UploadSort,
        skip: int,
        take: int,
    ) -> Sequence[Upload]:
        ...


def escape_like(value: str) -> str:
    """Escapes LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


class UploadRepository:
    """
    Handles read-only database queries for upload data.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def _get_base_query(self, upload_filter: UploadFilter):
        """
        Constructs the filtered statement shared by the count and page queries.
        """
        stmt = select(Upload)
        if upload_filter.name_contains:
            pattern = f"%{escape_like(upload_filter.name_contains)}%"
            stmt = stmt.where(Upload.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR))
        return stmt

    @async_timed(repository="UploadRepository", method="count_matching")
    async def count_matching(self, upload_filter: UploadFilter) -> int:
        """
        Returns the total count of uploads for the given filter.
        """
        stmt = self._get_base_query(upload_filter)
        count_stmt = select(func.count()).select_from(stmt.subquery())
        try:
            count = (await self.db.execute(count_stmt)).scalar()
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(f"Counting uploads failed: {exc}") from exc
        return count or 0

    @async_timed(repository="UploadRepository", method="find_matching")
    async def find_matching(
        self,
        upload_filter: UploadFilter,
        sort: UploadSort,
        skip: int,
        take: int,
    ) -> List[Upload]:
        """
        Retrieves one page of uploads ordered by the requested column, with
        the upload id as the tie-break key.
        """
        sort_direction = asc if sort.direction == SortDirection.ASC else desc
        stmt = (
            self._get_base_query(upload_filter)
            .order_by(sort_direction(SORT_COLUMNS[sort.field]), Upload.id.asc())
            .offset(skip)
            .limit(take)
        )
        try:
            results = await self.db.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(f"Fetching uploads failed: {exc}") from exc
        uploads = results.scalars().all()
        logger.info(f"Found {len(uploads)} uploads with given filters.")
        return list(uploads)
