# src/services/query_service/app/services/upload_service.py
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from upload_common.config import (
    UPLOAD_QUERY_DEFAULT_PAGE_SIZE,
    UPLOAD_QUERY_MAX_PAGE_SIZE,
    UPLOAD_QUERY_TIMEOUT_SECONDS,
)
from upload_common.either import Err, Ok, Result
from upload_common.exceptions import StoreUnavailableError
from upload_common.logging_utils import correlation_id_var, generate_correlation_id
from upload_common.monitoring import UPLOAD_QUERIES_TOTAL, UPLOAD_QUERY_RESULT_ROWS

from ..dtos.upload_dto import (
    SortDirection,
    SortField,
    UploadQueryRequest,
    UploadQueryResult,
    UploadRecord,
)
from ..repositories.upload_repository import UploadFilter, UploadRepository, UploadSort, UploadStore

logger = logging.getLogger(__name__)

SERVICE_PREFIX = "UPQ"
# Largest row offset a 64-bit signed OFFSET clause can carry.
MAX_OFFSET = 2**63 - 1


class QueryErrorKind(str, Enum):
    INVALID_REQUEST = "INVALID_REQUEST"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class QueryError:
    kind: QueryErrorKind
    message: str
    field: Optional[str] = None


@dataclass(frozen=True)
class NormalizedUploadQuery:
    upload_filter: UploadFilter
    sort: UploadSort
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size


UploadQueryInput = Union[UploadQueryRequest, Mapping[str, Any], None]


def _invalid(message: str, field: Optional[str] = None) -> Err[QueryError]:
    return Err(QueryError(kind=QueryErrorKind.INVALID_REQUEST, message=message, field=field))


class UploadQueryService:
    """
    Handles the business logic for listing uploads: request defaults and
    validation, pagination arithmetic and mapping store rows to records.

    The store is read twice per call (count, then page) with the same
    filter. Under concurrent writes the two reads may observe different
    snapshots, so ``total`` can briefly disagree with the page contents.
    """

    def __init__(
        self,
        store: UploadStore,
        *,
        default_page_size: int = UPLOAD_QUERY_DEFAULT_PAGE_SIZE,
        max_page_size: int = UPLOAD_QUERY_MAX_PAGE_SIZE,
        timeout_seconds: Optional[float] = UPLOAD_QUERY_TIMEOUT_SECONDS,
    ):
        self.store = store
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_session(cls, db: AsyncSession, **kwargs) -> "UploadQueryService":
        return cls(UploadRepository(db), **kwargs)

    def normalize(self, request: UploadQueryInput = None) -> Result[NormalizedUploadQuery, QueryError]:
        """
        Applies defaults and checks ranges and enumerations.
        Returns the normalized query or an INVALID_REQUEST error naming the field.
        """
        if request is None:
            request = UploadQueryRequest()
        elif not isinstance(request, UploadQueryRequest):
            try:
                request = UploadQueryRequest.model_validate(request)
            except ValidationError as exc:
                first = exc.errors()[0]
                field = ".".join(str(part) for part in first.get("loc", ())) or None
                return _invalid(f"Malformed upload query: {first.get('msg')}", field)

        page = 1 if request.page is None else request.page
        if page < 1:
            return _invalid(f"page must be greater than or equal to 1, got {page}.", "page")

        page_size = self.default_page_size if request.page_size is None else request.page_size
        if page_size < 1:
            return _invalid(f"page_size must be greater than or equal to 1, got {page_size}.", "page_size")
        if page_size > self.max_page_size:
            return _invalid(
                f"page_size must be less than or equal to {self.max_page_size}, got {page_size}.",
                "page_size",
            )
        if (page - 1) * page_size > MAX_OFFSET:
            return _invalid(
                f"page {page} with page_size {page_size} exceeds the largest supported offset.",
                "page",
            )

        try:
            sort_field = SortField(request.sort_by or SortField.CREATED_AT)
        except ValueError:
            allowed = ", ".join(member.value for member in SortField)
            return _invalid(f"sort_by must be one of: {allowed}. Got '{request.sort_by}'.", "sort_by")

        try:
            sort_direction = SortDirection(request.sort_direction or SortDirection.DESC)
        except ValueError:
            return _invalid(
                f"sort_direction must be 'asc' or 'desc'. Got '{request.sort_direction}'.",
                "sort_direction",
            )

        return Ok(
            NormalizedUploadQuery(
                upload_filter=UploadFilter(name_contains=request.search_query or None),
                sort=UploadSort(field=sort_field, direction=sort_direction),
                page=page,
                page_size=page_size,
            )
        )

    async def _fetch(self, query: NormalizedUploadQuery) -> UploadQueryResult:
        total = await self.store.count_matching(query.upload_filter)
        rows = await self.store.find_matching(
            query.upload_filter,
            query.sort,
            query.skip,
            query.take,
        )
        return UploadQueryResult(
            uploads=[UploadRecord.model_validate(row) for row in rows],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    async def get_uploads(self, request: UploadQueryInput = None) -> Result[UploadQueryResult, QueryError]:
        """
        Retrieves a paginated, filtered and sorted list of uploads.

        Returns Ok(UploadQueryResult) on success, including when nothing
        matches. Returns Err(QueryError) with INVALID_REQUEST for bad
        pagination or sort parameters and STORE_UNAVAILABLE when the store
        fails or the call exceeds its deadline. Caller cancellation is
        re-raised.
        """
        token = None
        if correlation_id_var.get() == "<not-set>":
            token = correlation_id_var.set(generate_correlation_id(SERVICE_PREFIX))
        try:
            return await self._get_uploads(request)
        finally:
            if token is not None:
                correlation_id_var.reset(token)

    async def _get_uploads(self, request: UploadQueryInput) -> Result[UploadQueryResult, QueryError]:
        normalized = self.normalize(request)
        if isinstance(normalized, Err):
            logger.warning(f"Rejected upload query: {normalized.error.message}")
            UPLOAD_QUERIES_TOTAL.labels(outcome="invalid_request").inc()
            return normalized

        query = normalized.value
        logger.info(
            f"Fetching uploads page {query.page} (size {query.page_size}) "
            f"sorted by {query.sort.field.value} {query.sort.direction.value}."
        )

        try:
            result = await asyncio.wait_for(self._fetch(query), timeout=self.timeout_seconds)
        except StoreUnavailableError as exc:
            logger.error(f"Upload store unavailable: {exc}")
            UPLOAD_QUERIES_TOTAL.labels(outcome="store_unavailable").inc()
            return Err(QueryError(kind=QueryErrorKind.STORE_UNAVAILABLE, message=str(exc)))
        except asyncio.TimeoutError:
            logger.error(f"Upload query exceeded its {self.timeout_seconds}s deadline.")
            UPLOAD_QUERIES_TOTAL.labels(outcome="store_unavailable").inc()
            return Err(
                QueryError(
                    kind=QueryErrorKind.STORE_UNAVAILABLE,
                    message=f"Upload store did not answer within {self.timeout_seconds} seconds.",
                )
            )
        except asyncio.CancelledError:
            logger.warning("Upload query cancelled by caller.")
            raise

        UPLOAD_QUERIES_TOTAL.labels(outcome="success").inc()
        UPLOAD_QUERY_RESULT_ROWS.observe(len(result.uploads))
        logger.info(f"Returning {len(result.uploads)} of {result.total} matching uploads.")
        return Ok(result)
