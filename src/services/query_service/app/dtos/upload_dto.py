# src/services/query_service/app/dtos/upload_dto.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SortField(str, Enum):
    """Columns an upload listing may be sorted by."""
    CREATED_AT = "created_at"
    NAME = "name"

    @classmethod
    def _missing_(cls, value):
        # Accept camelCase spellings such as "createdAt".
        if isinstance(value, str):
            for member in cls:
                if to_camel(member.value) == value:
                    return member
        return None


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class UploadRecord(BaseModel):
    """
    Represents a single upload record for query responses.
    """
    id: str
    name: str
    remote_key: Optional[str] = None
    remote_url: Optional[str] = None
    content_type: Optional[str] = None
    size_in_bytes: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True
    )


class UploadQueryRequest(BaseModel):
    """
    Parameters of an upload listing. Every field is optional; ranges and
    enumerations are checked when the service normalizes the request so that
    bad values come back as an INVALID_REQUEST failure.
    """
    search_query: Optional[str] = Field(None, description="Case-insensitive substring matched against the upload name.")
    page: Optional[int] = Field(None, strict=True, description="1-based page index. Defaults to 1.")
    page_size: Optional[int] = Field(None, strict=True, description="Maximum number of uploads per page.")
    sort_by: Optional[str] = Field(None, description="One of 'created_at' or 'name'. Defaults to 'created_at'.")
    sort_direction: Optional[str] = Field(None, description="'asc' or 'desc'. Defaults to 'desc'.")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class UploadQueryResult(BaseModel):
    """
    One page of uploads together with the size of the whole filtered set.
    """
    uploads: List[UploadRecord] = Field(..., description="Uploads on the requested page, in sort order.")
    total: int = Field(..., description="The total number of uploads matching the filter across all pages.")
    page: int = Field(..., description="The page that was returned.")
    page_size: int = Field(..., description="The page size that was applied.")
