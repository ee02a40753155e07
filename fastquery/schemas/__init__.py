"""
Response schemas for FastQuery.

This module provides the paged search result and the error envelope
returned by the exception handlers.
"""

from fastquery.schemas.metadata import BaseMetadata, ResponseMetadata
from fastquery.schemas.page import PagedResponse, PageResponse
from fastquery.schemas.response import BaseResponse, ErrorInfo, ErrorResponse

__all__ = [
    # Metadata schemas
    "BaseMetadata",
    "ResponseMetadata",
    # Response schemas
    "BaseResponse",
    "ErrorResponse",
    "ErrorInfo",
    "PageResponse",
    "PagedResponse",
]
