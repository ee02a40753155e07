"""
Response schemas for API endpoints.
"""

from fastquery.schemas.response.base import BaseResponse
from fastquery.schemas.response.error import ErrorInfo, ErrorResponse

__all__ = [
    "BaseResponse",
    "ErrorResponse",
    "ErrorInfo",
]
