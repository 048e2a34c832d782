# Pydantic schemas package
from modules.backend.schemas.base import (
    ApiResponse,
    CamelModel,
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    ResponseMetadata,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    "ResponseMetadata",
]
