"""Common response schemas."""
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response for domain errors."""
    success: bool = False
    error: ErrorDetail


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
