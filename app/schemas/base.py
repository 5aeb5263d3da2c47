"""
Base Pydantic schemas shared by every resource.

All API responses share the envelope {success, message, ...payload}.
"""

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope fields present on every response."""
    
    success: bool = True
    message: str


class Pagination(BaseModel):
    """Page metadata returned with paginated lists."""
    
    page: int
    limit: int
    total: int
    total_pages: int


class PageParams(BaseModel):
    """Validated paging input. `page` is 1-indexed."""
    
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def describe(self, total: int) -> Pagination:
        total_pages = (total + self.limit - 1) // self.limit
        return Pagination(page=self.page, limit=self.limit, total=total, total_pages=total_pages)


class MessageResponse(ApiResponse):
    """Response without payload (e.g. deletes)."""
