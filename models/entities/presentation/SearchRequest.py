from pydantic import BaseModel, Field

from models.entities.presentation.SearchFilters import SearchFilters


class SearchRequest(BaseModel):
    """Request model for the public reference search."""
    filters: SearchFilters = Field(default_factory=SearchFilters, description="Search filters")
    page: int = Field(1, ge=1, description="Page number (1-based)")
    limit: int = Field(50, ge=1, le=100, description="Results per page (1-100)")
