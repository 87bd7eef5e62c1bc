from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SearchFilters(BaseModel):
    """Optional public search filters; all supplied filters must match."""
    model_config = ConfigDict(populate_by_name=True)

    community: Optional[str] = Field(None, alias="comunidade", description="Community name (partial match)")
    plant: Optional[str] = Field(None, alias="planta", description="Scientific or vernacular plant name (partial match)")
    state: Optional[str] = Field(None, alias="estado", description="State (exact match)")
    municipality: Optional[str] = Field(None, alias="municipio", description="Municipality (exact match)")

    def is_empty(self) -> bool:
        return not any(
            value and value.strip()
            for value in (self.community, self.plant, self.state, self.municipality)
        )
