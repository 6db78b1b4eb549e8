from pydantic import BaseModel, Field
from typing import List

from ninebox.models.enumerations import Level


class GridCategoryResponse(BaseModel):
    """
    One of the nine boxes of the performance / potential grid.
    """

    id: str
    name: str
    description: str
    guidance: str
    performance: Level = Field(..., description="Column (x)")
    potential: Level = Field(..., description="Row (y)")

    class Config:
        from_attributes = True


class GridCategoryListResponse(BaseModel):
    items: List[GridCategoryResponse]
    total: int
