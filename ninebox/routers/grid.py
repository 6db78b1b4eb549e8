"""
Grid Router - Nine-Box Talent Review
ninebox/routers/grid.py

Static grid categories (public).
"""

from dataclasses import asdict

from fastapi import APIRouter

from ninebox.config import settings
from ninebox.core.errors import raise_not_found
from ninebox.models.assessment import ErrorResponse
from ninebox.models.grid import GridCategoryListResponse, GridCategoryResponse
from ninebox.scoring.grid import all_categories, get_category

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/grid", tags=["Grid"])


@router.get(
    "/categories",
    response_model=GridCategoryListResponse,
    summary="All nine grid categories",
)
async def list_categories() -> GridCategoryListResponse:
    items = [GridCategoryResponse(**asdict(c)) for c in all_categories()]
    return GridCategoryListResponse(items=items, total=len(items))


@router.get(
    "/categories/{performance}/{potential}",
    response_model=GridCategoryResponse,
    responses={404: {"model": ErrorResponse, "description": "Level outside 0-2"}},
    summary="Category of one (performance, potential) pair",
)
async def get_grid_category(performance: int, potential: int) -> GridCategoryResponse:
    try:
        category = get_category(performance, potential)
    except ValueError:
        raise_not_found("category")
    return GridCategoryResponse(**asdict(category))
