"""Reference data endpoints: categories, areas and ingredients."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from foodies.api.dependencies import get_reference_data_service
from foodies.schemas import AreaResponse, CategoryResponse, IngredientResponse
from foodies.services import ReferenceDataService


router = APIRouter(tags=["Reference data"])

ReferenceServiceDep = Annotated[ReferenceDataService, Depends(get_reference_data_service)]


@router.get("/categories", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(service: ReferenceServiceDep) -> list[CategoryResponse]:
    return await service.get_categories()


@router.get("/areas", response_model=list[AreaResponse], summary="List areas")
async def list_areas(service: ReferenceServiceDep) -> list[AreaResponse]:
    return await service.get_areas()


@router.get(
    "/ingredients",
    response_model=list[IngredientResponse],
    summary="List ingredients",
)
async def list_ingredients(service: ReferenceServiceDep) -> list[IngredientResponse]:
    return await service.get_ingredients()
