"""Catalog endpoint feeding the entry form's choice lists."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...api.dependencies import get_catalog
from ...domain.catalog import Catalog

router = APIRouter(prefix="/api", tags=["catalog"])


class CategoryOption(BaseModel):
    key: str
    label: str


class CatalogResponse(BaseModel):
    categories: list[CategoryOption] = Field(default_factory=list)
    owners: list[str] = Field(default_factory=list)


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog_options(catalog: Catalog = Depends(get_catalog)) -> CatalogResponse:
    return CatalogResponse(
        categories=[CategoryOption(**option) for option in catalog.category_options()],
        owners=list(catalog.owners),
    )
