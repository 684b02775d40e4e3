from typing import List

from fastapi import APIRouter, Query

from antd_rush.models import CatalogComponent, ResolveResponse
from antd_rush.services.catalog import get_catalog

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/components", response_model=List[CatalogComponent])
async def list_components():
    """
    All known components with their handler names, in catalog order.
    """
    catalog = get_catalog()
    return [
        CatalogComponent(name=name, methods=list(catalog.get(name).methods))
        for name in catalog
    ]


@router.get("/resolve", response_model=ResolveResponse)
async def resolve_component(
    symbol: str = Query(..., description="Declared symbol name, e.g. Column"),
    folder: str = Query("", description="Folder the symbol is declared in, e.g. table"),
):
    """
    Canonical catalog key for a symbol, trying the symbol name, then the
    folder name, then both concatenated.
    """
    return ResolveResponse(key=get_catalog().resolve(symbol, folder))
