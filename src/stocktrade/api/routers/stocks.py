"""Stock catalog API endpoints."""

import math

from fastapi import APIRouter, Depends, Query

from stocktrade.api.deps import get_catalog_service
from stocktrade.api.schemas import (
    ApiResponse,
    PaginationMeta,
    StockPageResponse,
    StockResponse,
)
from stocktrade.services import StockCatalogService

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("", response_model=ApiResponse[StockPageResponse])
def list_stocks(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(50, ge=1, le=100, description="Items per page"),
    catalog: StockCatalogService = Depends(get_catalog_service),
):
    """List available stocks, paginated over the cached catalog."""
    stocks = catalog.get_all_stocks()
    start = (page - 1) * limit
    end = page * limit

    return ApiResponse(
        data=StockPageResponse(
            items=[StockResponse.from_instrument(s) for s in stocks[start:end]],
            pagination=PaginationMeta(
                page=page,
                limit=limit,
                total=len(stocks),
                total_pages=math.ceil(len(stocks) / limit),
                has_next=end < len(stocks),
                has_prev=page > 1,
            ),
        )
    )


@router.get("/{symbol}", response_model=ApiResponse[StockResponse])
def get_stock(
    symbol: str,
    catalog: StockCatalogService = Depends(get_catalog_service),
):
    """Get a single stock by symbol (case-insensitive)."""
    stock = catalog.get_stock_by_symbol(symbol.upper())
    return ApiResponse(data=StockResponse.from_instrument(stock))
