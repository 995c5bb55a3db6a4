"""Portfolio API endpoints."""

from fastapi import APIRouter, Depends, Path

from stocktrade.api.deps import get_portfolio_service
from stocktrade.api.schemas import ApiResponse, PortfolioResponse
from stocktrade.services import PortfolioService

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("/{user_id}", response_model=ApiResponse[PortfolioResponse])
def get_portfolio(
    user_id: str = Path(..., min_length=1, max_length=50),
    portfolio: PortfolioService = Depends(get_portfolio_service),
):
    """Get a user's holdings valued at current prices."""
    view = portfolio.get_user_portfolio(user_id)
    return ApiResponse(data=PortfolioResponse.from_view(view))
