from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from zerox_actions.models.price_models import PriceInquiry
from zerox_actions.rest_api import dependencies

price_route = APIRouter()


@price_route.get(
    '/{chain_id}',
    response_model=PriceInquiry,
    responses={404: {"description": "Price is not available"}},
)
async def get_price_inquiry(
    chain_id: int = Path(..., description='Chain ID'),
    sell_token: str = Query(..., alias='sellToken', description='Symbol of the token to sell'),
    buy_token: str = Query(..., alias='buyToken', description='Symbol of the token to buy'),
    sell_amount: Decimal = Query(
        ..., alias='sellAmount', gt=0, description='Amount of sell token in base units'
    ),
    price_inquiry_service: dependencies.PriceInquiryService = Depends(
        dependencies.price_inquiry_service
    ),
) -> PriceInquiry:
    """
    Resolves the token symbols and asks 0x for an indicative price, retrying
    failed price requests. Responds with the price inquiry record.
    """
    inquiry = await price_inquiry_service.get_price_inquiry(
        sell_token_symbol=sell_token,
        sell_amount_base_units=sell_amount,
        buy_token_symbol=buy_token,
        chain_id=chain_id,
    )
    if inquiry is None:
        raise HTTPException(status_code=404, detail='Price is not available')
    return inquiry
