from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from zerox_actions.models.chain import TokenModel
from zerox_actions.utils.common import snake_to_camel


class IndicativePriceContent(BaseModel):
    """Swap parameters extracted from the conversation. Every field may come back null."""

    sellTokenSymbol: Optional[str] = None
    sellAmount: Optional[float] = None
    buyTokenSymbol: Optional[str] = None
    chain: Optional[str] = None


class IndicativePriceResponse(BaseModel):
    """Subset of the 0x `/price` response the actions rely on."""

    model_config = ConfigDict(extra='allow')

    sellAmount: str  # base units of sell token
    buyAmount: str  # base units of buy token
    liquidityAvailable: Optional[bool] = None


class PriceInquiry(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=snake_to_camel,
        populate_by_name=True,
    )

    sell_token_object: TokenModel
    buy_token_object: TokenModel
    sell_amount_base_units: str
    chain_id: int
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class FormattedAmounts(BaseModel):
    sell_amount: float
    buy_amount: float
    rate: float
    sell_symbol: str
    buy_symbol: str
