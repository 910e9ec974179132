import asyncio
from abc import abstractmethod
from typing import Optional

from aiohttp import ClientSession, ServerDisconnectedError
from pydantic import ValidationError

from zerox_actions.config import Config
from zerox_actions.models.price_models import IndicativePriceResponse
from zerox_actions.utils.errors import (
    BaseAggregationProviderError,
    ParseResponseError,
    ProviderTimeoutError,
)
from zerox_actions.utils.httputils import get_client_session
from zerox_actions.utils.logger import capture_exception


class BaseProvider:
    PROVIDER_NAME = 'base_provider'
    REQUEST_TIMEOUT = 7

    aiohttp_session: Optional[ClientSession]

    def __init__(self, config: Config, session: Optional[ClientSession] = None):
        self.config = config
        self.aiohttp_session = session

    async def get_session(self) -> ClientSession:
        self.aiohttp_session = await get_client_session(self.aiohttp_session)
        return self.aiohttp_session

    @abstractmethod
    async def get_swap_price(
        self,
        buy_token: str,
        sell_token: str,
        sell_amount: int,
        chain_id: int,
        taker_address: Optional[str] = None,
    ) -> IndicativePriceResponse:
        """
        The get_swap_price function is used to find an indicative price for a swap from the provider.
        It doesn't require the taker_address to be specified.
        Args:
            self: Access the class attributes
            buy_token:str: Token is being buy
            sell_token:str: Token is being sold
            sell_amount:int: Amount of sell_token to sell in base units
            chain_id:int: Specify the chain on which the swap would be executed
            taker_address:Optional[str]=None: Address who makes the transaction and will receive tokens

        Returns:
            An IndicativePriceResponse with sell and buy amounts in base units.
        """

    def handle_exception(
        self, exception: Exception, **kwargs
    ) -> Optional[BaseAggregationProviderError]:
        capture_exception()
        if isinstance(exception, (KeyError, ValidationError, ValueError)):
            exc = ParseResponseError(self.PROVIDER_NAME, str(exception), **kwargs)
            return exc
        if isinstance(exception, (ServerDisconnectedError, asyncio.TimeoutError)):
            exc = ProviderTimeoutError(self.PROVIDER_NAME, str(exception), **kwargs)
            return exc
