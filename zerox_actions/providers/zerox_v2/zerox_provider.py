import asyncio
import re
from enum import Enum
from typing import Optional, Union

import aiohttp
import ujson
from aiohttp import ClientError, ClientResponse, ClientResponseError
from pydantic import ValidationError

from zerox_actions.config import Config
from zerox_actions.models.price_models import IndicativePriceResponse
from zerox_actions.providers.base_provider import BaseProvider
from zerox_actions.utils.errors import (
    ZERO_X_ERRORS,
    BaseAggregationProviderError,
    InsufficientLiquidityError,
    ZeroXProviderError,
)
from zerox_actions.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)


class PriceRoute(str, Enum):
    # Default swap route, the taker signs a permit2 message.
    PERMIT2 = 'permit2'
    # Gas-abstracted route, approvals go to the AllowanceHolder contract.
    ALLOWANCE_HOLDER = 'allowance-holder'


class ZeroXProviderV2(BaseProvider):
    """Docs: https://0x.org/docs/api#tag/Swap"""

    PROVIDER_NAME = 'zero_x'

    def __init__(
        self,
        config: Config,
        session: Optional[aiohttp.ClientSession] = None,
        api_key: Optional[str] = None,
    ):
        super().__init__(config=config, session=session)
        self.api_key = api_key or config.ZERO_EX_API_KEY
        self.REQUEST_TIMEOUT = config.ZERO_EX_REQUEST_TIMEOUT

    def _api_path_builder(self, route: PriceRoute, endpoint: str) -> str:
        return f'https://{self.config.ZERO_EX_API_DOMAIN}/swap/{route.value}/{endpoint}'

    @property
    def headers(self) -> dict:
        return {
            '0x-api-key': self.api_key,
            '0x-version': self.config.ZERO_EX_API_VERSION,
        }

    async def _get_response(self, url: str, params: Optional[dict] = None) -> dict:
        session = await self.get_session()
        async with session.get(
            url,
            params=params,
            headers=self.headers,
            timeout=aiohttp.ClientTimeout(total=self.REQUEST_TIMEOUT),
        ) as response:
            response: ClientResponse
            logger.debug(f'Request GET {response.url}')
            data = await response.json(loads=ujson.loads, content_type=None)
            try:
                response.raise_for_status()
            except ClientResponseError as e:
                # Fix bug with HTTP status code 0.
                status = 500 if e.status not in range(100, 600) else e.status
                if isinstance(data, dict):
                    data['source'] = 'proxied 0x.org API'
                raise ClientResponseError(
                    request_info=e.request_info,
                    history=e.history,
                    status=status,
                    # Hack for error init method: expected str, but list and dict also works.
                    message=[data],
                    headers=e.headers,
                )

        return data

    def _convert_response_from_swap_price(
        self, response: dict, **kwargs
    ) -> IndicativePriceResponse:
        if response.get('liquidityAvailable') is False:
            exc = InsufficientLiquidityError(
                self.PROVIDER_NAME, 'liquidityAvailable is false', **kwargs
            )
            logger.warning(*exc.to_log_args(), extra=exc.to_dict())
            raise exc
        try:
            return IndicativePriceResponse.model_validate(response)
        except ValidationError as e:
            raise self.handle_exception(e, response=response, **kwargs)

    async def get_swap_price(
        self,
        buy_token: str,
        sell_token: str,
        sell_amount: Union[int, str],
        chain_id: int,
        taker_address: Optional[str] = None,
        route: PriceRoute = PriceRoute.PERMIT2,
        **_,
    ) -> IndicativePriceResponse:
        """
        Docs: https://0x.org/docs/api#tag/Swap/operation/swap::permit2::getPrice

        Examples:
            - https://api.0x.org/swap/permit2/price?chainId=8453&buyToken=0x833589fcd6edb6e08f4c7c32d4f71b54bda02913&sellAmount=1000000000000000000&sellToken=0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE
        """
        url = self._api_path_builder(route, 'price')
        query = {
            'chainId': chain_id,
            'buyToken': buy_token,
            'sellToken': sell_token,
            'sellAmount': str(sell_amount),
        }

        if taker_address:
            query['taker'] = taker_address

        logger.debug(f'Proxing url {url} with params {query}')
        try:
            response = await self._get_response(url, params=query)
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            raise self.handle_exception(
                e, query=query, method='get_swap_price', chain_id=chain_id
            )
        logger.info(f'Got price_response from 0x.org: {response}')
        return self._convert_response_from_swap_price(
            response, query=query, chain_id=chain_id
        )

    async def fetch_price(
        self,
        sell_token: str,
        buy_token: str,
        sell_amount: Union[int, str],
        chain_id: int,
        route: PriceRoute = PriceRoute.ALLOWANCE_HOLDER,
    ) -> Optional[IndicativePriceResponse]:
        """Single price request that reports failure as None instead of raising."""
        try:
            return await self.get_swap_price(
                buy_token=buy_token,
                sell_token=sell_token,
                sell_amount=sell_amount,
                chain_id=chain_id,
                route=route,
            )
        except BaseAggregationProviderError as e:
            logger.error(
                'Error getting price: %s', e,
                extra={LogArgs.chain_id: chain_id, LogArgs.route: route.value, **e.to_dict()},
            )
        except Exception as e:
            logger.exception(
                'Unexpected error getting price: %s', e,
                extra={LogArgs.chain_id: chain_id, LogArgs.route: route.value},
            )
        return None

    def handle_exception(
        self, exception: Exception, **kwargs
    ) -> BaseAggregationProviderError:
        """
        exception.message: [
            {
                "name": "INPUT_INVALID",
                "message": "The input is invalid",
                "data": {
                    "details": [
                        {"field": "sellAmount", "reason": "Invalid sell amount"}
                    ]
                }
            }
        ]
        """
        exc = super().handle_exception(exception, **kwargs)
        if exc:
            logger.error(*exc.to_log_args(), extra=exc.to_dict())
            return exc
        if not isinstance(exception, ClientResponseError):
            exc = ZeroXProviderError(self.PROVIDER_NAME, str(exception), **kwargs)
            logger.warning(*exc.to_log_args(), extra=exc.to_dict())
            return exc

        msg = exception.message
        error_name = ''
        if isinstance(exception.message, list) and isinstance(
            exception.message[0], dict
        ):
            body = exception.message[0]
            error_name = body.get('name', '')
            details = (body.get('data') or {}).get('details')
            if details:
                msg = {detail['field']: detail['reason'] for detail in details}
            else:
                msg = body.get('message', body)

        for error, error_class in ZERO_X_ERRORS.items():
            if re.search(error.lower(), f'{error_name} {msg}'.lower()):
                break
        else:
            error_class = ZeroXProviderError
        exc = error_class(
            self.PROVIDER_NAME,
            str(msg),
            url=str(exception.request_info.url),
            **kwargs,
        )
        logger.warning(*exc.to_log_args(), extra=exc.to_dict())
        return exc
