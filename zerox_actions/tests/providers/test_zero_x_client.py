import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from aiohttp import ClientResponseError, RequestInfo

from zerox_actions.models.price_models import IndicativePriceResponse
from zerox_actions.providers.zerox_v2 import PriceRoute
from zerox_actions.utils.errors import (
    BaseAggregationProviderError,
    InsufficientLiquidityError,
    ParseResponseError,
    ProviderTimeoutError,
    ValidationFailedError,
    ZeroXProviderError,
)

ETH = '0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE'
USDC_BASE = '0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913'
PRICE_RESPONSE = {
    'blockNumber': '21000000',
    'buyAmount': '2500000000',
    'buyToken': USDC_BASE,
    'liquidityAvailable': True,
    'sellAmount': '1000000000000000000',
    'sellToken': ETH,
    'route': {'fills': [], 'tokens': []},
}


def _response_error(body) -> ClientResponseError:
    return ClientResponseError(
        RequestInfo(url='https://api.0x.org/swap/permit2/price', method='GET', headers=None),
        None,
        status=400,
        message=[body],
    )


@pytest.mark.asyncio()
async def test_handle_exception_key_error(zerox_provider, caplog):
    exc = zerox_provider.handle_exception(KeyError('test'))
    assert caplog.text
    assert isinstance(exc, ParseResponseError)


@pytest.mark.asyncio()
async def test_handle_exception_timeout(zerox_provider):
    exc = zerox_provider.handle_exception(asyncio.TimeoutError())
    assert isinstance(exc, ProviderTimeoutError)


@pytest.mark.asyncio()
async def test_handle_exception_client_response_error(zerox_provider, caplog):
    exc = zerox_provider.handle_exception(ClientResponseError(
        RequestInfo(url='abc', method='GET', headers=None), None,
        message='not enough allowance'))
    assert caplog.text
    assert isinstance(exc, BaseAggregationProviderError)


@pytest.mark.asyncio()
async def test_handle_exception_insufficient_liquidity(zerox_provider):
    exc = zerox_provider.handle_exception(_response_error({
        'name': 'INSUFFICIENT_LIQUIDITY',
        'message': 'There is not enough liquidity for this swap',
    }))
    assert isinstance(exc, InsufficientLiquidityError)
    assert exc.provider == 'zero_x'


@pytest.mark.asyncio()
async def test_handle_exception_input_invalid_details(zerox_provider):
    exc = zerox_provider.handle_exception(_response_error({
        'name': 'INPUT_INVALID',
        'message': 'The input is invalid',
        'data': {'details': [{'field': 'sellAmount', 'reason': 'Invalid sell amount'}]},
    }))
    assert isinstance(exc, ValidationFailedError)
    assert 'sellAmount' in exc.message
    assert exc.kwargs['url'] == 'https://api.0x.org/swap/permit2/price'


@pytest.mark.asyncio()
async def test_handle_exception_unknown_error(zerox_provider):
    exc = zerox_provider.handle_exception(_response_error({'name': 'SOMETHING_NEW'}))
    assert type(exc) is ZeroXProviderError


@pytest.mark.asyncio()
async def test_headers(zerox_provider, config):
    assert zerox_provider.headers == {
        '0x-api-key': config.ZERO_EX_API_KEY,
        '0x-version': 'v2',
    }


@pytest.mark.asyncio()
async def test_api_key_override(config):
    from zerox_actions.providers.zerox_v2 import ZeroXProviderV2

    provider = ZeroXProviderV2(config=config, api_key='runtime-key')
    assert provider.headers['0x-api-key'] == 'runtime-key'


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_get_swap_price(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.return_value = PRICE_RESPONSE
    price = await zerox_provider.get_swap_price(
        buy_token=USDC_BASE,
        sell_token=ETH,
        sell_amount=10 ** 18,
        chain_id=8453,
    )
    get_response_mock.assert_awaited_once_with(
        'https://api.0x.org/swap/permit2/price',
        params={
            'chainId': 8453,
            'buyToken': USDC_BASE,
            'sellToken': ETH,
            'sellAmount': '1000000000000000000',
        },
    )
    assert isinstance(price, IndicativePriceResponse)
    assert price.buyAmount == '2500000000'
    assert price.sellAmount == '1000000000000000000'


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_get_swap_price_with_taker(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.return_value = PRICE_RESPONSE
    taker = '0x0000000000000000000000000000000000000001'
    await zerox_provider.get_swap_price(
        buy_token=USDC_BASE,
        sell_token=ETH,
        sell_amount='1000',
        chain_id=8453,
        taker_address=taker,
    )
    assert get_response_mock.await_args.kwargs['params']['taker'] == taker


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_get_swap_price_no_liquidity(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.return_value = {'liquidityAvailable': False, 'zid': '0x1'}
    with pytest.raises(InsufficientLiquidityError):
        await zerox_provider.get_swap_price(
            buy_token=USDC_BASE, sell_token=ETH, sell_amount=1, chain_id=8453,
        )


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_get_swap_price_invalid_response(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.return_value = {'liquidityAvailable': True}
    with pytest.raises(ParseResponseError):
        await zerox_provider.get_swap_price(
            buy_token=USDC_BASE, sell_token=ETH, sell_amount=1, chain_id=8453,
        )


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_get_swap_price_timeout(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.side_effect = asyncio.TimeoutError()
    with pytest.raises(ProviderTimeoutError):
        await zerox_provider.get_swap_price(
            buy_token=USDC_BASE, sell_token=ETH, sell_amount=1, chain_id=8453,
        )


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_fetch_price_uses_allowance_holder_route(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.return_value = PRICE_RESPONSE
    price = await zerox_provider.fetch_price(
        sell_token=ETH, buy_token=USDC_BASE, sell_amount='1000000000000000000', chain_id=8453,
    )
    assert price.buyAmount == '2500000000'
    url = get_response_mock.await_args.args[0]
    assert url == f'https://api.0x.org/swap/{PriceRoute.ALLOWANCE_HOLDER.value}/price'


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_fetch_price_returns_none_on_error(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.side_effect = _response_error({
        'name': 'TOKEN_NOT_SUPPORTED', 'message': 'Token is not supported',
    })
    price = await zerox_provider.fetch_price(
        sell_token=ETH, buy_token=USDC_BASE, sell_amount='1', chain_id=8453,
    )
    assert price is None


@pytest.mark.asyncio()
@patch(
    'zerox_actions.providers.zerox_v2.ZeroXProviderV2._get_response',
    new_callable=AsyncMock,
)
async def test_fetch_price_returns_none_on_unexpected_error(get_response_mock: AsyncMock, zerox_provider):
    get_response_mock.side_effect = RuntimeError('boom')
    price = await zerox_provider.fetch_price(
        sell_token=ETH, buy_token=USDC_BASE, sell_amount='1', chain_id=8453,
    )
    assert price is None
