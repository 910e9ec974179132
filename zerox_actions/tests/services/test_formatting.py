from zerox_actions.models.chain import Chains, TokenModel
from zerox_actions.models.price_models import IndicativePriceResponse
from zerox_actions.services.formatting import (
    CALL_TO_ACTION,
    format_amounts,
    render_swap_details,
)

ETH = TokenModel(address='0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE', symbol='ETH', decimals=18)
USDC = TokenModel(address='0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85', symbol='USDC', decimals=6)


def test_format_amounts():
    price = IndicativePriceResponse(sellAmount='2000000000000000000', buyAmount='4000000000')
    amounts = format_amounts(price, buy_token=USDC, sell_token=ETH)
    assert amounts.sell_amount == 2.0
    assert amounts.buy_amount == 4000.0
    assert amounts.rate == 2000.0
    assert amounts.sell_symbol == 'ETH'
    assert amounts.buy_symbol == 'USDC'


def test_rate_matches_amounts_ratio():
    price = IndicativePriceResponse(sellAmount='1234567', buyAmount='987654321000000000')
    amounts = format_amounts(price, buy_token=ETH, sell_token=USDC)
    expected = (987654321000000000 / 10 ** 18) / (1234567 / 10 ** 6)
    assert f'{amounts.rate:.4f}' == f'{expected:.4f}'


def test_format_amounts_ignores_extra_response_fields():
    price = IndicativePriceResponse.model_validate({
        'sellAmount': '1000000',
        'buyAmount': '500000000000000',
        'liquidityAvailable': True,
        'route': {'fills': []},
        'totalNetworkFee': '1234',
    })
    amounts = format_amounts(price, buy_token=ETH, sell_token=USDC)
    assert amounts.sell_amount == 1.0
    assert amounts.buy_amount == 0.0005


def test_render_swap_details():
    price = IndicativePriceResponse(sellAmount='2000000000000000000', buyAmount='4000000000')
    text = render_swap_details(format_amounts(price, USDC, ETH), Chains.optimism)
    assert text.split('\n') == [
        '💱 Swap Details:',
        '────────────────',
        '📤 Sell: 2.0000 ETH',
        '📥 Buy: 4000.0000 USDC',
        '📊 Rate: 1 ETH = 2000.0000 USDC',
        '🔗 Chain: Optimism',
        '────────────────',
    ]


def test_render_swap_details_with_call_to_action():
    price = IndicativePriceResponse(sellAmount='1000000', buyAmount='1000000')
    text = render_swap_details(format_amounts(price, USDC, USDC), 8453, call_to_action=True)
    assert text.endswith(CALL_TO_ACTION)
    assert '🔗 Chain: Base' in text
