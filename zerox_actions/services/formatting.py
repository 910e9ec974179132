from zerox_actions.models.chain import CHAIN_NAMES, TokenModel
from zerox_actions.models.price_models import FormattedAmounts, IndicativePriceResponse
from zerox_actions.utils.amounts import to_human

SEPARATOR = '────────────────'
CALL_TO_ACTION = "💫 Happy with the price? Type 'quote' to continue"


def format_amounts(
    price: IndicativePriceResponse,
    buy_token: TokenModel,
    sell_token: TokenModel,
) -> FormattedAmounts:
    buy_amount = to_human(price.buyAmount, buy_token.decimals)
    sell_amount = to_human(price.sellAmount, sell_token.decimals)
    return FormattedAmounts(
        buy_amount=buy_amount,
        sell_amount=sell_amount,
        rate=buy_amount / sell_amount if sell_amount else 0.0,
        buy_symbol=buy_token.symbol,
        sell_symbol=sell_token.symbol,
    )


def render_swap_details(
    amounts: FormattedAmounts, chain_id: int, call_to_action: bool = False
) -> str:
    lines = [
        '💱 Swap Details:',
        SEPARATOR,
        f'📤 Sell: {amounts.sell_amount:.4f} {amounts.sell_symbol}',
        f'📥 Buy: {amounts.buy_amount:.4f} {amounts.buy_symbol}',
        f'📊 Rate: 1 {amounts.sell_symbol} = {amounts.rate:.4f} {amounts.buy_symbol}',
        f'🔗 Chain: {CHAIN_NAMES.get(chain_id, chain_id)}',
        SEPARATOR,
    ]
    if call_to_action:
        lines.append(CALL_TO_ACTION)
    return '\n'.join(lines)
