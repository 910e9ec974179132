from typing import Any, Callable, Optional

import aiohttp
import ujson
from pydantic import ValidationError

from zerox_actions.actions.base_action import BaseAction
from zerox_actions.actions.templates import GET_INDICATIVE_PRICE_TEMPLATE
from zerox_actions.clients.apm_client import ApmClient
from zerox_actions.config import Config
from zerox_actions.constants import PRICE_INQUIRY_MEMORY, ZERO_EX_API_KEY_SETTING
from zerox_actions.models.chain import Chains, TokenModel
from zerox_actions.models.price_models import IndicativePriceContent, PriceInquiry
from zerox_actions.providers.zerox_v2 import PriceRoute, ZeroXProviderV2
from zerox_actions.runtime import (
    AgentRuntime,
    Content,
    HandlerCallback,
    Memory,
    State,
    compose_context,
)
from zerox_actions.services.formatting import format_amounts, render_swap_details
from zerox_actions.services.token_registry import TokenRegistry
from zerox_actions.utils.amounts import is_dust, to_base_units
from zerox_actions.utils.errors import (
    ChainNotSupportedError,
    DustAmountError,
    MissingFieldsError,
    TokenNotFoundError,
    UnsupportedChainError,
    UserInputError,
)
from zerox_actions.utils.logger import LogArgs, get_logger, set_new_correlation_id

logger = get_logger(__name__)

ProviderFactory = Callable[[str], ZeroXProviderV2]


def get_missing_indicative_price_content(content: Any) -> list[str]:
    """Human readable names of the fields that are absent or of the wrong type."""
    if not isinstance(content, dict):
        content = {}
    missing_fields = []
    if not _is_text(content.get('sellTokenSymbol')):
        missing_fields.append('sell token')
    if not _is_text(content.get('buyTokenSymbol')):
        missing_fields.append('buy token')
    sell_amount = content.get('sellAmount')
    if isinstance(sell_amount, bool) or not isinstance(sell_amount, (int, float)) or sell_amount <= 0:
        missing_fields.append('sell amount')
    if not _is_text(content.get('chain')):
        missing_fields.append('chain')
    return missing_fields


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def parse_indicative_price_content(content: Any) -> IndicativePriceContent:
    missing_fields = get_missing_indicative_price_content(content)
    if missing_fields:
        raise MissingFieldsError(missing_fields)
    try:
        return IndicativePriceContent.model_validate(content)
    except ValidationError as e:
        fields = [str(error['loc'][0]) for error in e.errors() if error['loc']]
        raise MissingFieldsError(fields or ['swap details'])


def resolve_chain(chain: str) -> Chains:
    chain_id = Chains.from_name(chain)
    if chain_id is None:
        raise UnsupportedChainError(chain, Chains.names())
    return chain_id


class GetIndicativePriceAction(BaseAction):
    NAME = 'GET_INDICATIVE_PRICE_0X'
    SIMILES = []
    DESCRIPTION = 'Get indicative price for a swap from 0x when user wants to convert their tokens'
    SUPPRESS_INITIAL_MESSAGE = True
    EXAMPLES = [
        [
            {'user': '{{user1}}', 'content': {'text': "What's the price of 2 ETH in USDC on Optimism?"}},
            {
                'user': '{{agent}}',
                'content': {
                    'text': 'Let me check the current exchange rate for ETH/USDC on Optimism.',
                    'action': 'GET_INDICATIVE_PRICE_0X',
                },
            },
        ],
        [
            {'user': '{{user1}}', 'content': {'text': 'I want to swap WETH for USDT on Arbitrum'}},
            {
                'user': '{{agent}}',
                'content': {
                    'text': "I'll help you check the price. How much WETH would you like to swap?",
                    'action': 'GET_INDICATIVE_PRICE_0X',
                },
            },
            {'user': '{{user1}}', 'content': {'text': '5 WETH'}},
            {
                'user': '{{agent}}',
                'content': {
                    'text': 'Let me get the indicative price for 5 WETH to USDT on Arbitrum.',
                    'action': 'GET_INDICATIVE_PRICE_0X',
                },
            },
        ],
        [
            {'user': '{{user1}}', 'content': {'text': 'Price check for 1000 USDC to WETH on Base'}},
            {
                'user': '{{agent}}',
                'content': {
                    'text': "I'll check the current exchange rate for 1000 USDC to WETH on Base network.",
                    'action': 'GET_INDICATIVE_PRICE_0X',
                },
            },
        ],
    ]

    def __init__(
        self,
        *,
        config: Config,
        token_registry: TokenRegistry,
        apm_client: ApmClient,
        session: Optional[aiohttp.ClientSession] = None,
        provider_factory: Optional[ProviderFactory] = None,
    ):
        self.config = config
        self.token_registry = token_registry
        self.apm_client = apm_client
        self.provider_factory = provider_factory or (
            lambda api_key: ZeroXProviderV2(config=config, session=session, api_key=api_key)
        )

    async def validate(self, runtime: AgentRuntime, message: Optional[Memory] = None) -> bool:
        return bool(runtime.get_setting(ZERO_EX_API_KEY_SETTING))

    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State],
        options: Optional[dict],
        callback: HandlerCallback,
    ) -> Optional[bool]:
        set_new_correlation_id()
        log_extra = {LogArgs.action: self.NAME, LogArgs.room_id: str(message.room_id)}
        try:
            request = await self._extract_request(runtime, message, state)
            chain_id = resolve_chain(request.chain)
            sell_token, buy_token = await self._resolve_tokens(request, chain_id)
            sell_amount_base_units = to_base_units(request.sellAmount, sell_token.decimals)
            if is_dust(sell_amount_base_units):
                raise DustAmountError(request.sellAmount, sell_token.symbol)
        except UserInputError as e:
            logger.info('Cannot get indicative price: %s', e, extra=log_extra)
            await callback(Content(text=e.reply_text))
            return None
        except Exception as e:
            logger.exception('Error preparing price request: %s', e, extra=log_extra)
            await callback(Content(text=f'Error getting price: {e}', content={'error': str(e)}))
            return False

        logger.info(
            'Getting indicative price for: %s -> %s, amount %s',
            sell_token.symbol, buy_token.symbol, request.sellAmount,
            extra={
                LogArgs.sell_token: sell_token.model_dump(),
                LogArgs.buy_token: buy_token.model_dump(),
                LogArgs.sell_amount: request.sellAmount,
                LogArgs.chain_id: chain_id,
                **log_extra,
            },
        )

        provider = self.provider_factory(runtime.get_setting(ZERO_EX_API_KEY_SETTING))
        try:
            price = await provider.get_swap_price(
                buy_token=buy_token.address,
                sell_token=sell_token.address,
                sell_amount=sell_amount_base_units,
                chain_id=int(chain_id),
                route=PriceRoute.PERMIT2,
            )
            amounts = format_amounts(price, buy_token, sell_token)
            await self.store_price_inquiry(
                runtime,
                message,
                PriceInquiry(
                    sell_token_object=sell_token,
                    buy_token_object=buy_token,
                    sell_amount_base_units=sell_amount_base_units,
                    chain_id=int(chain_id),
                ),
            )
        except Exception as e:
            logger.error('Error getting price: %s', e, extra={LogArgs.ex: repr(e), **log_extra})
            await callback(Content(text=f'Error getting price: {e}', content={'error': str(e)}))
            return False

        response = Content(text=render_swap_details(amounts, chain_id, call_to_action=True))
        await callback(response)
        self._trace(state, response)
        return True

    async def _extract_request(
        self, runtime: AgentRuntime, message: Memory, state: Optional[State]
    ) -> IndicativePriceContent:
        supported_chains = ' | '.join(Chains.names())
        if not state:
            local_state = await runtime.compose_state(message, {'supportedChains': supported_chains})
        else:
            local_state = await runtime.update_recent_message_state(state)
        local_state = {**local_state, 'supportedChains': supported_chains}

        context = compose_context(local_state, GET_INDICATIVE_PRICE_TEMPLATE)
        content = await runtime.generator.generate(context, IndicativePriceContent)
        return parse_indicative_price_content(content)

    async def _resolve_tokens(
        self, request: IndicativePriceContent, chain_id: Chains
    ) -> tuple[TokenModel, TokenModel]:
        if not self.token_registry.is_chain_supported(chain_id):
            raise ChainNotSupportedError(request.chain)
        await self.token_registry.initialize_chain(chain_id)

        sell_token = self.token_registry.get_token_by_symbol(request.sellTokenSymbol, chain_id)
        buy_token = self.token_registry.get_token_by_symbol(request.buyTokenSymbol, chain_id)
        if not sell_token or not buy_token:
            missing_tokens = []
            if not sell_token:
                missing_tokens.append(request.sellTokenSymbol)
            if not buy_token:
                missing_tokens.append(request.buyTokenSymbol)
            raise TokenNotFoundError(missing_tokens, request.chain)
        return sell_token, buy_token

    async def store_price_inquiry(
        self, runtime: AgentRuntime, message: Memory, price_inquiry: PriceInquiry
    ) -> None:
        memory = Memory(
            room_id=message.room_id,
            user_id=message.user_id,
            agent_id=runtime.agent_id,
            content=Content(
                text=ujson.dumps(price_inquiry.model_dump(by_alias=True)),
                type=PRICE_INQUIRY_MEMORY.type,
            ),
        )
        memory_manager = runtime.memory_manager(PRICE_INQUIRY_MEMORY.table_name)
        await memory_manager.create_memory(memory)

    def _trace(self, state: Optional[State], response: Content) -> None:
        try:
            self.apm_client.trace_result(state, response)
        except Exception as e:
            logger.warning('Cannot trace action result: %s', e, extra={LogArgs.action: self.NAME})
