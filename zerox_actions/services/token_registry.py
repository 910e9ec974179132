import asyncio
from typing import Awaitable, Callable, Iterable, Optional

import aiohttp
import ujson
from aiocache import cached
from pydantic import ValidationError

from zerox_actions.config import Config
from zerox_actions.models.chain import Chains, TokenModel, native_token
from zerox_actions.utils.cache import get_cache_config
from zerox_actions.utils.httputils import get_client_session
from zerox_actions.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)

TokenLoader = Callable[[int], Awaitable[Iterable[dict]]]


class TokenListClient:
    """
    Reads token lists in the Uniswap token list format.
    Docs: https://tokenlists.org/

    {"name": "...", "tokens": [{"chainId": 1, "address": "0x...", "symbol": "USDC", "decimals": 6, "name": "USD Coin"}]}
    """

    REQUEST_TIMEOUT = 10

    def __init__(self, config: Config, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.url = str(config.TOKEN_LIST_URL)
        self.session = session
        self.get_token_list = cached(
            ttl=config.TOKEN_LIST_TTL, **get_cache_config(config)
        )(self.get_token_list)

    async def get_token_list(self, url: str) -> list[dict]:
        logger.debug('Fetching token list from %s', url)
        self.session = await get_client_session(self.session)
        async with self.session.get(
            url, timeout=aiohttp.ClientTimeout(total=self.REQUEST_TIMEOUT)
        ) as response:
            response.raise_for_status()
            data = await response.json(loads=ujson.loads, content_type=None)
        return data['tokens']

    async def __call__(self, chain_id: int) -> list[dict]:
        tokens = await self.get_token_list(self.url)
        return [token for token in tokens if token.get('chainId') == chain_id]


class TokenRegistry:
    """
    Per-chain catalog of token metadata, keyed by upper-cased symbol.

    Chains are loaded lazily: call `initialize_chain` before looking tokens up.
    Initialization is idempotent and safe to run concurrently for the same chain.

    Usage:
        registry = TokenRegistry(loader=TokenListClient(config))
        if registry.is_chain_supported(8453):
            await registry.initialize_chain(8453)
        registry.get_token_by_symbol('usdc', 8453)
        # TokenModel(address='0x8335...', symbol='USDC', decimals=6, name='USD Coin')
    """

    def __init__(
        self,
        loader: TokenLoader,
        chain_ids: Optional[Iterable[int]] = None,
    ):
        self.loader = loader
        self.chain_ids = frozenset(chain_ids) if chain_ids is not None else frozenset(Chains)
        self._tokens: dict[int, dict[str, TokenModel]] = {}
        self._locks: dict[int, asyncio.Lock] = {}

    def is_chain_supported(self, chain_id: int) -> bool:
        return chain_id in self.chain_ids

    def is_chain_initialized(self, chain_id: int) -> bool:
        return chain_id in self._tokens

    async def initialize_chain(self, chain_id: int) -> None:
        if not self.is_chain_supported(chain_id):
            raise ValueError(f'Chain id {chain_id} is not supported')
        if self.is_chain_initialized(chain_id):
            return

        lock = self._locks.setdefault(chain_id, asyncio.Lock())
        async with lock:
            if self.is_chain_initialized(chain_id):
                return
            raw_tokens = await self.loader(chain_id)
            self._tokens[chain_id] = self._build_catalog(chain_id, raw_tokens)
            logger.info(
                'Initialized %s tokens for chain %s',
                len(self._tokens[chain_id]), chain_id,
                extra={LogArgs.chain_id: chain_id},
            )

    @staticmethod
    def _build_catalog(chain_id: int, raw_tokens: Iterable[dict]) -> dict[str, TokenModel]:
        native = native_token(chain_id)
        catalog = {native.symbol.upper(): native}
        for raw_token in raw_tokens:
            try:
                token = TokenModel.model_validate(raw_token)
            except ValidationError as e:
                logger.warning(
                    'Skipping invalid token entry: %s', raw_token,
                    extra={LogArgs.chain_id: chain_id, LogArgs.ex: str(e)},
                )
                continue
            catalog.setdefault(token.symbol.upper(), token)
        return catalog

    def get_token_by_symbol(self, symbol: str, chain_id: int) -> Optional[TokenModel]:
        if not symbol:
            return None
        return self._tokens.get(chain_id, {}).get(symbol.strip().upper())

    def get_tokens(self, chain_id: int) -> list[TokenModel]:
        return list(self._tokens.get(chain_id, {}).values())
