import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from zerox_actions.config import Config
from zerox_actions.models.price_models import PriceInquiry
from zerox_actions.providers.zerox_v2 import PriceRoute, ZeroXProviderV2
from zerox_actions.services.formatting import format_amounts, render_swap_details
from zerox_actions.services.token_registry import TokenRegistry
from zerox_actions.utils.amounts import Number, is_dust, round_base_units
from zerox_actions.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)


class PipelineState(str, Enum):
    RESOLVING = 'resolving'
    NORMALIZING = 'normalizing'
    FETCHING = 'fetching'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


class StageStatus(Enum):
    SUCCEEDED = 'succeeded'
    # Bad input, retrying cannot help.
    TERMINAL = 'terminal'
    # Upstream failure, worth another attempt.
    TRANSIENT = 'transient'


@dataclass(frozen=True)
class StageOutcome:
    state: PipelineState
    status: StageStatus
    value: Any = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.SUCCEEDED


def _is_transient(outcome: StageOutcome) -> bool:
    return outcome.status is StageStatus.TRANSIENT


def _last_outcome(retry_state: RetryCallState) -> StageOutcome:
    return retry_state.outcome.result()


class PriceInquiryService:
    """
    Standalone price helper: resolves tokens on a fixed chain and fetches an
    indicative price through the gas-abstracted (allowance holder) route.

    Resolution and amount failures end the run immediately. Failed price
    fetches are retried up to `PRICE_RETRY_ATTEMPTS` times with a fixed
    `PRICE_RETRY_DELAY` pause between attempts.
    """

    def __init__(
        self,
        *,
        config: Config,
        token_registry: TokenRegistry,
        provider: ZeroXProviderV2,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.config = config
        self.token_registry = token_registry
        self.provider = provider
        self.sleep = sleep
        self.max_attempts = config.PRICE_RETRY_ATTEMPTS
        self.retry_delay = config.PRICE_RETRY_DELAY

    async def get_price_inquiry(
        self,
        sell_token_symbol: str,
        sell_amount_base_units: Number,
        buy_token_symbol: str,
        chain_id: Optional[int] = None,
    ) -> Optional[PriceInquiry]:
        chain_id = chain_id or self.config.PRICE_INQUIRY_CHAIN_ID
        log_extra = {
            LogArgs.chain_id: chain_id,
            LogArgs.sell_token: sell_token_symbol,
            LogArgs.buy_token: buy_token_symbol,
            LogArgs.sell_amount: str(sell_amount_base_units),
        }
        try:
            outcome = await self._run(
                sell_token_symbol, sell_amount_base_units, buy_token_symbol, chain_id
            )
        except Exception:
            logger.exception('Price inquiry crashed', extra=log_extra)
            return None

        if not outcome.ok:
            logger.error(
                'Price inquiry failed while %s: %s',
                outcome.state.value, outcome.reason, extra=log_extra,
            )
            return None
        return outcome.value

    async def _run(
        self,
        sell_token_symbol: str,
        sell_amount_base_units: Number,
        buy_token_symbol: str,
        chain_id: int,
    ) -> StageOutcome:
        resolved = await self._resolve(sell_token_symbol, buy_token_symbol, chain_id)
        if not resolved.ok:
            return resolved
        sell_token, buy_token = resolved.value

        normalized = self._normalize(sell_amount_base_units)
        if not normalized.ok:
            return normalized
        sell_amount = normalized.value

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_result(_is_transient),
            retry_error_callback=_last_outcome,
            before_sleep=self._log_retry,
            sleep=self.sleep,
        )
        fetched = await retrying(self._fetch, sell_token, buy_token, sell_amount, chain_id)
        if not fetched.ok:
            return StageOutcome(
                PipelineState.FAILED,
                StageStatus.TRANSIENT,
                reason=f'no price after {self.max_attempts} attempts',
            )

        formatted = format_amounts(fetched.value, buy_token, sell_token)
        logger.info(
            'Price inquiry succeeded:\n%s', render_swap_details(formatted, chain_id),
            extra={LogArgs.chain_id: chain_id},
        )
        inquiry = PriceInquiry(
            sell_token_object=sell_token,
            buy_token_object=buy_token,
            sell_amount_base_units=str(sell_amount),
            chain_id=chain_id,
        )
        return StageOutcome(PipelineState.SUCCEEDED, StageStatus.SUCCEEDED, value=inquiry)

    async def _resolve(
        self, sell_token_symbol: str, buy_token_symbol: str, chain_id: int
    ) -> StageOutcome:
        if not self.token_registry.is_chain_supported(chain_id):
            return StageOutcome(
                PipelineState.RESOLVING, StageStatus.TERMINAL,
                reason=f'chain {chain_id} is not supported',
            )
        try:
            await self.token_registry.initialize_chain(chain_id)
        except Exception as e:
            return StageOutcome(
                PipelineState.RESOLVING, StageStatus.TERMINAL,
                reason=f'cannot load tokens for chain {chain_id}: {e}',
            )

        sell_token = self.token_registry.get_token_by_symbol(sell_token_symbol, chain_id)
        buy_token = self.token_registry.get_token_by_symbol(buy_token_symbol, chain_id)
        if not sell_token or not buy_token:
            missing = [
                symbol for symbol, token in
                ((sell_token_symbol, sell_token), (buy_token_symbol, buy_token))
                if not token
            ]
            return StageOutcome(
                PipelineState.RESOLVING, StageStatus.TERMINAL,
                reason=f'invalid token metadata for {", ".join(map(str, missing))}',
            )
        return StageOutcome(
            PipelineState.RESOLVING, StageStatus.SUCCEEDED, value=(sell_token, buy_token)
        )

    @staticmethod
    def _normalize(sell_amount_base_units: Number) -> StageOutcome:
        try:
            dust = is_dust(sell_amount_base_units)
        except (ArithmeticError, TypeError, ValueError):
            return StageOutcome(
                PipelineState.NORMALIZING, StageStatus.TERMINAL,
                reason=f'sell amount {sell_amount_base_units!r} is not a number',
            )
        if dust:
            return StageOutcome(
                PipelineState.NORMALIZING, StageStatus.TERMINAL,
                reason=f'sell amount {sell_amount_base_units} is too small',
            )
        return StageOutcome(
            PipelineState.NORMALIZING, StageStatus.SUCCEEDED,
            value=round_base_units(sell_amount_base_units),
        )

    async def _fetch(self, sell_token, buy_token, sell_amount: int, chain_id: int) -> StageOutcome:
        price = await self.provider.fetch_price(
            sell_token=sell_token.address,
            buy_token=buy_token.address,
            sell_amount=str(sell_amount),
            chain_id=chain_id,
            route=PriceRoute.ALLOWANCE_HOLDER,
        )
        if price is None:
            return StageOutcome(
                PipelineState.FETCHING, StageStatus.TRANSIENT, reason='no price returned'
            )
        return StageOutcome(PipelineState.FETCHING, StageStatus.SUCCEEDED, value=price)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            'Error in get_price_inquiry (attempt %s), retrying in %ss',
            retry_state.attempt_number, self.retry_delay,
            extra={LogArgs.attempt: retry_state.attempt_number},
        )
