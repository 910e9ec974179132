from abc import abstractmethod
from typing import Iterable

from zerox_actions.utils.logger import LogArgs


class UserMistakes:
    code = 400
    error_owner = 'user'


class OurMistakes:
    code = 417
    error_owner = 'zerox_actions'


class ProviderMistakes:
    code = 409
    error_owner = 'provider'


class BaseAggregationProviderError(Exception):
    """common error for price providers"""

    @property
    @abstractmethod
    def msg_to_log(self):
        ...

    @property
    @abstractmethod
    def code(self):
        ...

    @property
    @abstractmethod
    def error_owner(self):
        ...

    def __init__(self, provider: str, message: str = None, **kwargs):
        self.provider = provider
        self.message = message
        self.kwargs = kwargs

    def __str__(self):
        if self.message:
            return f'{self.msg_to_log}: {self.message}. Source: {self.provider}'
        return f'{self.msg_to_log}. Source: {self.provider}'

    def __repr__(self):
        return f'{self.__class__.__name__}({self.provider}, {self.message}, {self.kwargs})'

    def to_dict(self):
        return {
            'provider': self.provider,
            'reason': self.message,
            'error_owner': self.error_owner,
            **self.kwargs,
        }

    def to_log_args(self):
        return (
            f'{self.msg_to_log.lower()}. Source: %({LogArgs.aggregation_provider})s',
            {LogArgs.aggregation_provider: self.provider}
        )


class ZeroXProviderError(ProviderMistakes, BaseAggregationProviderError):
    """common error for the 0x API"""
    msg_to_log = 'Unhandled error'


class InsufficientLiquidityError(ProviderMistakes, BaseAggregationProviderError):
    """Provider's API cannot find a liquidity for the swap"""
    msg_to_log = 'Cannot find a liquidity pools for swap'


class ProviderTimeoutError(ProviderMistakes, BaseAggregationProviderError):
    """When provider does not respond in time"""
    msg_to_log = 'Provider is unavailable'


class TokensError(UserMistakes, BaseAggregationProviderError):
    """When provider rejects the token pair"""
    msg_to_log = 'Invalid tokens'


class ValidationFailedError(UserMistakes, BaseAggregationProviderError):
    """When some fields in requests are not valid"""
    msg_to_log = 'Price validation failed'


class ParseResponseError(OurMistakes, BaseAggregationProviderError):
    """When provider's API returns invalid response, or we parse it wrong"""
    msg_to_log = 'Cannot parse response'


class UserInputError(UserMistakes, Exception):
    """Swap parameters that cannot succeed no matter how many times they are tried."""

    @property
    @abstractmethod
    def reply_text(self) -> str:
        ...

    def __str__(self):
        return self.reply_text


class MissingFieldsError(UserInputError):
    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)

    @property
    def reply_text(self) -> str:
        return (
            'Need more information about the swap. '
            f'Please provide me {" and ".join(self.fields)}'
        )


class UnsupportedChainError(UserInputError):
    def __init__(self, chain: str, supported: Iterable[str]):
        self.chain = chain
        self.supported = list(supported)

    @property
    def reply_text(self) -> str:
        return f'Unsupported chain: {self.chain}. Supported chains are: {", ".join(self.supported)}'


class ChainNotSupportedError(UserInputError):
    """The chain is known but the token registry has no catalog for it."""

    def __init__(self, chain: str):
        self.chain = chain

    @property
    def reply_text(self) -> str:
        return f'Chain {self.chain} is not supported for token swaps.'


class TokenNotFoundError(UserInputError):
    def __init__(self, symbols: Iterable[str], chain: str):
        self.symbols = list(symbols)
        self.chain = chain

    @property
    def reply_text(self) -> str:
        quoted = ' and '.join(f"'{symbol}'" for symbol in self.symbols)
        plural = 's' if len(self.symbols) > 1 else ''
        return (
            f'Token{plural} {quoted} not found on {self.chain}. '
            'Please check the token symbols and chain.'
        )


class DustAmountError(UserInputError):
    """Amount rounds to zero base units of the token."""

    def __init__(self, amount, symbol: str):
        self.amount = amount
        self.symbol = symbol

    @property
    def reply_text(self) -> str:
        return f'Sell amount {self.amount} {self.symbol} is too small to get a price.'


ZERO_X_ERRORS = {
    'INSUFFICIENT_LIQUIDITY': InsufficientLiquidityError,
    'TOKEN_NOT_SUPPORTED': TokensError,
    'INPUT_INVALID': ValidationFailedError,
    'BUY_TOKEN_NOT_AUTHORIZED_FOR_TRADE': TokensError,
    'SELL_TOKEN_NOT_AUTHORIZED_FOR_TRADE': TokensError,
}
