from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, conint


class Chains(IntEnum):
    """Chains the 0x swap API quotes on, keyed by lowercase name."""

    ethereum = 1
    optimism = 10
    bsc = 56
    polygon = 137
    base = 8453
    arbitrum = 42161
    avalanche = 43114
    linea = 59144
    scroll = 534352
    blast = 81457

    @classmethod
    def from_name(cls, name: str) -> Optional['Chains']:
        """Case-insensitive lookup, None for unknown names."""
        return cls.__members__.get(name.strip().lower())

    @classmethod
    def names(cls) -> list[str]:
        return list(cls.__members__)


CHAIN_NAMES = {
    Chains.ethereum: 'Ethereum',
    Chains.optimism: 'Optimism',
    Chains.bsc: 'BSC',
    Chains.polygon: 'Polygon',
    Chains.base: 'Base',
    Chains.arbitrum: 'Arbitrum',
    Chains.avalanche: 'Avalanche',
    Chains.linea: 'Linea',
    Chains.scroll: 'Scroll',
    Chains.blast: 'Blast',
}

NATIVE_TOKEN_ADDRESS = '0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE'

NATIVE_SYMBOLS = {
    Chains.bsc: 'BNB',
    Chains.polygon: 'POL',
    Chains.avalanche: 'AVAX',
}


class TokenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    symbol: str
    decimals: conint(ge=0)
    name: Optional[str] = None


class ChainModel(BaseModel):
    name: str
    display_name: str
    chain_id: int

    @classmethod
    def from_chain(cls, chain: Chains) -> 'ChainModel':
        return cls(name=chain.name, display_name=CHAIN_NAMES[chain], chain_id=chain.value)


def native_token(chain_id: int) -> TokenModel:
    symbol = NATIVE_SYMBOLS.get(chain_id, 'ETH')
    return TokenModel(
        address=NATIVE_TOKEN_ADDRESS,
        symbol=symbol,
        decimals=18,
        name=symbol,
    )
