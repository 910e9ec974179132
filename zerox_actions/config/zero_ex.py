from pydantic import HttpUrl
from pydantic_settings import BaseSettings


class ZeroExConfig(BaseSettings):
    # generate key at https://dashboard.0x.org/
    ZERO_EX_API_KEY: str = ''
    ZERO_EX_API_DOMAIN: str = 'api.0x.org'
    ZERO_EX_API_VERSION: str = 'v2'
    ZERO_EX_REQUEST_TIMEOUT: int = 7
    TOKEN_LIST_URL: HttpUrl = 'https://tokens.uniswap.org'
    PRICE_RETRY_ATTEMPTS: int = 6
    PRICE_RETRY_DELAY: float = 5
    # Chain used by the standalone price helper (Base).
    PRICE_INQUIRY_CHAIN_ID: int = 8453
