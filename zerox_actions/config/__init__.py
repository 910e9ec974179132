from pydantic_settings import BaseSettings, SettingsConfigDict

from zerox_actions.config.apm import APMConfig
from zerox_actions.config.cache import CacheConfig
from zerox_actions.config.logger import LoggerConfig
from zerox_actions.config.zero_ex import ZeroExConfig


class Config(APMConfig, LoggerConfig, CacheConfig, ZeroExConfig, BaseSettings):
    SERVER_HOST: str = 'localhost'
    SERVER_PORT: int = 8000
    RELOAD: bool = True
    VERSION: str = '0.1.0'
    API_VERSION: int = 1
    WORKERS_COUNT: int = 1
    CORS_ORIGINS: list = ['*']
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: list = ['*']
    CORS_HEADERS: list = ['*']
    # Credentials consumed by the swap execution side of the agent.
    WALLET_PRIVATE_KEY: str = ''
    ALCHEMY_HTTP_TRANSPORT_URL: str = ''

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')


config = Config()
