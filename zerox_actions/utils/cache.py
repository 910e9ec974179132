from hashlib import md5

from aiocache import Cache
from aiocache.serializers import PickleSerializer

from zerox_actions.config import CacheConfig

TOKEN_LIST_NAMESPACE = 'token_lists'


def token_list_key(func, *args, **kwargs) -> str:
    """Token lists are keyed by their url, so all clients share one entry per list."""
    url = kwargs.get('url', args[-1] if args else '')
    return md5(f'{func.__name__}:{url}'.encode()).hexdigest()


def get_cache_config(config: CacheConfig, namespace: str = TOKEN_LIST_NAMESPACE) -> dict:
    if config.CACHE == 'redis':
        return {
            'cache': Cache.REDIS,
            'endpoint': config.CACHE_HOST,
            'port': config.CACHE_PORT,
            'db': config.CACHE_DB,
            'password': config.CACHE_PASSWORD,
            'timeout': config.CACHE_TIMEOUT,
            'serializer': PickleSerializer(),
            'namespace': namespace,
            'key_builder': token_list_key,
        }
    if config.CACHE == 'memory':
        return {
            'cache': Cache.MEMORY,
            'namespace': namespace,
            'key_builder': token_list_key,
        }
    raise ValueError(f'Unknown cache backend: {config.CACHE}')
