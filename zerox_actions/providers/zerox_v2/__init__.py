from zerox_actions.providers.zerox_v2.zerox_provider import PriceRoute, ZeroXProviderV2

__all__ = ['PriceRoute', 'ZeroXProviderV2']
