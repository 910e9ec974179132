from zerox_actions.actions.base_action import BaseAction
from zerox_actions.actions.get_indicative_price import GetIndicativePriceAction

__all__ = ['BaseAction', 'GetIndicativePriceAction', 'get_plugin']


def get_plugin(*actions: BaseAction) -> dict:
    """Plugin definition handed to the agent runtime."""
    return {
        'name': '0x',
        'description': '0x swap API price actions',
        'actions': list(actions),
    }
