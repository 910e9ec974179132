import pytest

from zerox_actions.providers.zerox_v2 import ZeroXProviderV2


@pytest.fixture()
def zerox_provider(aiohttp_session, config):
    return ZeroXProviderV2(config=config, session=aiohttp_session)
