from unittest.mock import Mock

import pytest

from zerox_actions.clients.apm_client import ApmClient
from zerox_actions.config import Config
from zerox_actions.tests.fixtures import *  # noqa: F401, F403


@pytest.fixture()
def config() -> Config:
    return Config(
        ZERO_EX_API_KEY='test-api-key',
        PRICE_RETRY_ATTEMPTS=6,
        PRICE_RETRY_DELAY=5,
        PRICE_INQUIRY_CHAIN_ID=8453,
    )


@pytest.fixture()
def apm_client() -> Mock:
    return Mock(spec=ApmClient)
