from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from zerox_actions.models.price_models import IndicativePriceResponse
from zerox_actions.providers.zerox_v2 import ZeroXProviderV2
from zerox_actions.rest_api.create_app import create_app
from zerox_actions.rest_api.dependencies import Dependencies
from zerox_actions.services.price_inquiry import PriceInquiryService


@pytest.fixture()
def zerox_provider_mock():
    provider = Mock(spec=ZeroXProviderV2)
    provider.fetch_price = AsyncMock(return_value=IndicativePriceResponse(
        sellAmount='1000000000000000000', buyAmount='2500000000',
    ))
    return provider


@pytest.fixture()
def api_client(config, token_registry, apm_client, zerox_provider_mock):
    app = create_app(config)
    Dependencies(
        config=config,
        apm_client=apm_client,
        token_registry=token_registry,
        zerox_provider=zerox_provider_mock,
        price_inquiry_service=PriceInquiryService(
            config=config,
            token_registry=token_registry,
            provider=zerox_provider_mock,
            sleep=AsyncMock(),
        ),
    ).register(app)
    with TestClient(app) as client:
        yield client
