import fastapi
from pydantic import BaseModel, ConfigDict

from zerox_actions.clients.apm_client import ApmClient
from zerox_actions.config import Config
from zerox_actions.providers.zerox_v2 import ZeroXProviderV2
from zerox_actions.services.price_inquiry import PriceInquiryService
from zerox_actions.services.token_registry import TokenRegistry


class Dependencies(BaseModel):
    """
    Holds the dependencies that should exist for the lifetime of the application.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra='forbid', frozen=True)

    config: Config
    apm_client: ApmClient
    token_registry: TokenRegistry
    zerox_provider: ZeroXProviderV2
    price_inquiry_service: PriceInquiryService

    def register(self, app: fastapi.FastAPI):
        """
        Registers itself in the application.
        """
        app.state.dependencies = self


def _get(request: fastapi.Request) -> Dependencies:
    return request.app.state.dependencies


def config(request: fastapi.Request) -> Config:
    return _get(request).config


def token_registry(request: fastapi.Request) -> TokenRegistry:
    return _get(request).token_registry


def price_inquiry_service(request: fastapi.Request) -> PriceInquiryService:
    return _get(request).price_inquiry_service
