import pydantic
from elasticapm.contrib.starlette import ElasticAPM
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from zerox_actions.clients.apm_client import ApmClient
from zerox_actions.config import Config
from zerox_actions.providers.zerox_v2 import ZeroXProviderV2
from zerox_actions.rest_api import dependencies
from zerox_actions.rest_api.middlewares import RouteLoggerMiddleware
from zerox_actions.rest_api.routes.chains import chains_route
from zerox_actions.rest_api.routes.price import price_route
from zerox_actions.services.price_inquiry import PriceInquiryService
from zerox_actions.services.token_registry import TokenListClient, TokenRegistry
from zerox_actions.utils.httputils import setup_client_session, teardown_client_session
from zerox_actions.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(config: Config):
    app = FastAPI(
        title='0x Price Actions API',
        description=(
            """Indicative swap prices from the 0x swap API. Token symbols are resolved
            against a per-chain token list and failed price requests are retried."""
        ),
        version=config.VERSION,
        docs_url='/',
        redoc_url='/docs',
    )

    # Setup and register dependencies.
    apm_client = ApmClient(config)
    token_registry = TokenRegistry(
        loader=TokenListClient(config),
    )
    zerox_provider = ZeroXProviderV2(config=config)
    price_inquiry_service = PriceInquiryService(
        config=config,
        token_registry=token_registry,
        provider=zerox_provider,
    )
    deps = dependencies.Dependencies(
        config=config,
        apm_client=apm_client,
        token_registry=token_registry,
        zerox_provider=zerox_provider,
        price_inquiry_service=price_inquiry_service,
    )
    deps.register(app)

    # Setup and register middlewares and routes.
    register_cors(app, config)
    register_gzip(app)
    register_route(app, config)
    register_route_logging(app)
    if config.APM_ENABLED:
        register_elastic_apm(app, apm_client)

    # Common RFC 5741 Exceptions handling, https://tools.ietf.org/html/rfc5741#section-2
    @app.exception_handler(Exception)
    async def http_exception_handler(request: Request, exc):
        exception_dict = {
            "type": "Internal Server Error",
            "title": exc.__class__.__name__,
            "instance": f"{config.SERVER_HOST}{request.url.path}",
            "detail": f"{exc.__class__.__name__} at {str(exc)} when executing {request.method} request",
        }
        logger.error(
            "Exception when %s: %s",
            exception_dict["instance"],
            exception_dict["detail"],
        )
        return JSONResponse(exception_dict, status_code=500)

    @app.exception_handler(pydantic.ValidationError)
    async def handle_validation_error(
        request: Request, exc: pydantic.ValidationError
    ):  # pylint: disable=unused-argument
        """
        Handles validation errors.
        """
        return JSONResponse({"message": exc.errors()}, status_code=422)

    @app.on_event("startup")
    async def startup_event():
        await setup_client_session()

    @app.on_event("shutdown")
    async def shutdown_event():
        await teardown_client_session()

    @app.get("/health_check", include_in_schema=False)
    def health_check():
        """
        Health check
        ---
        tags:
            - util
        responses:
            200:
                description: Returns "OK"
        """
        return Response("OK")

    return app


def register_route(app: FastAPI, config: Config):
    prefix = f'/v{config.API_VERSION}'
    app.include_router(chains_route, prefix=f'{prefix}/chains', tags=['Chains'])
    app.include_router(price_route, prefix=f'{prefix}/price', tags=['Price'])


def register_cors(app: FastAPI, config: Config):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_CREDENTIALS,
        allow_methods=config.CORS_METHODS,
        allow_headers=config.CORS_HEADERS,
    )


def register_gzip(app: FastAPI):
    app.add_middleware(GZipMiddleware, minimum_size=1000)


def register_route_logging(app: FastAPI):
    app.add_middleware(RouteLoggerMiddleware, skip_routes=['/health_check'])


def register_elastic_apm(app: FastAPI, apm_client: ApmClient):
    app.add_middleware(ElasticAPM, client=apm_client.client)
