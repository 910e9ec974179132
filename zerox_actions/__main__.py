import uvicorn

from zerox_actions.config import config


def main() -> None:
    """Entrypoint of the application."""
    uvicorn.run(
        "zerox_actions.rest_api.run:app",
        workers=config.WORKERS_COUNT,
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        reload=config.RELOAD,
        log_level=config.LOGGING_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
