"""Run the API with uvicorn: ``python -m forum_service``."""

import uvicorn

from forum_service.config.settings import settings


def main() -> None:
    uvicorn.run(
        "forum_service.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_config=None,  # logging is configured from logging_config.yaml in the app lifespan
    )


if __name__ == "__main__":
    main()
