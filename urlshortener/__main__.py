"""Run the URL shortener with uvicorn: ``python -m urlshortener``."""

import uvicorn

from urlshortener.core.config import settings


def main() -> None:
    uvicorn.run(
        "urlshortener.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_config=None,  # loguru takes over in the app lifespan
    )


if __name__ == "__main__":
    main()
