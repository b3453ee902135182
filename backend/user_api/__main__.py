"""Process entry point — `python -m user_api` serves the API with uvicorn."""

import uvicorn

from user_api.config import get_settings
from user_api.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,  # logging configured by the app lifespan
    )


if __name__ == "__main__":
    main()
