# Entrypoint for running the FastAPI application.

import logging

import uvicorn

from summarizer_backend.settings import get_settings, load_dotenv_if_present


def main() -> None:
    """Start the FastAPI server using uvicorn."""
    load_dotenv_if_present()
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(
        "summarizer_backend.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
