"""Serve the API with uvicorn on HOST:PORT from the environment."""

import uvicorn

from kijani.core.config import Settings
from kijani.main import create_app


def main() -> None:
    settings = Settings()  # type: ignore[call-arg]
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
