"""Entrypoint: serve the API with uvicorn."""

import uvicorn

from src.api.routes import create_app
from src.config import HOST, PORT

app = create_app()


def run() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
