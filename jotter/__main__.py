"""Run the API with `python -m jotter`."""

import uvicorn

from jotter.config import settings


def main() -> None:
    uvicorn.run(
        "jotter.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
