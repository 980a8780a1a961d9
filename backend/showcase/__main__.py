"""Run the API with uvicorn: `python -m showcase`."""

import uvicorn

from showcase.config import settings


def main() -> None:
    uvicorn.run(
        "showcase.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
