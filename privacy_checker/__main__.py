"""Serve the API with uvicorn: ``python -m privacy_checker``."""

import uvicorn

from privacy_checker.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "privacy_checker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level_numeric,
    )


if __name__ == "__main__":
    main()
