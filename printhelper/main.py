"""
PrintHelper entrypoint - runs uvicorn server.
"""

import uvicorn

from printhelper.app import build_app
from printhelper.config import get_settings


def main() -> None:
    """Run the PrintHelper server."""
    settings = get_settings()
    app = build_app(settings)

    print(f"Starting PrintHelper on http://{settings.host}:{settings.port}")
    print(f"Print a receipt: POST http://{settings.host}:{settings.port}/print")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
