"""
Run the API server.

Run with: python -m transit_delay
"""

import uvicorn

from transit_delay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "transit_delay.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.server_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
