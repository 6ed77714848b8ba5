from __future__ import annotations

import uvicorn

from tableorder.infrastructure.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tableorder.api.main:app",
        host=settings.http_host,
        port=settings.http_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
