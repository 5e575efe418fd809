from __future__ import annotations

import uvicorn

from .config import settings


def main() -> None:
    # log_config=None keeps the handlers installed by setup_logging().
    uvicorn.run("homepulse.api_server:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
