"""Simple entrypoint to run the Outfit Log backend locally."""

import uvicorn

from outfit_log.config import OutfitLogConfig
from server.api import get_app


def main() -> None:
    config = OutfitLogConfig.from_env()
    uvicorn.run(get_app(), host=config.host, port=config.port, reload=False)


if __name__ == "__main__":
    main()
