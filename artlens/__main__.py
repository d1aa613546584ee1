"""Server entry point: python -m artlens"""

from __future__ import annotations

import uvicorn

from artlens.config import ArtLensConfig
from artlens.observability.logging import setup_logging


def main() -> None:
    config = ArtLensConfig.from_yaml()
    setup_logging(config.log_level)

    uvicorn.run(
        "artlens.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
