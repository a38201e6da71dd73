"""Run the docs API with uvicorn: ``python -m server``."""

import uvicorn

from docsite.config import DOCSITE_CONTENT_PATH, DOCSITE_LOG_LEVEL
from docsite.utils.logging_config import configure_logging, get_logger
from server.server_config import HOST, PORT, RELOAD


def main() -> None:
    configure_logging(DOCSITE_LOG_LEVEL)
    logger = get_logger("server")
    logger.info(
        "Starting docsite server",
        extra={"host": HOST, "port": PORT, "reload": RELOAD, "content_root": str(DOCSITE_CONTENT_PATH)},
    )
    # Our handler is already installed on the root logger.
    uvicorn.run("server.main:app", host=HOST, port=PORT, reload=RELOAD, log_config=None)


if __name__ == "__main__":
    main()
