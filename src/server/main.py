"""FastAPI application serving the documentation corpus."""

from pathlib import Path

from fastapi import FastAPI

from docsite.config import DOCSITE_CONTENT_PATH
from docsite.utils.logging_config import get_logger
from server.routers.docs import router as docs_router

logger = get_logger(__name__)


def create_app(content_root: Path | None = None) -> FastAPI:
    """Create the API app for ``content_root`` (defaults to ``DOCSITE_CONTENT_PATH``)."""
    app = FastAPI(title="docsite", description="Documentation content API")
    app.state.content_root = Path(content_root or DOCSITE_CONTENT_PATH).expanduser().resolve()
    app.include_router(docs_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("Serving docs", extra={"content_root": str(app.state.content_root)})
    return app


app = create_app()
