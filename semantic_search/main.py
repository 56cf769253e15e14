import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.content import router as content_router
from .core.config import (
    EMBEDDING_MODEL,
    CONTENT_TABLE,
    MATCH_FUNCTION,
    LOG_LEVEL,
    HOST,
    PORT,
)
from .core.errors import ConfigurationError
from .services.pipeline import SemanticSearch

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app(service: Optional[SemanticSearch] = None) -> FastAPI:
    """
    Build the API. When `service` is given it is used as is (tests, embedding
    in another process); otherwise one is wired around a shared HTTP client
    that lives as long as the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service is not None:
            yield
            return

        async with httpx.AsyncClient() as client:
            app.state.semantic_search = SemanticSearch.from_config(client)
            logging.info(f"[Startup] Embedding model: {EMBEDDING_MODEL}, match function: {MATCH_FUNCTION}")
            yield
        logging.info("[Shutdown] HTTP client closed")

    app = FastAPI(
        title="Semantic Search API",
        version="1.0",
        description="Store free-text content and retrieve it by meaning",
        lifespan=lifespan,
    )
    if service is not None:
        app.state.semantic_search = service

    app.include_router(content_router, prefix="/api")

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        # Fatal for the deployment: still answered with the usual error envelope
        logging.critical(f"[Config] {exc.kind}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "error": exc.to_detail()},
        )

    @app.get("/")
    def root():
        return {
            "status": "ok",
            "embedding_model": EMBEDDING_MODEL,
            "table": CONTENT_TABLE,
            "match_function": MATCH_FUNCTION,
        }

    return app


app = create_app()


# -------- Run the server --------
if __name__ == "__main__":
    import uvicorn
    print(f"Starting Semantic Search API on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
