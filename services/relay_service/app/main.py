"""Relay service main module.

Forwards prompts to the configured LLM providers in priority order and
returns the first successful completion.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .logic.failover import FailoverOrchestrator
from .logic.providers import build_adapters
from .middleware import BodySizeLimitMiddleware
from .routers import relay

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(adapters: Optional[List] = None) -> FastAPI:
    if adapters is None:
        adapters = build_adapters(config.RELAY_PROVIDERS)
    # Raises on an empty adapter list, so a bad config stops startup
    orchestrator = FailoverOrchestrator(adapters)

    app = FastAPI(title="LLM Relay", version="0.1.0")
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_middleware(BodySizeLimitMiddleware)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        # Malformed JSON or a non-string prompt is a client error, like a missing prompt
        logger.warning("Rejected request body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": "Prompt is required in request body"})

    app.include_router(relay.router)
    if len(orchestrator.adapters) > 1:
        app.include_router(relay.test_router)

    for adapter in orchestrator.adapters:
        logger.info("Provider %s: %s", adapter.name, adapter.model or "custom")
    logger.info("Failover order: %s", " -> ".join(orchestrator.provider_names))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
