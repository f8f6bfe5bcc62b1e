import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..logic.failover import FailoverOrchestrator
from ..logic.health import check_health, utc_timestamp
from ..schemas.relay import PromptRequest

logger = logging.getLogger(__name__)

router = APIRouter()
# Only mounted when more than one provider is configured
test_router = APIRouter()

TEST_PROMPT = "Say hello in one sentence"


def get_orchestrator(request: Request) -> FailoverOrchestrator:
    return request.app.state.orchestrator


def _is_single(orchestrator: FailoverOrchestrator) -> bool:
    return len(orchestrator.adapters) == 1


@router.get("/")
async def info(orchestrator: FailoverOrchestrator = Depends(get_orchestrator)):
    names = orchestrator.provider_names
    if _is_single(orchestrator):
        return {
            "message": f"{names[0]} relay server is running",
            "provider": names[0],
            "status": "Ready",
        }
    return {
        "message": "Multi-API relay server is running",
        "availableProviders": names,
        "status": "Ready",
        "features": [
            "Auto-switching between providers",
            "Quota limit detection",
            "Authentication error handling",
            "CORS enabled for allowed origins",
            "Enhanced error reporting",
        ],
        "endpoints": {
            "POST /": "Send AI prompts",
            "GET /health": "Check provider health",
            "GET /test": "Quick test endpoint",
        },
    }


@router.post("/")
async def submit_prompt(
    req: Optional[PromptRequest] = None,
    orchestrator: FailoverOrchestrator = Depends(get_orchestrator),
):
    try:
        if req is None or not req.prompt:
            return JSONResponse(status_code=400, content={"error": "Prompt is required in request body"})

        logger.info("Received prompt: %s...", req.prompt[:100])
        outcome = await orchestrator.run(req.prompt)
        single = _is_single(orchestrator)

        if outcome.success:
            if single:
                return JSONResponse(status_code=200, content={"bot": outcome.data})
            return JSONResponse(
                status_code=200,
                content={"bot": outcome.data, "provider": outcome.provider, "status": "success"},
            )
        if single:
            return JSONResponse(status_code=500, content={"error": outcome.error})
        return JSONResponse(
            status_code=500,
            content={"error": outcome.error, "provider": outcome.provider, "status": "failed"},
        )
    except Exception as exc:
        logger.exception("Server Error")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
        )


@router.get("/health")
async def health(orchestrator: FailoverOrchestrator = Depends(get_orchestrator)):
    report = await check_health(orchestrator.adapters)
    if _is_single(orchestrator):
        name = orchestrator.provider_names[0]
        return {
            "server": report.server,
            "timestamp": report.timestamp,
            name.lower(): report.providers[name],
        }
    return report.model_dump()


@test_router.get("/test")
async def quick_test(orchestrator: FailoverOrchestrator = Depends(get_orchestrator)):
    try:
        logger.info("Running quick test...")
        result = await orchestrator.run(TEST_PROMPT)
        return {
            "testStatus": "PASSED" if result.success else "FAILED",
            "provider": result.provider,
            "response": result.data if result.success else result.error,
            "timestamp": utc_timestamp(),
        }
    except Exception as exc:
        logger.exception("Quick test failed")
        return JSONResponse(
            status_code=500,
            content={"testStatus": "ERROR", "error": str(exc), "timestamp": utc_timestamp()},
        )
