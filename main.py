"""FastAPI application exposing CodeDeploy pipeline steps."""

import logging
import os
import sys
import time
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from codedeploy_steps.api.routes import router as api_router

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
# botocore logs request signing and retries at DEBUG
logging.getLogger("botocore").setLevel(logging.INFO)

logger = logging.getLogger(__name__)


class StepTimingMiddleware(BaseHTTPMiddleware):
    """Logs each step invocation with its status and duration."""

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/api/v1/steps/"):
            return await call_next(request)

        step_name = request.url.path.rsplit("/", 1)[-1]
        start_time = time.time()
        response = await call_next(request)
        logger.info(
            "Step %s -> %s (%.3fs)", step_name, response.status_code, time.time() - start_time
        )
        return response


app = FastAPI(
    title="CodeDeploy Pipeline Steps",
    description="Register S3 revisions and create deployments with AWS CodeDeploy",
    version="0.1.0",
)

app.add_middleware(StepTimingMiddleware)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render errors the step routes do not map as 500."""
    logger.exception("Unexpected error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {exc}"},
    )


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
