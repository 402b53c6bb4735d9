"""FastAPI routes exposing the CodeDeploy pipeline steps."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError as ParamsValidationError

from codedeploy_steps.models.api_models import StepInfo, StepListResponse, StepResponse
from codedeploy_steps.services.codedeploy_client import (
    CodeDeployClientInterface,
    get_codedeploy_client,
)
from codedeploy_steps.services.errors import (
    InvalidArgumentError,
    RemoteServiceError,
    UnknownStepError,
    ValidationError,
)
from codedeploy_steps.services.progress import CollectingProgressSink
from codedeploy_steps.services.steps import STEP_REGISTRY, get_step, run_step

logger = logging.getLogger(__name__)

router = APIRouter()


def codedeploy_client() -> CodeDeployClientInterface:
    """Dependency providing a CodeDeploy client for the current environment."""
    return get_codedeploy_client()


@router.get("/steps", response_model=StepListResponse)
def list_steps() -> StepListResponse:
    """List the registered pipeline steps."""
    steps = [
        StepInfo(
            function_name=step.function_name,
            display_name=step.display_name,
            parameters=step.parameters,
        )
        for step in STEP_REGISTRY.values()
    ]
    return StepListResponse(steps=steps, count=len(steps))


@router.post("/steps/{step_name}", response_model=StepResponse)
def execute_step(
    step_name: str,
    params: dict[str, Any] | None = Body(default=None),
    client: CodeDeployClientInterface = Depends(codedeploy_client),
) -> StepResponse:
    """Run a pipeline step synchronously.

    Status codes:
    - 404: unknown step, or application / deployment group not found
    - 400: missing or empty parameter
    - 422: malformed parameters
    - 502: CodeDeploy call failed
    """
    try:
        step = get_step(step_name)
    except UnknownStepError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        parsed = step.params_model.model_validate(params or {})
    except ParamsValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    sink = CollectingProgressSink()
    try:
        result = run_step(step_name, parsed, client, sink)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RemoteServiceError as e:
        logger.warning("Step %s failed: %s", step_name, e)
        raise HTTPException(status_code=502, detail=str(e))

    logger.info("Step %s finished: %s", step_name, result)
    return StepResponse(step=step_name, result=result, messages=sink.lines)
