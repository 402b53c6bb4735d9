"""Pipeline step registry.

Maps each step function name to its display metadata, parameter model and
handler. Handlers receive the CodeDeploy client and the progress sink
explicitly and expose a single ``execute(params)`` method.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from codedeploy_steps.models.api_models import CreateDeploymentParams, RegisterRevisionParams
from codedeploy_steps.services.codedeploy_client import CodeDeployClientInterface
from codedeploy_steps.services.create_deployment import DeploymentCreator
from codedeploy_steps.services.errors import UnknownStepError
from codedeploy_steps.services.progress import ProgressSink
from codedeploy_steps.services.register_revision import RevisionRegistrar


logger = logging.getLogger(__name__)


class StepHandler(ABC):
    """Executes one pipeline step against CodeDeploy."""

    def __init__(self, client: CodeDeployClientInterface, sink: ProgressSink):
        self.client = client
        self.sink = sink

    @abstractmethod
    def execute(self, params: BaseModel) -> str:
        """Run the step and return its result string."""
        pass


class RegisterRevisionHandler(StepHandler):
    """Handler for cdRegisterRevision."""

    def execute(self, params: RegisterRevisionParams) -> str:
        registrar = RevisionRegistrar(self.client, self.sink)
        return registrar.register(params.application_name, params.bucket_name, params.key)


class CreateDeploymentHandler(StepHandler):
    """Handler for cdCreateDeployment."""

    def execute(self, params: CreateDeploymentParams) -> str:
        creator = DeploymentCreator(self.client, self.sink)
        return creator.create_deployment(
            params.application_name,
            params.deployment_group_name,
            params.bucket_name,
            params.key,
        )


@dataclass(frozen=True)
class StepDefinition:
    """Registered pipeline step.

    Attributes:
        function_name: Name the pipeline invokes the step by
        display_name: Human-readable description
        params_model: Pydantic model parsing the step parameters
        handler_class: StepHandler subclass running the step
    """
    function_name: str
    display_name: str
    params_model: type[BaseModel]
    handler_class: type[StepHandler]

    @property
    def parameters(self) -> list[str]:
        """Parameter names as the pipeline spells them."""
        return [
            field.alias or name
            for name, field in self.params_model.model_fields.items()
        ]


STEP_REGISTRY: dict[str, StepDefinition] = {
    step.function_name: step
    for step in (
        StepDefinition(
            function_name="cdRegisterRevision",
            display_name="Register a revision of an application from S3",
            params_model=RegisterRevisionParams,
            handler_class=RegisterRevisionHandler,
        ),
        StepDefinition(
            function_name="cdCreateDeployment",
            display_name="Create a deployment of an application to a deployment group",
            params_model=CreateDeploymentParams,
            handler_class=CreateDeploymentHandler,
        ),
    )
}


def get_step(name: str) -> StepDefinition:
    """Look up a registered step.

    Raises:
        UnknownStepError: If no step is registered under the name
    """
    try:
        return STEP_REGISTRY[name]
    except KeyError:
        raise UnknownStepError(name) from None


def run_step(
    name: str,
    params: Mapping[str, Any] | BaseModel,
    client: CodeDeployClientInterface,
    sink: ProgressSink,
) -> str:
    """Run a registered step.

    Args:
        name: Step function name, e.g. ``cdCreateDeployment``
        params: Raw parameter mapping or an already parsed parameter model
        client: CodeDeploy client the step talks to
        sink: Progress sink for status lines

    Returns:
        The step result string
    """
    step = get_step(name)
    if not isinstance(params, step.params_model):
        params = step.params_model.model_validate(dict(params))
    logger.debug("Running step %s", name)
    return step.handler_class(client, sink).execute(params)
