# Core Services
from codedeploy_steps.services.errors import (
    CodeDeployStepError,
    InvalidArgumentError,
    RemoteServiceError,
    TargetKind,
    UnknownRegionError,
    UnknownStepError,
    ValidationError,
)
from codedeploy_steps.services.codedeploy_client import (
    CodeDeployClient,
    CodeDeployClientInterface,
    InMemoryCodeDeployClient,
    get_codedeploy_client,
)
from codedeploy_steps.services.progress import (
    CollectingProgressSink,
    LoggingProgressSink,
    ProgressSink,
    StreamProgressSink,
)
from codedeploy_steps.services.register_revision import RevisionRegistrar
from codedeploy_steps.services.create_deployment import DeploymentCreator
from codedeploy_steps.services.iam_roles import is_valid_role_arn, partition_for_region
from codedeploy_steps.services.steps import (
    STEP_REGISTRY,
    CreateDeploymentHandler,
    RegisterRevisionHandler,
    StepDefinition,
    StepHandler,
    get_step,
    run_step,
)

__all__ = [
    "CodeDeployStepError",
    "InvalidArgumentError",
    "RemoteServiceError",
    "TargetKind",
    "UnknownRegionError",
    "UnknownStepError",
    "ValidationError",
    "CodeDeployClient",
    "CodeDeployClientInterface",
    "InMemoryCodeDeployClient",
    "get_codedeploy_client",
    "CollectingProgressSink",
    "LoggingProgressSink",
    "ProgressSink",
    "StreamProgressSink",
    "RevisionRegistrar",
    "DeploymentCreator",
    "is_valid_role_arn",
    "partition_for_region",
    "STEP_REGISTRY",
    "CreateDeploymentHandler",
    "RegisterRevisionHandler",
    "StepDefinition",
    "StepHandler",
    "get_step",
    "run_step",
]
