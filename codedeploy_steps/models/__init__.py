# Data Models

from codedeploy_steps.models.api_models import (
    CreateDeploymentParams,
    RegisterRevisionParams,
    StepInfo,
    StepListResponse,
    StepResponse,
)

from codedeploy_steps.models.revision import (
    BundleType,
    DeploymentRequest,
    RevisionLocation,
    RevisionRegistration,
    RevisionType,
    build_revision_location,
)

__all__ = [
    "BundleType",
    "CreateDeploymentParams",
    "DeploymentRequest",
    "RegisterRevisionParams",
    "RevisionLocation",
    "RevisionRegistration",
    "RevisionType",
    "StepInfo",
    "StepListResponse",
    "StepResponse",
    "build_revision_location",
]
