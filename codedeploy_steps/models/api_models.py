"""Pydantic models for step parameters and API responses."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRevisionParams(BaseModel):
    """Parameters of the cdRegisterRevision step.

    Fields are optional here; missing or empty values are rejected by the
    step itself so the error names the offending parameter.
    """
    model_config = ConfigDict(populate_by_name=True)

    application_name: str | None = Field(default=None, alias="applicationName")
    bucket_name: str | None = Field(default=None, alias="bucketName")
    key: str | None = None


class CreateDeploymentParams(BaseModel):
    """Parameters of the cdCreateDeployment step."""
    model_config = ConfigDict(populate_by_name=True)

    application_name: str | None = Field(default=None, alias="applicationName")
    deployment_group_name: str | None = Field(default=None, alias="deploymentGroupName")
    bucket_name: str | None = Field(default=None, alias="bucketName")
    key: str | None = None


class StepResponse(BaseModel):
    """Response model for step execution endpoint."""
    step: str
    result: str
    messages: list[str] = []


class StepInfo(BaseModel):
    """Registered step description."""
    function_name: str
    display_name: str
    parameters: list[str]


class StepListResponse(BaseModel):
    """Response model for list steps endpoint."""
    steps: list[StepInfo]
    count: int
