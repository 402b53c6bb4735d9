"""Exceptions raised by the CodeDeploy steps.

Every error is raised to the immediate caller. Argument and target
validation errors are ``ValueError`` subclasses so pipelines can tell a
misconfiguration apart from a ``RemoteServiceError``.
"""

from enum import Enum


class CodeDeployStepError(Exception):
    """Base class for all step errors."""


class InvalidArgumentError(CodeDeployStepError, ValueError):
    """Raised when a required parameter is missing or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} must not be null or empty")


class TargetKind(Enum):
    """Kinds of CodeDeploy entities checked before a deployment."""
    APPLICATION = "application"
    DEPLOYMENT_GROUP = "deploymentGroup"


class ValidationError(CodeDeployStepError, ValueError):
    """Raised when an application or deployment group does not exist."""

    def __init__(self, kind: TargetKind, name: str):
        self.kind = kind
        self.name = name
        label = "application" if kind is TargetKind.APPLICATION else "deployment group"
        super().__init__(f"Cannot find {label} named '{name}'")


class RemoteServiceError(CodeDeployStepError):
    """Raised when a call to CodeDeploy fails.

    The botocore exception is kept as ``original`` and chained as
    ``__cause__``.
    """

    def __init__(self, operation: str, original: Exception | None = None):
        self.operation = operation
        self.original = original
        detail = f": {original}" if original is not None else ""
        super().__init__(f"CodeDeploy {operation} failed{detail}")

    @property
    def error_code(self) -> str | None:
        """AWS error code of the underlying ClientError, if any."""
        response = getattr(self.original, "response", None)
        if isinstance(response, dict):
            return response.get("Error", {}).get("Code")
        return None


class UnknownRegionError(CodeDeployStepError, ValueError):
    """Raised when a region is not present in the partition metadata."""

    def __init__(self, region: str):
        self.region = region
        super().__init__(f"Unknown region: '{region}'")


class UnknownStepError(CodeDeployStepError, KeyError):
    """Raised when no step is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown step: '{self.name}'"
